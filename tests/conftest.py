# ABOUTME: Shared fixtures for skill-porter tests
# ABOUTME: Builders write minimal skill and extension directories into tmp_path
import json
from pathlib import Path

import pytest

DESCRIPTION = "Query and manage PostgreSQL databases through an MCP server with safe defaults"

SKILL_MD = f"""---
name: db-helper
description: {DESCRIPTION}
allowed-tools:
  - Read
  - Grep
  - Bash
---
# Database Helper

Use the db tools.
"""

MARKETPLACE = {
    "name": "db-helper-marketplace",
    "owner": {"name": "Jane", "email": "jane@example.com"},
    "metadata": {"description": DESCRIPTION, "version": "2.1.0"},
    "plugins": [
        {
            "name": "db-helper",
            "description": DESCRIPTION,
            "source": ".",
            "strict": False,
            "mcpServers": {
                "db": {
                    "command": "node",
                    "args": ["mcp-server/index.js", "--stdio"],
                    "env": {
                        "DB_HOST": "${DB_HOST}",
                        "DB_PASSWORD": "${DB_PASSWORD}",
                    },
                }
            },
        }
    ],
}

EXCLUDED_FOR_READ_GREP_BASH = [
    "Write",
    "Edit",
    "Glob",
    "Task",
    "WebFetch",
    "WebSearch",
    "TodoWrite",
    "AskUserQuestion",
    "SlashCommand",
    "Skill",
    "NotebookEdit",
    "BashOutput",
    "KillShell",
]

MANIFEST = {
    "name": "db-helper",
    "version": "2.1.0",
    "description": DESCRIPTION,
    "contextFileName": "GEMINI.md",
    "mcpServers": {
        "db": {
            "command": "node",
            "args": ["${extensionPath}/mcp-server/index.js"],
            "env": {"DB_HOST": "${DB_HOST}"},
        }
    },
    "excludeTools": EXCLUDED_FOR_READ_GREP_BASH,
    "settings": [
        {"name": "DB_HOST", "description": "Database server hostname", "default": "localhost"},
        {"name": "API_TOKEN", "description": "API token", "secret": True, "required": True},
    ],
}

GEMINI_MD = "# Database Helper\n\nUse the db tools.\n"


def write_skill(
    directory: Path,
    skill_md: str = SKILL_MD,
    marketplace: dict | None = MARKETPLACE,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "SKILL.md").write_text(skill_md)
    if marketplace is not None:
        plugin_dir = directory / ".claude-plugin"
        plugin_dir.mkdir(exist_ok=True)
        (plugin_dir / "marketplace.json").write_text(json.dumps(marketplace, indent=2))
    return directory


def write_extension(
    directory: Path,
    manifest: dict | None = MANIFEST,
    context: str | None = GEMINI_MD,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (directory / "gemini-extension.json").write_text(json.dumps(manifest, indent=2))
    if context is not None:
        name = (manifest or {}).get("contextFileName", "GEMINI.md")
        (directory / name).write_text(context)
    return directory


@pytest.fixture
def skill_dir(tmp_path: Path) -> Path:
    """A Claude skill named db-helper with a marketplace manifest."""
    return write_skill(tmp_path / "db-helper")


@pytest.fixture
def extension_dir(tmp_path: Path) -> Path:
    """A Gemini extension named db-helper with a context file."""
    return write_extension(tmp_path / "db-helper")


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Redirect the home directory to a scratch directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home_dir))
    return home_dir
