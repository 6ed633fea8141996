# Tests for Claude skill -> Gemini extension conversion
import json
from pathlib import Path

from conftest import DESCRIPTION, EXCLUDED_FOR_READ_GREP_BASH, MARKETPLACE, SKILL_MD, write_skill

from skillporter.converters.base import GEMINI_FOOTER
from skillporter.converters.claude_to_gemini import ClaudeToGeminiConverter
from skillporter.models import Platform
from skillporter.tools import ALL_TOOLS, APPROXIMATE_WARNING


def _manifest(directory: Path) -> dict:
    return json.loads((directory / "gemini-extension.json").read_text())


class TestClaudeToGemini:
    """End-to-end tests for ClaudeToGeminiConverter."""

    def test_converts_in_place(self, skill_dir: Path):
        """Test manifest, context and shared docs are written next to the skill."""
        result = ClaudeToGeminiConverter(skill_dir).convert()

        assert result.success, result.errors
        assert result.platform is Platform.GEMINI
        assert [p.relative_to(skill_dir).as_posix() for p in result.files] == [
            "gemini-extension.json",
            "GEMINI.md",
            "shared/reference.md",
            "shared/examples.md",
        ]
        assert result.warnings == []

    def test_manifest(self, skill_dir: Path):
        """Test every manifest field produced from the skill."""
        ClaudeToGeminiConverter(skill_dir).convert()

        assert _manifest(skill_dir) == {
            "name": "db-helper",
            "version": "2.1.0",
            "description": DESCRIPTION,
            "contextFileName": "GEMINI.md",
            "mcpServers": {
                "db": {
                    "command": "node",
                    "args": ["${extensionPath}/mcp-server/index.js", "--stdio"],
                    "env": {"DB_HOST": "${DB_HOST}", "DB_PASSWORD": "${DB_PASSWORD}"},
                }
            },
            "excludeTools": EXCLUDED_FOR_READ_GREP_BASH,
            "settings": [
                {"name": "DB_HOST", "description": "Database server hostname", "default": "localhost"},
                {"name": "DB_PASSWORD", "description": "Database password", "secret": True, "required": True},
            ],
        }

    def test_context_file(self, skill_dir: Path):
        """Test GEMINI.md carries banner, quick start, body and footer once each."""
        ClaudeToGeminiConverter(skill_dir).convert()
        context = (skill_dir / "GEMINI.md").read_text()

        assert context.startswith(f"# db-helper - Gemini CLI Extension\n\n{DESCRIPTION}\n\n## Quick Start")
        assert "# Database Helper\n\nUse the db tools.\n\n---\n\n" in context
        assert context.endswith(GEMINI_FOOTER + "\n")
        assert context.count("Quick Start") == 1

    def test_metadata(self, skill_dir: Path):
        """Test result metadata records mapping and settings count."""
        result = ClaudeToGeminiConverter(skill_dir).convert()

        assert result.metadata["source"]["frontmatter"]["name"] == "db-helper"
        assert result.metadata["tool_mapping"].exact
        assert result.metadata["settings_inferred"] == 2

    def test_without_marketplace(self, tmp_path: Path):
        """Test defaults when no marketplace exists."""
        directory = write_skill(tmp_path / "s", marketplace=None)

        result = ClaudeToGeminiConverter(directory).convert()
        manifest = _manifest(directory)

        assert result.success
        assert manifest["version"] == "1.0.0"
        assert "mcpServers" not in manifest
        assert "settings" not in manifest
        assert result.metadata["settings_inferred"] == 0

    def test_without_allowed_tools(self, tmp_path: Path):
        """Test no excludeTools is written when the skill doesn't restrict tools."""
        skill_md = f"---\nname: db-helper\ndescription: {DESCRIPTION}\n---\nBody\n"
        directory = write_skill(tmp_path / "s", skill_md=skill_md)

        ClaudeToGeminiConverter(directory).convert()
        assert "excludeTools" not in _manifest(directory)

    def test_large_whitelist_warns(self, tmp_path: Path):
        """Test the lossy whitelist case emits [] and a warning."""
        tools = "\n".join(f"  - {tool}" for tool in ALL_TOOLS[:8])
        skill_md = f"---\nname: db-helper\ndescription: {DESCRIPTION}\nallowed-tools:\n{tools}\n---\nBody\n"
        directory = write_skill(tmp_path / "s", skill_md=skill_md)

        result = ClaudeToGeminiConverter(directory).convert()

        assert result.success
        assert _manifest(directory)["excludeTools"] == []
        assert APPROXIMATE_WARNING in result.warnings

    def test_unknown_tool_warns(self, tmp_path: Path):
        """Test tools outside the universe are reported."""
        skill_md = f"---\nname: db-helper\ndescription: {DESCRIPTION}\nallowed-tools: Read, Teleport\n---\n"
        directory = write_skill(tmp_path / "s", skill_md=skill_md)

        result = ClaudeToGeminiConverter(directory).convert()

        assert any("Teleport" in warning for warning in result.warnings)
        assert "Teleport" not in _manifest(directory)["excludeTools"]

    def test_separate_output(self, skill_dir: Path, tmp_path: Path):
        """Test writing into another directory leaves the source untouched."""
        output = tmp_path / "out"
        result = ClaudeToGeminiConverter(skill_dir, output).convert()

        assert result.success
        assert (output / "gemini-extension.json").is_file()
        assert not (skill_dir / "gemini-extension.json").exists()
        assert (skill_dir / "SKILL.md").read_text() == SKILL_MD

    def test_warns_when_mcp_server_not_copied(self, skill_dir: Path, tmp_path: Path):
        """Test a separate output without mcp-server/ is flagged."""
        (skill_dir / "mcp-server").mkdir()
        result = ClaudeToGeminiConverter(skill_dir, tmp_path / "out").convert()

        assert result.success
        assert any("mcp-server/ was not copied" in warning for warning in result.warnings)

    def test_missing_skill_fails(self, tmp_path: Path):
        """Test a missing SKILL.md becomes a failed result."""
        result = ClaudeToGeminiConverter(tmp_path).convert()

        assert not result.success
        assert result.errors == ["Missing required file: SKILL.md"]
        assert result.files == []

    def test_missing_name_fails(self, tmp_path: Path):
        """Test frontmatter without a name is rejected."""
        directory = write_skill(tmp_path / "s", skill_md="---\ndescription: x\n---\n")

        result = ClaudeToGeminiConverter(directory).convert()

        assert not result.success
        assert "missing required field: name" in result.errors[0]

    def test_non_utf8_skill_fails(self, tmp_path: Path):
        """Test an undecodable SKILL.md becomes a failed result."""
        (tmp_path / "SKILL.md").write_bytes(b"---\nname: x\ndescription: \xff\n---\nbody\n")

        result = ClaudeToGeminiConverter(tmp_path).convert()

        assert not result.success
        assert len(result.errors) == 1
        assert result.errors[0].startswith("SKILL.md is not valid UTF-8")
        assert not (tmp_path / "gemini-extension.json").exists()

    def test_non_utf8_marketplace_fails(self, tmp_path: Path):
        """Test an undecodable marketplace.json becomes a failed result."""
        directory = write_skill(tmp_path / "s", marketplace=None)
        (directory / ".claude-plugin").mkdir()
        (directory / ".claude-plugin" / "marketplace.json").write_bytes(b'{"name": "\xff"}')

        result = ClaudeToGeminiConverter(directory).convert()

        assert not result.success
        assert result.errors[0].startswith("marketplace.json is not valid UTF-8")

    def test_invalid_marketplace_fails(self, tmp_path: Path):
        """Test an invalid marketplace stops the conversion."""
        directory = write_skill(tmp_path / "s", marketplace=None)
        (directory / ".claude-plugin").mkdir()
        (directory / ".claude-plugin" / "marketplace.json").write_text("{")

        result = ClaudeToGeminiConverter(directory).convert()

        assert not result.success
        assert result.errors[0].startswith("Invalid JSON in marketplace.json")

    def test_backups_of_overwritten_files(self, skill_dir: Path, tmp_path: Path):
        """Test a second run backs up the files it overwrites."""
        backup_dir = tmp_path / "backups"
        ClaudeToGeminiConverter(skill_dir, backup_dir=backup_dir).convert()
        assert not backup_dir.exists()

        result = ClaudeToGeminiConverter(skill_dir, backup_dir=backup_dir).convert()

        assert result.success
        assert len(result.metadata["backups"]) == 2
        assert len(list(backup_dir.iterdir())) == 2

    def test_preserves_extra_server_keys(self, tmp_path: Path):
        """Test server keys other than command/args/env are copied."""
        marketplace = json.loads(json.dumps(MARKETPLACE))
        marketplace["plugins"][0]["mcpServers"]["db"]["cwd"] = "mcp-server"
        directory = write_skill(tmp_path / "s", marketplace=marketplace)

        ClaudeToGeminiConverter(directory).convert()

        assert _manifest(directory)["mcpServers"]["db"]["cwd"] == "mcp-server"
