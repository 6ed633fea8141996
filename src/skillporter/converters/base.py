# Shared conversion machinery: output writing, boilerplate, shared docs
import logging
import re
from pathlib import Path
from typing import Any

from skillporter.config import PorterConfig
from skillporter.errors import PorterError
from skillporter.models import ConversionResult, Platform
from skillporter.platforms.base import MCP_SERVER_DIR, SHARED_DIR, write_json_file, write_text_file
from skillporter.utils.backup import create_backup

logger = logging.getLogger(__name__)

PROJECT_URL = "https://github.com/jduncan-rva/skill-porter"

GEMINI_TITLE_SUFFIX = "Gemini CLI Extension"
CLAUDE_TITLE_SUFFIX = "Claude Code Skill"

QUICK_START = (
    "## Quick Start\n\n"
    "After installation, you can use this extension by asking questions "
    "or giving commands naturally."
)

CONFIGURATION_HEADING = "## Configuration"
CONFIGURATION_INTRO = "This skill requires the following environment variables:"
CONFIGURATION_OUTRO = "Set these in your environment or Claude Code configuration."

GEMINI_FOOTER = (
    f"*This extension was converted from a Claude Code skill using [skill-porter]({PROJECT_URL})*"
)
CLAUDE_FOOTER = (
    f"*This skill was converted from a Gemini CLI extension using [skill-porter]({PROJECT_URL})*"
)

# ABOUTME: Placeholder docs written only when shared/ is entirely absent
SHARED_DOCS = {
    "reference.md": "# Technical Reference\n\nDetailed API documentation and technical reference.\n",
    "examples.md": "# Usage Examples\n\nComprehensive usage examples and tutorials.\n",
}

_TITLE = re.compile(
    r"^#[ \t]+.+?[ \t]+-[ \t]+(?:Gemini CLI Extension|Claude Code Skill)[ \t]*(?:\n+|$)"
)
_QUICK_START = re.compile(r"^##[ \t]+Quick Start\n+After installation[^\n]*(?:\n+|$)")
_CONFIGURATION = re.compile(
    r"^##[ \t]+Configuration\n+"
    + re.escape(CONFIGURATION_INTRO)
    + r"\n[\s\S]*?"
    + re.escape(CONFIGURATION_OUTRO)
    + r"(?:\n+|$)"
)
_FOOTER = re.compile(
    r"\n*(?:---[ \t]*\n+)?\*This (?:extension|skill) was converted from a "
    r"(?:Claude Code skill|Gemini CLI extension) using \[skill-porter\]\([^)]*\)\*\s*$"
)


def title_line(name: str, suffix: str) -> str:
    return f"# {name} - {suffix}"


def _strip_description(text: str, description: str) -> str:
    description = description.strip()
    if not description or not text.startswith(description):
        return text

    rest = text[len(description):]
    if rest == "" or rest.startswith("\n"):
        return rest.lstrip("\n")
    return text


def strip_conversion_boilerplate(content: str, description: str = "") -> str:
    """Remove text that an earlier conversion generated.

    ABOUTME: Strips banners, quick start, generated configuration and footers of both directions
    ABOUTME: Idempotent, so repeated conversions never accumulate boilerplate

    The description paragraph is only removed when it directly follows a
    generated title, since that is where a conversion placed it.

    Args:
        content: Body text of SKILL.md or the context file
        description: Document description, matched against the banner paragraph

    Returns:
        Cleaned text without leading or trailing blank lines
    """
    text = content.replace("\r\n", "\n")

    while True:
        stripped = _FOOTER.sub("", text)
        if stripped == text:
            break
        text = stripped

    text = text.strip()
    while True:
        before = text

        title = _TITLE.match(text)
        if title:
            text = _strip_description(text[title.end():].lstrip("\n"), description)

        text = _QUICK_START.sub("", text, count=1).lstrip("\n")
        text = _CONFIGURATION.sub("", text, count=1).lstrip("\n")

        if text == before:
            break

    return text.strip()


def ensure_shared_structure(output: Path) -> list[Path]:
    """Create shared/ with placeholder docs if it doesn't exist.

    ABOUTME: Never touches an existing shared/ directory, even an empty one
    ABOUTME: Returns the files created (empty when shared/ already existed)
    """
    shared_dir = output / SHARED_DIR
    if shared_dir.exists():
        return []

    shared_dir.mkdir(parents=True)
    created: list[Path] = []
    for file_name, content in SHARED_DOCS.items():
        path = shared_dir / file_name
        path.write_text(content, encoding="utf-8")
        created.append(path)

    logger.debug(f"Created shared documentation in {shared_dir}")
    return created


class BaseConverter:
    """Common conversion flow.

    ABOUTME: Subclasses implement _convert() and write through _write_text/_write_json
    ABOUTME: Output defaults to the source directory (in-place conversion)
    ABOUTME: Writes are not rolled back when a later step fails
    """

    source_platform: Platform
    target_platform: Platform

    def __init__(
        self,
        source: Path | str,
        output: Path | str | None = None,
        config: PorterConfig | None = None,
        backup_dir: Path | None = None,
    ) -> None:
        self.source = Path(source)
        self.output = Path(output) if output else self.source
        self.config = config if config is not None else PorterConfig()
        self.backup_dir = backup_dir

    def convert(self) -> ConversionResult:
        """Perform the conversion.

        ABOUTME: Structural failures end the run with success=False and the message in errors
        ABOUTME: Advisory findings are collected in warnings and don't block success

        Returns:
            ConversionResult with written files, warnings and errors
        """
        result = ConversionResult(platform=self.target_platform)

        try:
            self._convert(result)
            result.files.extend(ensure_shared_structure(self.output))
            self._check_mcp_server_dir(result)
            result.success = True
        except (PorterError, OSError) as e:
            logger.debug(f"Conversion of {self.source} failed: {e}")
            result.add_error(str(e))

        return result

    def _convert(self, result: ConversionResult) -> None:
        raise NotImplementedError

    def _check_mcp_server_dir(self, result: ConversionResult) -> None:
        if self.output.resolve() == self.source.resolve():
            return
        if (self.source / MCP_SERVER_DIR).is_dir() and not (self.output / MCP_SERVER_DIR).exists():
            result.add_warning(
                f"{MCP_SERVER_DIR}/ was not copied to {self.output}; copy it before installing"
            )

    def _target(self, relative: str, result: ConversionResult) -> Path:
        """Resolve an output path, backing up the file it would overwrite."""
        path = self.output / relative
        if self.backup_dir is not None and path.is_file():
            backup_path = create_backup(path, self.backup_dir, self.config.backup_keep)
            result.metadata.setdefault("backups", []).append(backup_path)
        return path

    def _write_text(self, relative: str, content: str, result: ConversionResult) -> Path:
        path = self._target(relative, result)
        write_text_file(path, content)
        result.files.append(path)
        logger.debug(f"Wrote {path}")
        return path

    def _write_json(self, relative: str, data: dict[str, Any], result: ConversionResult) -> Path:
        path = self._target(relative, result)
        write_json_file(path, data)
        result.files.append(path)
        logger.debug(f"Wrote {path}")
        return path
