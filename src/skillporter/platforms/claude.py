# Claude Code skill layout
import logging
from pathlib import Path
from typing import Any

from skillporter.errors import MalformedDocumentError, MissingRequiredFileError
from skillporter.frontmatter import extract_frontmatter, has_frontmatter, load_frontmatter
from skillporter.models import DetectedFile, Platform, PlatformLayout, SkillDocument
from skillporter.platforms.base import is_valid_json, read_json_file, read_text_file

logger = logging.getLogger(__name__)

SKILL_FILE = "SKILL.md"
PLUGIN_DIR = ".claude-plugin"
MARKETPLACE_FILE = f"{PLUGIN_DIR}/marketplace.json"


class ClaudeLayout(PlatformLayout):
    """Layout of a Claude Code skill directory.

    ABOUTME: SKILL.md (frontmatter + body) is the entry document
    ABOUTME: .claude-plugin/marketplace.json is the optional packaging manifest
    """

    @property
    def name(self) -> str:
        """Human-readable platform name."""
        return "Claude Code"

    @property
    def platform(self) -> Platform:
        return Platform.CLAUDE

    def skill_path(self, directory: Path) -> Path:
        return directory / SKILL_FILE

    def marketplace_path(self, directory: Path) -> Path:
        return directory / MARKETPLACE_FILE

    def detect_files(self, directory: Path) -> list[DetectedFile]:
        """List Claude files present in directory.

        ABOUTME: SKILL.md is valid only with a frontmatter block
        ABOUTME: marketplace.json is valid only if it parses as JSON
        """
        found: list[DetectedFile] = []

        skill_path = self.skill_path(directory)
        if skill_path.is_file():
            try:
                valid = has_frontmatter(read_text_file(skill_path))
            except (OSError, MalformedDocumentError):
                valid = False
            found.append(DetectedFile(
                file=SKILL_FILE,
                kind="entry",
                valid=valid,
                issue=None if valid else "Missing or invalid YAML frontmatter",
            ))

        marketplace_path = self.marketplace_path(directory)
        if marketplace_path.is_file():
            valid = is_valid_json(marketplace_path)
            found.append(DetectedFile(
                file=MARKETPLACE_FILE,
                kind="manifest",
                valid=valid,
                issue=None if valid else "Invalid JSON",
            ))

        return found

    def extract_metadata(self, directory: Path) -> dict[str, Any]:
        """Best-effort frontmatter and marketplace contents.

        ABOUTME: Keys are absent when the file is missing or unreadable
        """
        metadata: dict[str, Any] = {}

        skill_path = self.skill_path(directory)
        if skill_path.is_file():
            try:
                frontmatter = extract_frontmatter(read_text_file(skill_path))
            except (OSError, MalformedDocumentError) as e:
                logger.debug(f"Could not read {skill_path}: {e}")
            else:
                if frontmatter:
                    metadata["claude"] = frontmatter

        marketplace_path = self.marketplace_path(directory)
        if marketplace_path.is_file():
            try:
                metadata["claude_marketplace"] = read_json_file(marketplace_path)
            except (OSError, MalformedDocumentError) as e:
                logger.debug(f"Skipping marketplace metadata: {e}")

        return metadata

    def load(self, directory: Path) -> SkillDocument:
        """Load SKILL.md and the optional marketplace manifest.

        Raises:
            MissingRequiredFileError: If SKILL.md doesn't exist
            MalformedDocumentError: If frontmatter or marketplace JSON is invalid
        """
        skill_path = self.skill_path(directory)
        if not skill_path.is_file():
            raise MissingRequiredFileError(f"Missing required file: {SKILL_FILE}")

        frontmatter, body = load_frontmatter(read_text_file(skill_path))

        marketplace: dict[str, Any] | None = None
        marketplace_path = self.marketplace_path(directory)
        if marketplace_path.is_file():
            marketplace = read_json_file(marketplace_path)

        return SkillDocument(frontmatter=frontmatter, body=body, marketplace=marketplace)
