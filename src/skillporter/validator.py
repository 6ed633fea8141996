# Structural validation of skill/extension directories
import json
import logging
import re
from pathlib import Path
from typing import Any

from skillporter.errors import MalformedDocumentError
from skillporter.frontmatter import parse_frontmatter, split_frontmatter
from skillporter.models import Platform, ValidationResult
from skillporter.platforms.base import read_text_file
from skillporter.platforms.claude import MARKETPLACE_FILE, SKILL_FILE
from skillporter.platforms.gemini import MANIFEST_FILE, context_file_name
from skillporter.utils.env import EXTENSION_PATH_TOKEN

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")
MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
MIN_DESCRIPTION_LENGTH = 50


def _text_field(data: dict[str, Any], key: str) -> str:
    # The minimal grammar yields [] for "key:" with no value
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _load_json(path: Path, label: str, result: ValidationResult) -> Any:
    try:
        return json.loads(read_text_file(path))
    except (json.JSONDecodeError, MalformedDocumentError) as e:
        result.add_error(f"Invalid JSON in {label}: {e}")
        return None


class Validator:
    """Checks a directory against the requirements of one or both layouts.

    ABOUTME: Read-only; never touches the filesystem beyond reading
    ABOUTME: Aggregates every problem instead of stopping at the first
    """

    def validate(self, path: Path | str, platform: Platform | str) -> ValidationResult:
        """Validate a directory for a platform.

        Args:
            path: Directory to validate
            platform: claude, gemini or universal (both checks)

        Returns:
            ValidationResult with all errors and warnings found

        Raises:
            UnsupportedPlatformError: If platform is not a known platform name
        """
        directory = Path(path)
        platform = Platform.parse(platform)
        result = ValidationResult()

        if not directory.is_dir():
            result.add_error(f"Directory not found: {directory}")
            return result

        if platform is Platform.UNKNOWN:
            result.add_error(
                "Unable to detect platform type. Ensure directory contains valid skill/extension files."
            )
            return result

        try:
            if platform in (Platform.CLAUDE, Platform.UNIVERSAL):
                self.validate_claude(directory, result)
            if platform in (Platform.GEMINI, Platform.UNIVERSAL):
                self.validate_gemini(directory, result)
        except (OSError, MalformedDocumentError) as e:
            result.add_error(f"Validation failed: {e}")

        logger.debug(
            f"Validated {directory} as {platform.value}: "
            f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
        )
        return result

    def validate_claude(self, directory: Path, result: ValidationResult) -> None:
        skill_path = directory / SKILL_FILE
        if not skill_path.is_file():
            result.add_error(f"Missing required file: {SKILL_FILE}")
            return

        content = read_text_file(skill_path)
        block, _ = split_frontmatter(content)
        if block is None:
            result.add_error("SKILL.md must have YAML frontmatter")
            return

        frontmatter = parse_frontmatter(block)

        name = _text_field(frontmatter, "name")
        if not name:
            result.add_error("SKILL.md frontmatter missing required field: name")
        else:
            if not NAME_PATTERN.match(name):
                result.add_error("Skill name must be lowercase letters, numbers, and hyphens only")
            if len(name) > MAX_NAME_LENGTH:
                result.add_error(f"Skill name must be {MAX_NAME_LENGTH} characters or less")

        description = _text_field(frontmatter, "description")
        if not description:
            result.add_error("SKILL.md frontmatter missing required field: description")
        else:
            if len(description) > MAX_DESCRIPTION_LENGTH:
                result.add_error(
                    f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less"
                )
            if len(description) < MIN_DESCRIPTION_LENGTH:
                result.add_warning(
                    f"Description should be descriptive "
                    f"(at least {MIN_DESCRIPTION_LENGTH} characters recommended)"
                )

        marketplace_path = directory / MARKETPLACE_FILE
        if not marketplace_path.is_file():
            result.add_warning(
                f"Missing {MARKETPLACE_FILE} (recommended for MCP server integration)"
            )
        else:
            self.validate_marketplace(marketplace_path, result)

        if "\\" in content:
            result.add_warning("Use forward slashes (/) for file paths, not backslashes (\\)")

    def validate_marketplace(self, path: Path, result: ValidationResult) -> None:
        marketplace = _load_json(path, "marketplace.json", result)
        if marketplace is None:
            return
        if not isinstance(marketplace, dict):
            result.add_error("marketplace.json must contain a JSON object")
            return

        if not marketplace.get("name"):
            result.add_error("marketplace.json missing required field: name")

        metadata = marketplace.get("metadata")
        if not isinstance(metadata, dict):
            result.add_error("marketplace.json missing required field: metadata")
        else:
            if not metadata.get("description"):
                result.add_warning("marketplace.json metadata should include description")
            if not metadata.get("version"):
                result.add_warning("marketplace.json metadata should include version")

        plugins = marketplace.get("plugins")
        if not isinstance(plugins, list) or not plugins:
            result.add_error("marketplace.json missing required field: plugins (array)")
            return

        for index, plugin in enumerate(plugins):
            if not isinstance(plugin, dict):
                result.add_error(f"Plugin at index {index} must be an object")
                continue
            if not plugin.get("name"):
                result.add_error(f"Plugin at index {index} missing required field: name")
            if not plugin.get("description"):
                result.add_error(f"Plugin at index {index} missing required field: description")

    def validate_gemini(self, directory: Path, result: ValidationResult) -> None:
        manifest_path = directory / MANIFEST_FILE
        if not manifest_path.is_file():
            result.add_error(f"Missing required file: {MANIFEST_FILE}")
            return

        manifest = _load_json(manifest_path, MANIFEST_FILE, result)
        if manifest is None:
            return
        if not isinstance(manifest, dict):
            result.add_error(f"{MANIFEST_FILE} must contain a JSON object")
            return

        name = manifest.get("name")
        if not name:
            result.add_error(f"{MANIFEST_FILE} missing required field: name")
        else:
            dir_name = directory.resolve().name
            if name != dir_name:
                result.add_warning(
                    f'Extension name "{name}" should match directory name "{dir_name}"'
                )

        if not manifest.get("version"):
            result.add_error(f"{MANIFEST_FILE} missing required field: version")

        self._validate_servers(manifest.get("mcpServers"), result)
        self._validate_settings(manifest.get("settings"), result)

        context_name = context_file_name(manifest)
        if not (directory / context_name).is_file():
            result.add_warning(
                f"Missing context file: {context_name} (recommended for providing context to Gemini)"
            )

        excluded = manifest.get("excludeTools")
        if excluded is not None and not isinstance(excluded, list):
            result.add_error("excludeTools must be an array")

    def _validate_servers(self, servers: Any, result: ValidationResult) -> None:
        if not servers:
            return
        if not isinstance(servers, dict):
            result.add_error("mcpServers must be an object")
            return

        for server_name, config in servers.items():
            if not isinstance(config, dict):
                result.add_error(f'MCP server "{server_name}" must be an object')
                continue
            if not config.get("command"):
                result.add_error(f'MCP server "{server_name}" missing required field: command')

            args = config.get("args")
            if args:
                args_text = json.dumps(args)
                if "mcp-server" in args_text and EXTENSION_PATH_TOKEN not in args_text:
                    result.add_warning(
                        f'MCP server "{server_name}" should use {EXTENSION_PATH_TOKEN} variable for paths'
                    )

    def _validate_settings(self, settings: Any, result: ValidationResult) -> None:
        if not settings:
            return
        if not isinstance(settings, list):
            result.add_error("settings must be an array")
            return

        for index, setting in enumerate(settings):
            if not isinstance(setting, dict):
                result.add_error(f"Setting at index {index} must be an object")
                continue
            if not setting.get("name"):
                result.add_error(f"Setting at index {index} missing required field: name")
            if not setting.get("description"):
                result.add_warning(f'Setting "{setting.get("name")}" should have a description')
