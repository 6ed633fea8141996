# Configuration loading for skill-porter
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli

from skillporter.errors import MalformedDocumentError

logger = logging.getLogger(__name__)

# ABOUTME: Config directory name under the user's home
CONFIG_DIR_NAME = ".skill-porter"

# ABOUTME: Config file name (TOML format)
CONFIG_FILE_NAME = "config.toml"

DEFAULT_BACKUP_KEEP = 5


@dataclass(frozen=True)
class MarketplaceDefaults:
    """Values written into generated marketplace.json files.

    ABOUTME: The extension manifest has no owner/author/license fields to carry over
    """
    owner_name: str = "Skill Porter User"
    owner_email: str = "user@example.com"
    author: str = "Converted from Gemini"
    license: str = "MIT"
    category: str = "general"
    repository_base: str = "https://github.com/user"


@dataclass(frozen=True)
class PorterConfig:
    """skill-porter configuration loaded from config.toml.

    ABOUTME: Every field has a default, so a missing file is a valid config
    """
    marketplace: MarketplaceDefaults = MarketplaceDefaults()
    backup_dir: Path | None = None
    backup_keep: int = DEFAULT_BACKUP_KEEP

    def resolved_backup_dir(self) -> Path:
        """Backup directory, defaulting to ~/.skill-porter/backups."""
        if self.backup_dir is not None:
            return self.backup_dir
        return get_config_dir() / "backups"


def get_config_dir() -> Path:
    """Return ~/.skill-porter, resolved at call time."""
    return Path.home() / CONFIG_DIR_NAME


def get_config_path() -> Path:
    """Return the path to the skill-porter config file.

    ABOUTME: Returns ~/.skill-porter/config.toml
    ABOUTME: File may not exist; load_config() then returns defaults
    """
    return get_config_dir() / CONFIG_FILE_NAME


def _string_field(section: dict[str, Any], key: str, default: str, where: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str):
        raise MalformedDocumentError(f"'{key}' in [{where}] must be a string")
    return value


def load_config(path: Path | None = None) -> PorterConfig:
    """Load and parse skill-porter config from a TOML file.

    ABOUTME: Uses tomli for TOML parsing
    ABOUTME: Missing file yields defaults; parse errors fail fast

    Args:
        path: Path to config.toml (defaults to get_config_path())

    Returns:
        Parsed PorterConfig

    Raises:
        MalformedDocumentError: If TOML syntax or a field type is invalid
    """
    if path is None:
        path = get_config_path()

    if not path.exists():
        logger.debug(f"No config at {path}, using defaults")
        return PorterConfig()

    try:
        with open(path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise MalformedDocumentError(f"Invalid TOML in {path}: {e}") from e

    defaults = MarketplaceDefaults()
    section = data.get("marketplace", {})
    if not isinstance(section, dict):
        raise MalformedDocumentError("[marketplace] must be a table")

    marketplace = MarketplaceDefaults(
        owner_name=_string_field(section, "owner_name", defaults.owner_name, "marketplace"),
        owner_email=_string_field(section, "owner_email", defaults.owner_email, "marketplace"),
        author=_string_field(section, "author", defaults.author, "marketplace"),
        license=_string_field(section, "license", defaults.license, "marketplace"),
        category=_string_field(section, "category", defaults.category, "marketplace"),
        repository_base=_string_field(
            section, "repository_base", defaults.repository_base, "marketplace"
        ).rstrip("/"),
    )

    backup = data.get("backup", {})
    if not isinstance(backup, dict):
        raise MalformedDocumentError("[backup] must be a table")

    backup_dir = None
    if "dir" in backup:
        backup_dir = Path(_string_field(backup, "dir", "", "backup")).expanduser()

    keep = backup.get("keep", DEFAULT_BACKUP_KEEP)
    if not isinstance(keep, int) or isinstance(keep, bool) or keep < 1:
        raise MalformedDocumentError("'keep' in [backup] must be a positive integer")

    return PorterConfig(marketplace=marketplace, backup_dir=backup_dir, backup_keep=keep)
