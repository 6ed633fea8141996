# ABOUTME: Utility modules for skill-porter
# ABOUTME: Exports placeholder, backup, and command execution helpers

from skillporter.utils.backup import cleanup_old_backups, create_backup
from skillporter.utils.commands import CommandRunner, SubprocessRunner
from skillporter.utils.env import (
    EXTENSION_PATH_TOKEN,
    PLACEHOLDER_PATTERN,
    add_extension_path,
    find_placeholders,
    strip_extension_path,
)

__all__ = [
    "EXTENSION_PATH_TOKEN",
    "PLACEHOLDER_PATTERN",
    "add_extension_path",
    "find_placeholders",
    "strip_extension_path",
    "create_backup",
    "cleanup_old_backups",
    "CommandRunner",
    "SubprocessRunner",
]
