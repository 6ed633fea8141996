# skill-porter - Claude Code skill <-> Gemini CLI extension converter
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export the facade, data models and error types
from skillporter.config import PorterConfig, get_config_path, load_config
from skillporter.errors import (
    CommandError,
    DetectionAmbiguousError,
    DirectoryNotFoundError,
    MalformedDocumentError,
    MissingRequiredFileError,
    PorterError,
    UnsupportedPlatformError,
)
from skillporter.models import (
    ConversionResult,
    DetectionResult,
    MCPServer,
    Platform,
    SettingDescriptor,
    ValidationResult,
)
from skillporter.porter import SkillPorter

__all__ = [
    "__version__",
    "SkillPorter",
    "Platform",
    "MCPServer",
    "SettingDescriptor",
    "ConversionResult",
    "DetectionResult",
    "ValidationResult",
    "PorterConfig",
    "get_config_path",
    "load_config",
    "PorterError",
    "DirectoryNotFoundError",
    "MissingRequiredFileError",
    "MalformedDocumentError",
    "UnsupportedPlatformError",
    "DetectionAmbiguousError",
    "CommandError",
]
