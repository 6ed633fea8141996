# Core data models for skill-porter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Protocol, runtime_checkable

from skillporter.errors import UnsupportedPlatformError

Confidence = Literal["low", "high"]

FileKind = Literal["entry", "manifest", "context", "dependency", "directory"]


class Platform(str, Enum):
    """Platform a skill/extension directory targets.

    ABOUTME: CLAUDE is the skill layout, GEMINI the extension layout
    ABOUTME: UNIVERSAL means both layouts live in one directory
    """

    CLAUDE = "claude"
    GEMINI = "gemini"
    UNIVERSAL = "universal"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: "str | Platform") -> "Platform":
        """Parse a platform name, case-insensitively.

        Raises:
            UnsupportedPlatformError: If value is not a known platform
        """
        if isinstance(value, Platform):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            choices = ", ".join(p.value for p in cls)
            raise UnsupportedPlatformError(
                f"Invalid platform: {value}. Must be one of: {choices}"
            ) from e

    @property
    def label(self) -> str:
        """Human-readable platform name."""
        return _PLATFORM_LABELS[self]


_PLATFORM_LABELS = {
    Platform.CLAUDE: "Claude Code",
    Platform.GEMINI: "Gemini CLI",
    Platform.UNIVERSAL: "Universal",
    Platform.UNKNOWN: "Unknown",
}


@dataclass(frozen=True)
class MCPServer:
    """Immutable MCP server configuration.

    ABOUTME: Shared by both layouts (marketplace plugin entry and extension manifest)
    ABOUTME: Keys other than command/args/env are kept in extra and written back as-is
    """
    name: str
    command: str | None = None
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SettingDescriptor:
    """One externally configurable value of an extension."""
    name: str
    description: str
    secret: bool = False
    required: bool = False
    default: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to manifest dict format.

        ABOUTME: Omits false flags and absent default for cleaner output
        """
        result: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
        }
        if self.secret:
            result["secret"] = True
        if self.required:
            result["required"] = True
        if self.default is not None:
            result["default"] = self.default
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SettingDescriptor":
        default = data.get("default")
        return cls(
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            secret=bool(data.get("secret", False)),
            required=bool(data.get("required", False)),
            default=None if default is None else str(default),
        )


@dataclass
class SkillDocument:
    """Claude skill as read from disk.

    ABOUTME: frontmatter holds the metadata block, body the text after it
    ABOUTME: marketplace is None when .claude-plugin/marketplace.json is absent
    """
    frontmatter: dict[str, Any]
    body: str
    marketplace: dict[str, Any] | None = None


@dataclass
class ExtensionDocument:
    """Gemini extension as read from disk.

    ABOUTME: context is empty when the context file is absent
    """
    manifest: dict[str, Any]
    context: str = ""
    context_file_name: str = "GEMINI.md"


@dataclass(frozen=True)
class DetectedFile:
    """A platform file found during detection."""
    file: str
    kind: FileKind
    valid: bool = True
    issue: str | None = None


@dataclass
class DetectionResult:
    """Outcome of platform detection for one directory.

    ABOUTME: Confidence is binary: high for any recognized platform, low otherwise
    ABOUTME: metadata is best effort and may miss keys on parse errors
    """
    platform: Platform
    claude_files: list[DetectedFile] = field(default_factory=list)
    gemini_files: list[DetectedFile] = field(default_factory=list)
    shared_files: list[DetectedFile] = field(default_factory=list)
    confidence: Confidence = "low"
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Errors block validity, warnings are advisory."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> None:
        """Append another result's messages to this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


@dataclass
class ConversionResult:
    """Report from a conversion.

    ABOUTME: files lists every path written, in write order
    ABOUTME: Files written before a failure are still listed (no rollback)
    """
    success: bool = False
    files: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    message: str | None = None
    platform: Platform | None = None
    validation: ValidationResult | None = None

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str) -> None:
        self.errors.append(error)


@runtime_checkable
class PlatformLayout(Protocol):
    """Protocol for platform-specific directory layouts.

    ABOUTME: Defines interface all platform layouts must implement
    ABOUTME: Uses @runtime_checkable for isinstance() support
    """

    @property
    def name(self) -> str:
        """Human-readable platform name."""
        ...

    @property
    def platform(self) -> Platform:
        """Platform this layout describes."""
        ...

    def detect_files(self, directory: Path) -> list[DetectedFile]:
        """List this platform's files present in directory."""
        ...

    def extract_metadata(self, directory: Path) -> dict[str, Any]:
        """Best-effort metadata; never raises on parse errors."""
        ...
