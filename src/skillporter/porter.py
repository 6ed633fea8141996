# High-level operations: analyze, convert, validate, make universal
import logging
from pathlib import Path

from skillporter.config import PorterConfig
from skillporter.converters import get_converter
from skillporter.detector import detect
from skillporter.errors import DetectionAmbiguousError, UnsupportedPlatformError
from skillporter.models import ConversionResult, DetectionResult, Platform, ValidationResult
from skillporter.validator import Validator

logger = logging.getLogger(__name__)

_NOUNS = {
    Platform.CLAUDE: "skill",
    Platform.GEMINI: "extension",
}


def other_platform(platform: Platform) -> Platform:
    """Return the layout a single-platform directory is missing.

    Raises:
        UnsupportedPlatformError: If platform is not claude or gemini
    """
    if platform is Platform.CLAUDE:
        return Platform.GEMINI
    if platform is Platform.GEMINI:
        return Platform.CLAUDE
    raise UnsupportedPlatformError(f"No counterpart for platform: {platform.value}")


class SkillPorter:
    """Facade over detection, conversion and validation.

    ABOUTME: One instance can serve many calls; it keeps no per-directory state
    ABOUTME: backup_dir set means files about to be overwritten are backed up first
    """

    def __init__(
        self,
        config: PorterConfig | None = None,
        backup_dir: Path | None = None,
    ) -> None:
        self.config = config if config is not None else PorterConfig()
        self.backup_dir = backup_dir
        self.validator = Validator()

    def analyze(self, path: Path | str) -> DetectionResult:
        return detect(path)

    def convert(
        self,
        source: Path | str,
        target: Platform | str,
        output: Path | str | None = None,
        validate: bool = True,
    ) -> ConversionResult:
        """Convert a directory to the target platform.

        ABOUTME: Universal sources and sources already on target are successful no-ops
        ABOUTME: Failed validation of the output turns the result into a failure

        Args:
            source: Directory holding the skill or extension
            target: claude or gemini
            output: Output directory (defaults to source)
            validate: Validate the output after converting

        Returns:
            ConversionResult describing the run

        Raises:
            DirectoryNotFoundError: If source is not a directory
            DetectionAmbiguousError: If source holds neither layout
            UnsupportedPlatformError: If target is not claude or gemini
        """
        source = Path(source)
        output = Path(output) if output else source
        target = Platform.parse(target)

        detection = detect(source)

        if detection.platform is Platform.UNKNOWN:
            raise DetectionAmbiguousError(
                "Unable to detect platform type. Ensure directory contains valid skill/extension files."
            )

        if detection.platform is Platform.UNIVERSAL:
            return ConversionResult(
                success=True,
                message="Already a universal skill/extension - no conversion needed",
                platform=Platform.UNIVERSAL,
            )

        if target not in _NOUNS:
            raise UnsupportedPlatformError(
                f"Invalid target platform: {target.value}. Must be 'claude' or 'gemini'"
            )

        if detection.platform is target:
            return ConversionResult(
                success=True,
                message=f"Already a {target.value} {_NOUNS[target]} - no conversion needed",
                platform=detection.platform,
            )

        converter_cls = get_converter(target)
        logger.debug(f"Converting {source} ({detection.platform.value}) to {target.value} in {output}")
        converter = converter_cls(source, output, config=self.config, backup_dir=self.backup_dir)
        result = converter.convert()

        if validate and result.success:
            validation = self.validator.validate(output, target)
            result.validation = validation
            if not validation.valid:
                result.success = False
                result.errors.append("Validation failed")
                result.errors.extend(validation.errors)

        return result

    def validate(self, path: Path | str, platform: Platform | str | None = None) -> ValidationResult:
        """Validate a directory, detecting its platform when none is given."""
        if platform is None:
            platform = detect(path).platform
        return self.validator.validate(path, platform)

    def make_universal(self, source: Path | str, output: Path | str | None = None) -> ConversionResult:
        """Add the missing layout so the directory serves both platforms.

        Raises:
            DirectoryNotFoundError: If source is not a directory
            DetectionAmbiguousError: If source holds neither layout
        """
        detection = detect(source)

        if detection.platform is Platform.UNIVERSAL:
            return ConversionResult(
                success=True,
                message="Already a universal skill/extension",
                platform=Platform.UNIVERSAL,
            )
        if detection.platform is Platform.UNKNOWN:
            raise DetectionAmbiguousError("Unable to detect platform type")

        result = self.convert(source, other_platform(detection.platform), output=output, validate=True)
        if result.success:
            result.platform = Platform.UNIVERSAL
            result.message = "Successfully created universal skill/extension"
        return result
