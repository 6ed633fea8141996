# Platform detection for skill/extension directories
import logging
from pathlib import Path

from skillporter.errors import DirectoryNotFoundError
from skillporter.models import DetectedFile, DetectionResult, Platform
from skillporter.platforms import get_all_platforms
from skillporter.platforms.base import MCP_SERVER_DIR, PACKAGE_FILE, SHARED_DIR

logger = logging.getLogger(__name__)


def detect_shared_files(directory: Path) -> list[DetectedFile]:
    """List presence-only signals common to both layouts."""
    shared: list[DetectedFile] = []

    if (directory / PACKAGE_FILE).is_file():
        shared.append(DetectedFile(file=PACKAGE_FILE, kind="dependency"))
    if (directory / SHARED_DIR).is_dir():
        shared.append(DetectedFile(file=f"{SHARED_DIR}/", kind="directory"))
    if (directory / MCP_SERVER_DIR).is_dir():
        shared.append(DetectedFile(file=f"{MCP_SERVER_DIR}/", kind="directory"))

    return shared


def classify(has_claude: bool, has_gemini: bool) -> Platform:
    """Classify a directory from which layouts have files present.

    Examples:
        >>> classify(True, True)
        <Platform.UNIVERSAL: 'universal'>
        >>> classify(False, False)
        <Platform.UNKNOWN: 'unknown'>
    """
    if has_claude and has_gemini:
        return Platform.UNIVERSAL
    if has_claude:
        return Platform.CLAUDE
    if has_gemini:
        return Platform.GEMINI
    return Platform.UNKNOWN


def detect(path: Path | str) -> DetectionResult:
    """Detect which platform layout a directory follows.

    ABOUTME: File presence decides the platform; validity is recorded per file
    ABOUTME: Unrecognized directories yield UNKNOWN with low confidence, not an error
    ABOUTME: Metadata extraction is best effort and never fails detection

    Args:
        path: Directory to inspect

    Returns:
        DetectionResult for the directory

    Raises:
        DirectoryNotFoundError: If path is not an existing directory
    """
    directory = Path(path)
    if not directory.is_dir():
        raise DirectoryNotFoundError(f"Directory not found: {directory}")

    layouts = get_all_platforms()
    files = {layout.platform: layout.detect_files(directory) for layout in layouts}
    claude_files = files[Platform.CLAUDE]
    gemini_files = files[Platform.GEMINI]

    platform = classify(bool(claude_files), bool(gemini_files))
    result = DetectionResult(
        platform=platform,
        claude_files=claude_files,
        gemini_files=gemini_files,
        shared_files=detect_shared_files(directory),
        confidence="low" if platform is Platform.UNKNOWN else "high",
    )

    for layout in layouts:
        if platform in (layout.platform, Platform.UNIVERSAL):
            result.metadata.update(layout.extract_metadata(directory))

    logger.debug(
        f"Detected {platform.value} ({result.confidence}) in {directory}: "
        f"{len(claude_files)} claude, {len(gemini_files)} gemini file(s)"
    )
    return result
