# Gemini CLI extension layout
import logging
from pathlib import Path
from typing import Any

from skillporter.errors import MalformedDocumentError
from skillporter.models import DetectedFile, ExtensionDocument, Platform, PlatformLayout
from skillporter.platforms.base import is_valid_json, read_json_file, read_text_file

logger = logging.getLogger(__name__)

MANIFEST_FILE = "gemini-extension.json"
DEFAULT_CONTEXT_FILE = "GEMINI.md"


def context_file_name(manifest: dict[str, Any] | None) -> str:
    """Context file declared by a manifest, defaulting to GEMINI.md."""
    if manifest:
        name = manifest.get("contextFileName")
        if isinstance(name, str) and name:
            return name
    return DEFAULT_CONTEXT_FILE


class GeminiLayout(PlatformLayout):
    """Layout of a Gemini CLI extension directory.

    ABOUTME: gemini-extension.json is the manifest
    ABOUTME: Context file is GEMINI.md unless the manifest names another
    """

    @property
    def name(self) -> str:
        """Human-readable platform name."""
        return "Gemini CLI"

    @property
    def platform(self) -> Platform:
        return Platform.GEMINI

    def manifest_path(self, directory: Path) -> Path:
        return directory / MANIFEST_FILE

    def _read_manifest_quietly(self, directory: Path) -> dict[str, Any] | None:
        try:
            return read_json_file(self.manifest_path(directory))
        except (OSError, MalformedDocumentError) as e:
            logger.debug(f"Skipping extension manifest: {e}")
            return None

    def detect_files(self, directory: Path) -> list[DetectedFile]:
        """List Gemini files present in directory."""
        found: list[DetectedFile] = []
        manifest: dict[str, Any] | None = None

        manifest_path = self.manifest_path(directory)
        if manifest_path.is_file():
            valid = is_valid_json(manifest_path)
            found.append(DetectedFile(
                file=MANIFEST_FILE,
                kind="manifest",
                valid=valid,
                issue=None if valid else "Invalid JSON",
            ))
            if valid:
                manifest = self._read_manifest_quietly(directory)

        context_name = context_file_name(manifest)
        if (directory / context_name).is_file():
            found.append(DetectedFile(file=context_name, kind="context", valid=True))

        return found

    def extract_metadata(self, directory: Path) -> dict[str, Any]:
        if not self.manifest_path(directory).is_file():
            return {}

        manifest = self._read_manifest_quietly(directory)
        return {"gemini": manifest} if manifest is not None else {}

    def load(self, directory: Path) -> ExtensionDocument:
        """Load the manifest and the optional context file.

        Raises:
            MissingRequiredFileError: If gemini-extension.json doesn't exist
            MalformedDocumentError: If the manifest is not valid JSON
        """
        manifest = read_json_file(self.manifest_path(directory))
        context_name = context_file_name(manifest)

        context_path = directory / context_name
        context = read_text_file(context_path) if context_path.is_file() else ""

        return ExtensionDocument(
            manifest=manifest,
            context=context,
            context_file_name=context_name,
        )
