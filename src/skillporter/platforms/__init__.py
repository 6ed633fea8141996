# Platform layout registry
from skillporter.models import PlatformLayout
from skillporter.platforms.claude import ClaudeLayout
from skillporter.platforms.gemini import GeminiLayout

# Registry of all available platform layouts
ALL_PLATFORMS: list[type[PlatformLayout]] = [
    ClaudeLayout,
    GeminiLayout,
]

__all__ = [
    "PlatformLayout",
    "ClaudeLayout",
    "GeminiLayout",
    "ALL_PLATFORMS",
    "get_all_platforms",
]


def get_all_platforms() -> list[PlatformLayout]:
    """Instantiate and return all platform layouts.

    ABOUTME: Creates instances of all registered layouts
    ABOUTME: Returns list for easy iteration
    """
    return [platform_cls() for platform_cls in ALL_PLATFORMS]
