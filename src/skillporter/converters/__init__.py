# Converters between the skill and extension layouts
from skillporter.converters.base import BaseConverter, strip_conversion_boilerplate
from skillporter.converters.claude_to_gemini import ClaudeToGeminiConverter
from skillporter.converters.gemini_to_claude import GeminiToClaudeConverter
from skillporter.models import Platform

# Converter class keyed by the platform it produces
CONVERTERS: dict[Platform, type[BaseConverter]] = {
    Platform.GEMINI: ClaudeToGeminiConverter,
    Platform.CLAUDE: GeminiToClaudeConverter,
}

__all__ = [
    "BaseConverter",
    "ClaudeToGeminiConverter",
    "GeminiToClaudeConverter",
    "CONVERTERS",
    "get_converter",
    "strip_conversion_boilerplate",
]


def get_converter(target: Platform) -> type[BaseConverter]:
    """Return the converter class that produces target.

    Raises:
        KeyError: If target is not claude or gemini
    """
    return CONVERTERS[target]
