# Placeholder utilities for ${NAME} references
import re

# ABOUTME: Pattern matches ${NAME} where NAME is one or more non-brace characters
PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")

# ABOUTME: Gemini resolves this placeholder to the installed extension directory
EXTENSION_PATH_VARIABLE = "extensionPath"
EXTENSION_PATH_TOKEN = "${" + EXTENSION_PATH_VARIABLE + "}"

# ABOUTME: Matches the token plus either a literal slash or Gemini's ${/} separator
_EXTENSION_PATH_PREFIX = re.compile(r"\$\{extensionPath\}(?:/|\$\{/\})")

# ABOUTME: Relative paths start with a letter (mcp-server/index.js, dist/main.js)
_RELATIVE_ARG = re.compile(r"^[a-z]", re.IGNORECASE)


def find_placeholders(value: str) -> list[str]:
    """Return every placeholder name in value, in order of appearance.

    Examples:
        >>> find_placeholders("${DB_USER}:${DB_PASSWORD}")
        ['DB_USER', 'DB_PASSWORD']
        >>> find_placeholders("plain")
        []
    """
    return PLACEHOLDER_PATTERN.findall(value)


def add_extension_path(arg: str) -> str:
    """Prefix a relative-path argument with the extension path token.

    ABOUTME: Only arguments starting with a letter are rewritten
    ABOUTME: Flags (-y), absolute paths and placeholders pass through

    Examples:
        >>> add_extension_path("mcp-server/index.js")
        '${extensionPath}/mcp-server/index.js'
        >>> add_extension_path("--stdio")
        '--stdio'
    """
    if _RELATIVE_ARG.match(arg) and not arg.startswith("${"):
        return f"{EXTENSION_PATH_TOKEN}/{arg}"
    return arg


def strip_extension_path(arg: str) -> str:
    """Remove every extension path prefix from an argument.

    Examples:
        >>> strip_extension_path("${extensionPath}/mcp-server/index.js")
        'mcp-server/index.js'
    """
    return _EXTENSION_PATH_PREFIX.sub("", arg)
