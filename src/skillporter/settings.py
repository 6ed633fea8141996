# Settings inference from MCP server environment variables
from types import MappingProxyType

from skillporter.models import MCPServer, SettingDescriptor
from skillporter.utils.env import EXTENSION_PATH_VARIABLE, find_placeholders

# ABOUTME: Well-known variable names and their descriptions
SETTING_DESCRIPTIONS = MappingProxyType({
    "DB_HOST": "Database server hostname",
    "DB_PORT": "Database server port",
    "DB_NAME": "Database name",
    "DB_USER": "Database username",
    "DB_PASSWORD": "Database password",
    "API_KEY": "API authentication key",
    "API_SECRET": "API secret",
    "API_URL": "API endpoint URL",
    "HOST": "Server hostname",
    "PORT": "Server port",
})

# ABOUTME: Defaults for common variables; anything else gets no default
SETTING_DEFAULTS = MappingProxyType({
    "DB_HOST": "localhost",
    "DB_PORT": "5432",
    "HOST": "localhost",
    "PORT": "8080",
    "API_URL": "https://api.example.com",
})

# ABOUTME: Case-insensitive substrings that mark a variable as secret and required
SECRET_MARKERS: tuple[str, ...] = ("password", "secret", "token", "key")


def describe_variable(name: str) -> str:
    """Describe a variable by lookup, else by title-casing its segments.

    Examples:
        >>> describe_variable("DB_HOST")
        'Database server hostname'
        >>> describe_variable("LOG_LEVEL")
        'Log Level'
    """
    if name in SETTING_DESCRIPTIONS:
        return SETTING_DESCRIPTIONS[name]

    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split("_"))


def is_secret(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in SECRET_MARKERS)


def default_for(name: str) -> str | None:
    return SETTING_DEFAULTS.get(name)


def infer_setting(name: str) -> SettingDescriptor:
    """Synthesize a descriptor for one variable name."""
    secret = is_secret(name)
    return SettingDescriptor(
        name=name,
        description=describe_variable(name),
        secret=secret,
        required=secret,
        default=default_for(name),
    )


def infer_settings(servers: dict[str, MCPServer]) -> list[SettingDescriptor]:
    """Infer a settings schema from ${VAR} references in server env maps.

    ABOUTME: Scans env values of every server, in server then key order
    ABOUTME: Deduplicates by variable name, first occurrence wins
    ABOUTME: Heuristic enrichment only; every entry has a name and description

    Args:
        servers: Server configurations keyed by server name

    Returns:
        Ordered list of inferred settings

    Examples:
        >>> servers = {
        ...     "a": MCPServer(name="a", command="node", env={"K": "${API_KEY}"}),
        ...     "b": MCPServer(name="b", command="node", env={"K": "${API_KEY}"}),
        ... }
        >>> [s.name for s in infer_settings(servers)]
        ['API_KEY']
    """
    settings: list[SettingDescriptor] = []
    seen: set[str] = set()

    for server in servers.values():
        for value in server.env.values():
            if not isinstance(value, str):
                continue

            for name in find_placeholders(value):
                if name in seen or name == EXTENSION_PATH_VARIABLE:
                    continue
                seen.add(name)
                settings.append(infer_setting(name))

    return settings
