# Tool permission mapping between allowed-tools and excludeTools
from dataclasses import dataclass, field
from typing import Any

# ABOUTME: Closed universe of tool names, in the order mapped lists are emitted
ALL_TOOLS: tuple[str, ...] = (
    "Read",
    "Write",
    "Edit",
    "Glob",
    "Grep",
    "Bash",
    "Task",
    "WebFetch",
    "WebSearch",
    "TodoWrite",
    "AskUserQuestion",
    "SlashCommand",
    "Skill",
    "NotebookEdit",
    "BashOutput",
    "KillShell",
)

APPROXIMATE_WARNING = (
    "Tool restrictions may not translate exactly - review excludeTools in gemini-extension.json"
)


@dataclass(frozen=True)
class ToolMapping:
    """Result of mapping a tool list to its complement.

    ABOUTME: exact=False marks the lossy whitelist case (empty blacklist emitted)
    ABOUTME: unknown holds input tokens outside ALL_TOOLS, which are not mapped
    """
    tools: list[str]
    exact: bool = True
    unknown: list[str] = field(default_factory=list)
    warning: str | None = None


def normalize_tools(value: Any) -> list[str]:
    """Normalize a tool list from frontmatter or a manifest.

    ABOUTME: Accepts a list, "Read, Write" or the flow form "[Read, Write]"
    ABOUTME: Trims names, drops empties and duplicates, keeps first-seen order

    Examples:
        >>> normalize_tools("[Read, Write, Read]")
        ['Read', 'Write']
        >>> normalize_tools(["Bash", " Grep "])
        ['Bash', 'Grep']
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if text.startswith("[") and text.endswith("]"):
            text = text[1:-1]
        items = text.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        items = [str(value)]

    result: list[str] = []
    for item in items:
        name = item.strip().strip("'\"")
        if name and name not in result:
            result.append(name)
    return result


def _unknown(tools: list[str]) -> list[str]:
    return [tool for tool in tools if tool not in ALL_TOOLS]


def allowed_to_excluded(allowed: Any) -> ToolMapping:
    """Convert a whitelist (allowed-tools) into a blacklist (excludeTools).

    ABOUTME: Complement is taken against ALL_TOOLS, in ALL_TOOLS order
    ABOUTME: When the blacklist would not be longer than the whitelist, emits [] instead

    The empty blacklist permits everything. It is preferred over a blacklist
    that excludes less than the whitelist allowed, and the mapping is marked
    approximate with a warning for the caller to surface.

    Args:
        allowed: Allowed tool names in any form normalize_tools accepts

    Returns:
        ToolMapping with the excluded tools

    Examples:
        >>> allowed_to_excluded(["Read"]).tools[:3]
        ['Write', 'Edit', 'Glob']
        >>> allowed_to_excluded(list(ALL_TOOLS)).exact
        False
    """
    allowed_tools = normalize_tools(allowed)
    excluded = [tool for tool in ALL_TOOLS if tool not in allowed_tools]
    unknown = _unknown(allowed_tools)

    if len(excluded) > len(allowed_tools):
        return ToolMapping(tools=excluded, exact=True, unknown=unknown)

    return ToolMapping(tools=[], exact=False, unknown=unknown, warning=APPROXIMATE_WARNING)


def excluded_to_allowed(excluded: Any) -> ToolMapping:
    """Convert a blacklist (excludeTools) into a whitelist (allowed-tools).

    Examples:
        >>> excluded_to_allowed(ALL_TOOLS[1:]).tools
        ['Read']
    """
    excluded_tools = normalize_tools(excluded)
    allowed = [tool for tool in ALL_TOOLS if tool not in excluded_tools]
    return ToolMapping(tools=allowed, exact=True, unknown=_unknown(excluded_tools))
