# Frontmatter extraction for SKILL.md metadata blocks
import enum
import re
from typing import Any

import yaml

from skillporter.errors import MalformedDocumentError

FRONTMATTER_MARKER = "---"

# ABOUTME: Block must open on the very first line and close on a marker line
FRONTMATTER_PATTERN = re.compile(r"^---\n([\s\S]+?)\n---")

# ABOUTME: Same block plus the newline after the closing marker, for body splitting
_FRONTMATTER_WITH_NEWLINE = re.compile(r"^---\n[\s\S]+?\n---(?:\n|$)")

FrontmatterValue = str | list[str]


class _State(enum.Enum):
    SEEKING_KEY = "seeking-key"
    IN_ARRAY = "in-array"


def has_frontmatter(content: str) -> bool:
    """Check whether content starts with a metadata block."""
    return FRONTMATTER_PATTERN.match(content) is not None


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split content into (block, body).

    ABOUTME: block is None and body is the whole content when no block exists

    Examples:
        >>> split_frontmatter("---\\nname: x\\n---\\n# Title\\n")
        ('name: x', '# Title\\n')
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return None, content

    body = _FRONTMATTER_WITH_NEWLINE.sub("", content, count=1)
    return match.group(1), body


def parse_frontmatter(block: str) -> dict[str, FrontmatterValue]:
    """Parse a metadata block with the minimal key/value grammar.

    ABOUTME: Not YAML: no escaping, no nesting, no multi-line scalars
    ABOUTME: Detector and validator both read frontmatter through this

    A line whose trimmed text starts with "-" is an array element while an
    array is open and is ignored otherwise. Any other line with a colon
    starts a new key; an empty value after the colon opens an array.

    Args:
        block: Text between the opening and closing markers

    Returns:
        Mapping of key to string or list of strings

    Examples:
        >>> parse_frontmatter("name: db-helper\\nallowed-tools:\\n  - Read\\n  - Bash")
        {'name': 'db-helper', 'allowed-tools': ['Read', 'Bash']}
    """
    parsed: dict[str, FrontmatterValue] = {}
    state = _State.SEEKING_KEY
    current_items: list[str] = []

    for line in block.split("\n"):
        stripped = line.strip()

        if stripped.startswith("-"):
            if state is _State.IN_ARRAY:
                current_items.append(stripped[1:].strip())
            continue

        if ":" not in line:
            continue

        key, _, value = line.partition(":")
        value = value.strip()

        if value == "":
            current_items = []
            parsed[key.strip()] = current_items
            state = _State.IN_ARRAY
        else:
            parsed[key.strip()] = value
            state = _State.SEEKING_KEY

    return parsed


def extract_frontmatter(content: str) -> dict[str, FrontmatterValue]:
    """Extract metadata from a document, or {} when it has no block."""
    block, _ = split_frontmatter(content)
    if block is None:
        return {}
    return parse_frontmatter(block)


def _normalize(value: Any) -> FrontmatterValue:
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    if value is None:
        return ""
    return str(value)


def load_frontmatter(content: str) -> tuple[dict[str, FrontmatterValue], str]:
    """Load metadata and body for conversion.

    ABOUTME: Tries YAML first so quoted and flow-style values come out clean
    ABOUTME: Falls back to the minimal grammar when the block is not a YAML mapping

    Args:
        content: Full SKILL.md text

    Returns:
        Tuple of (metadata, body)

    Raises:
        MalformedDocumentError: If content has no metadata block
    """
    block, body = split_frontmatter(content)
    if block is None:
        raise MalformedDocumentError("SKILL.md missing YAML frontmatter")

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError:
        data = None

    if not isinstance(data, dict):
        return parse_frontmatter(block), body

    return {str(key): _normalize(value) for key, value in data.items()}, body


def render_frontmatter(fields: dict[str, FrontmatterValue]) -> str:
    """Render fields as a metadata block, markers included.

    ABOUTME: Block style lists and insertion order, so parse_frontmatter reads it back
    """
    dumped = yaml.dump(
        fields,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return f"{FRONTMATTER_MARKER}\n{dumped}{FRONTMATTER_MARKER}\n"
