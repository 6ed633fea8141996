# Tests for ${NAME} placeholder helpers
from skillporter.utils.env import (
    EXTENSION_PATH_TOKEN,
    add_extension_path,
    find_placeholders,
    strip_extension_path,
)


def test_find_placeholders():
    """Test placeholders are returned in order of appearance."""
    assert find_placeholders("${A}-${B}-${A}") == ["A", "B", "A"]


def test_find_placeholders_none():
    """Test strings without placeholders."""
    assert find_placeholders("plain $HOME {X}") == []


def test_add_extension_path_relative():
    """Test relative paths get the token prefix."""
    assert add_extension_path("mcp-server/index.js") == f"{EXTENSION_PATH_TOKEN}/mcp-server/index.js"
    assert add_extension_path("Server.py") == f"{EXTENSION_PATH_TOKEN}/Server.py"


def test_add_extension_path_passthrough():
    """Test flags, absolute paths, scoped packages and placeholders pass through."""
    for arg in ["-y", "--stdio", "/opt/server.js", "./local.js", "@scope/pkg", "${extensionPath}/a"]:
        assert add_extension_path(arg) == arg


def test_strip_extension_path():
    """Test both separator spellings are removed."""
    assert strip_extension_path("${extensionPath}/mcp-server/index.js") == "mcp-server/index.js"
    assert strip_extension_path("${extensionPath}${/}dist/main.js") == "dist/main.js"


def test_strip_extension_path_passthrough():
    """Test unrelated args are unchanged."""
    assert strip_extension_path("--port=${PORT}") == "--port=${PORT}"


def test_add_then_strip_restores_arg():
    """Test prefixing and stripping are inverse for relative paths."""
    arg = "mcp-server/index.js"
    assert strip_extension_path(add_extension_path(arg)) == arg
