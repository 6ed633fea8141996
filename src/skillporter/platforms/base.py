# Platform layout base utilities
import json
from pathlib import Path
from typing import Any

from skillporter.errors import MalformedDocumentError, MissingRequiredFileError
from skillporter.models import MCPServer

# ABOUTME: Keys of a server entry that MCPServer models directly
_SERVER_KEYS = ("command", "args", "env")

# ABOUTME: Presence-only signals shared by both layouts
SHARED_DIR = "shared"
MCP_SERVER_DIR = "mcp-server"
PACKAGE_FILE = "package.json"


def read_json_file(path: Path) -> dict[str, Any]:
    """Read a JSON object from disk.

    ABOUTME: Raises MissingRequiredFileError if the file doesn't exist
    ABOUTME: Raises MalformedDocumentError for non-UTF-8 bytes, invalid JSON or a non-object root
    """
    if not path.is_file():
        raise MissingRequiredFileError(f"Missing required file: {path.name}")

    try:
        with open(path, encoding="utf-8") as f:
            result = json.load(f)
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"{path.name} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"Invalid JSON in {path.name}: {e}") from e

    if not isinstance(result, dict):
        raise MalformedDocumentError(f"{path.name} must contain a JSON object")

    return result


def is_valid_json(path: Path) -> bool:
    """Check that a file parses as JSON, without raising."""
    try:
        with open(path, encoding="utf-8") as f:
            json.load(f)
    except (OSError, ValueError):
        return False
    return True


def write_json_file(path: Path, data: dict[str, Any]) -> None:
    """Write JSON file with error handling.

    ABOUTME: Creates parent directories if needed
    ABOUTME: Uses 2-space indentation and keeps key order for readable manifests
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")  # Add trailing newline


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        MalformedDocumentError: If the file is not valid UTF-8
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"{path.name} is not valid UTF-8: {e}") from e


def write_text_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def server_to_dict(server: MCPServer) -> dict[str, Any]:
    """Convert MCPServer to manifest dict format.

    ABOUTME: Extra keys are written after command/args/env, unchanged
    ABOUTME: Omits empty args and env for cleaner output
    """
    result: dict[str, Any] = {}

    if server.command is not None:
        result["command"] = server.command
    if server.args:
        result["args"] = list(server.args)
    if server.env:
        result["env"] = dict(server.env)

    result.update(server.extra)
    return result


def dict_to_server(name: str, data: dict[str, Any]) -> MCPServer:
    """Convert manifest dict format to MCPServer.

    ABOUTME: Tolerates a missing command; the validator reports it
    ABOUTME: Non-string args and env values are stringified
    """
    if not isinstance(data, dict):
        raise MalformedDocumentError(f"MCP server '{name}' must be an object")

    command = data.get("command")
    args = data.get("args") or []
    env = data.get("env") or {}

    if not isinstance(args, list):
        raise MalformedDocumentError(f"MCP server '{name}' args must be an array")
    if not isinstance(env, dict):
        raise MalformedDocumentError(f"MCP server '{name}' env must be an object")

    return MCPServer(
        name=name,
        command=None if command is None else str(command),
        args=[str(arg) for arg in args],
        env={str(key): str(value) for key, value in env.items()},
        extra={key: value for key, value in data.items() if key not in _SERVER_KEYS},
    )


def servers_from_dict(data: Any) -> dict[str, MCPServer]:
    """Parse an mcpServers map into MCPServer objects, keyed by name."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocumentError("mcpServers must be an object")

    return {name: dict_to_server(name, server_data) for name, server_data in data.items()}


def servers_to_dict(servers: dict[str, MCPServer]) -> dict[str, dict[str, Any]]:
    return {name: server_to_dict(server) for name, server in servers.items()}
