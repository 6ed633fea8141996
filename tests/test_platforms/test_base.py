# Tests for shared layout readers, writers and server conversion
import json
from pathlib import Path

import pytest

from skillporter.errors import MalformedDocumentError, MissingRequiredFileError
from skillporter.models import MCPServer
from skillporter.platforms.base import (
    dict_to_server,
    is_valid_json,
    read_json_file,
    server_to_dict,
    servers_from_dict,
    servers_to_dict,
    write_json_file,
)


def test_read_json_file_missing(tmp_path: Path) -> None:
    """Test a missing file raises with its name."""
    with pytest.raises(MissingRequiredFileError, match="Missing required file: x.json"):
        read_json_file(tmp_path / "x.json")


def test_read_json_file_not_object(tmp_path: Path) -> None:
    """Test a JSON array root is rejected."""
    path = tmp_path / "x.json"
    path.write_text("[]")
    with pytest.raises(MalformedDocumentError):
        read_json_file(path)


def test_is_valid_json(tmp_path: Path) -> None:
    """Test validity checks never raise."""
    good = tmp_path / "good.json"
    good.write_text("[1]")
    bad = tmp_path / "bad.json"
    bad.write_text("[1,")

    assert is_valid_json(good)
    assert not is_valid_json(bad)
    assert not is_valid_json(tmp_path / "missing.json")


def test_write_json_file(tmp_path: Path) -> None:
    """Test output keeps key order, unicode and a trailing newline."""
    path = tmp_path / "nested" / "out.json"
    write_json_file(path, {"name": "café", "a": 1})

    text = path.read_text(encoding="utf-8")
    assert text == '{\n  "name": "café",\n  "a": 1\n}\n'


def test_dict_to_server_keeps_extra_keys() -> None:
    """Test unmodelled keys survive conversion both ways."""
    data = {"command": "node", "args": ["a.js"], "cwd": "/tmp", "timeout": 30}
    server = dict_to_server("db", data)

    assert server.extra == {"cwd": "/tmp", "timeout": 30}
    assert server_to_dict(server) == data


def test_dict_to_server_without_command() -> None:
    """Test a missing command is tolerated."""
    server = dict_to_server("db", {"args": ["x"]})
    assert server.command is None
    assert server_to_dict(server) == {"args": ["x"]}


def test_dict_to_server_rejects_bad_args() -> None:
    """Test args must be a list."""
    with pytest.raises(MalformedDocumentError, match="args must be an array"):
        dict_to_server("db", {"command": "node", "args": "a.js"})


def test_servers_from_dict() -> None:
    """Test parsing an mcpServers map."""
    assert servers_from_dict(None) == {}
    with pytest.raises(MalformedDocumentError):
        servers_from_dict(["not", "a", "map"])

    servers = servers_from_dict({"db": {"command": "node", "env": {"PORT": 5432}}})
    assert servers["db"] == MCPServer(name="db", command="node", env={"PORT": "5432"})


def test_servers_to_dict_omits_empty() -> None:
    """Test empty args and env are omitted."""
    servers = {"db": MCPServer(name="db", command="node")}
    assert json.loads(json.dumps(servers_to_dict(servers))) == {"db": {"command": "node"}}
