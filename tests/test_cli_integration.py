# ABOUTME: Integration tests for the skill-porter CLI that run actual subprocess commands
# ABOUTME: Tests real CLI behavior by invoking the CLI via subprocess
import json
import os
import subprocess
import sys
from pathlib import Path

from conftest import MANIFEST


def _run(*args: str, home: Path) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["HOME"] = str(home)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(Path(__file__).parent.parent / "src"), env.get("PYTHONPATH")])
    )
    return subprocess.run(
        [sys.executable, "-m", "skillporter", *args],
        capture_output=True,
        text=True,
        timeout=30,
        env=env,
    )


class TestCliIntegration:
    """Integration tests that run the CLI via subprocess."""

    def test_integration_cli_version_output(self, tmp_path: Path):
        """Test that the CLI can be invoked and returns version information."""
        result = _run("--version", home=tmp_path)

        assert result.returncode == 0
        assert "skill-porter v" in result.stdout

    def test_integration_cli_help_output(self, tmp_path: Path):
        """Test that --help lists the commands."""
        result = _run("--help", home=tmp_path)

        assert result.returncode == 0
        for command in ("convert", "analyze", "validate", "universal", "create-pr", "fork"):
            assert command in result.stdout

    def test_integration_convert_and_validate(self, skill_dir: Path, tmp_path: Path):
        """Test converting a skill, then validating the result as universal."""
        convert = _run("convert", str(skill_dir), "--to", "gemini", home=tmp_path)

        assert convert.returncode == 0, convert.stdout + convert.stderr
        manifest = json.loads((skill_dir / "gemini-extension.json").read_text())
        assert manifest["name"] == "db-helper"

        validate = _run("validate", str(skill_dir), home=tmp_path)
        assert validate.returncode == 0, validate.stdout
        assert "Validation passed" in validate.stdout

    def test_integration_verbose_logs_to_stderr(self, tmp_path: Path):
        """Test --verbose routes debug logging to stderr."""
        directory = tmp_path / "db-helper"
        directory.mkdir()
        (directory / "gemini-extension.json").write_text(json.dumps(MANIFEST))

        result = _run("--verbose", "analyze", str(directory), home=tmp_path)

        assert result.returncode == 0
        assert "Platform: gemini" in result.stdout
        assert "[skillporter.detector] DEBUG:" in result.stderr

    def test_integration_missing_directory(self, tmp_path: Path):
        """Test validating a missing directory reports it and fails."""
        result = _run("validate", str(tmp_path / "missing"), "--platform", "claude", home=tmp_path)

        assert result.returncode == 1
        assert "Directory not found" in result.stdout
