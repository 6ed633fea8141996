# ABOUTME: Narrow command execution interface for git/gh collaborators
# ABOUTME: Core conversion and validation never import this module
import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from skillporter.errors import CommandError

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT = 120  # seconds


@runtime_checkable
class CommandRunner(Protocol):
    """Runs one external command and returns its stdout."""

    def run(self, cmd: list[str], cwd: Path | None = None) -> str:
        """Run cmd in cwd.

        Raises:
            CommandError: If the command is missing, fails or times out
        """
        ...


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by subprocess.run.

    ABOUTME: No shell, arguments are passed as a list
    ABOUTME: Fire-and-wait with a timeout, no retry
    """

    def __init__(self, timeout: int | None = None) -> None:
        self.timeout = timeout if timeout is not None else COMMAND_TIMEOUT

    def run(self, cmd: list[str], cwd: Path | None = None) -> str:
        logger.debug(f"Running {' '.join(cmd)} (cwd={cwd})")

        try:
            completed = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CommandError(f"Command not found: {cmd[0]}", cmd=cmd) from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                f"Command timed out after {self.timeout} seconds: {' '.join(cmd)}", cmd=cmd
            ) from e

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            detail = stderr or (completed.stdout or "").strip() or f"exit code {completed.returncode}"
            raise CommandError(f"{' '.join(cmd[:2])} failed: {detail}", cmd=cmd, stderr=stderr)

        return completed.stdout or ""
