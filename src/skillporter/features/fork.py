# Fork setup: a universal copy wired into both platforms
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from skillporter.errors import CommandError, PorterError
from skillporter.models import ConversionResult
from skillporter.porter import SkillPorter
from skillporter.utils.commands import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


@dataclass
class ForkResult:
    """Outcome of a fork setup.

    ABOUTME: installations maps platform name to an install path or instruction
    """
    success: bool = False
    fork_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    installations: dict[str, str] = field(default_factory=dict)
    conversion: ConversionResult | None = None

    def add_error(self, error: str) -> None:
        self.errors.append(error)


def get_claude_skills_dir() -> Path:
    """Return ~/.claude/skills, resolved at call time."""
    return Path.home() / ".claude" / "skills"


class ForkSetup:
    """Creates a fork of a skill/extension usable from both platforms.

    ABOUTME: Clones repo_url when given, else copies the source tree
    ABOUTME: Converts whatever layout is missing, then links the fork into ~/.claude/skills
    """

    def __init__(
        self,
        path: Path | str,
        runner: CommandRunner | None = None,
        porter: SkillPorter | None = None,
    ) -> None:
        self.path = Path(path)
        self.runner = runner if runner is not None else SubprocessRunner()
        self.porter = porter if porter is not None else SkillPorter()

    def setup(self, fork_location: Path | str, repo_url: str | None = None) -> ForkResult:
        """Create the fork and set up installations.

        Args:
            fork_location: Directory to create the fork in
            repo_url: Repository to clone instead of copying the source

        Returns:
            ForkResult with the fork path and installation details
        """
        result = ForkResult()

        try:
            fork_path = self.create_fork_directory(fork_location)
            result.fork_path = fork_path

            if repo_url:
                self.clone(repo_url, fork_path)
            else:
                self.copy(fork_path)

            conversion = self.porter.make_universal(fork_path)
            result.conversion = conversion
            if not conversion.success:
                for error in conversion.errors:
                    result.add_error(error)
                return result

            result.installations = self.setup_installations(fork_path)
            result.success = True
        except PorterError as e:
            logger.debug(f"Fork setup failed: {e}")
            result.add_error(str(e))

        return result

    def create_fork_directory(self, fork_location: Path | str) -> Path:
        fork_path = Path(fork_location).expanduser().resolve()
        try:
            fork_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PorterError(f"Failed to create fork directory: {e}") from e
        return fork_path

    def clone(self, repo_url: str, fork_path: Path) -> None:
        try:
            self.runner.run(["git", "clone", repo_url, str(fork_path)])
        except CommandError as e:
            raise CommandError(
                f"Failed to clone repository: {e}", cmd=e.cmd, stderr=e.stderr
            ) from e

    def copy(self, fork_path: Path) -> None:
        """Copy the source tree into the fork directory."""
        if not self.path.is_dir():
            raise PorterError(f"Directory not found: {self.path}")
        try:
            shutil.copytree(self.path, fork_path, symlinks=True, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            raise PorterError(f"Failed to copy directory: {e}") from e
        logger.debug(f"Copied {self.path} to {fork_path}")

    def setup_installations(self, fork_path: Path) -> dict[str, str]:
        """Link the fork into Claude's skills directory; describe the Gemini step.

        ABOUTME: An existing entry at the link path is reported, not replaced
        ABOUTME: Link failures are reported in the returned text, not raised
        """
        skills_dir = get_claude_skills_dir()
        link_path = skills_dir / fork_path.name

        try:
            skills_dir.mkdir(parents=True, exist_ok=True)
            link_path.symlink_to(fork_path, target_is_directory=True)
            claude = str(link_path)
        except FileExistsError:
            claude = f"{link_path} (already exists)"
        except OSError as e:
            claude = f"Failed: {e}"

        return {
            "claude": claude,
            "gemini": f"Run: gemini extensions install {fork_path}",
        }
