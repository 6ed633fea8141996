# Pull request generation for dual-platform support
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from skillporter.converters.base import PROJECT_URL
from skillporter.errors import CommandError, PorterError
from skillporter.models import Platform
from skillporter.utils.commands import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

BRANCH_NAME = "skill-porter/add-dual-platform-support"

_PR_URL = re.compile(r"https://github\.com/[^\s]+")

_ADDED_FILES = {
    Platform.GEMINI: [
        "Added `gemini-extension.json` - Gemini CLI manifest",
        "Added `GEMINI.md` - Gemini context file",
        "Transformed MCP server paths for Gemini compatibility",
        "Converted tool restrictions (allowed-tools -> excludeTools)",
        "Inferred settings schema from environment variables",
    ],
    Platform.CLAUDE: [
        "Added `SKILL.md` - Claude Code skill definition",
        "Added `.claude-plugin/marketplace.json` - Claude plugin config",
        "Transformed MCP server paths for Claude compatibility",
        "Converted tool restrictions (excludeTools -> allowed-tools)",
        "Documented environment variables from settings",
    ],
}

_INSTALL_COMMANDS = {
    Platform.CLAUDE: "cp -r . ~/.claude/skills/$(basename $PWD)",
    Platform.GEMINI: "gemini extensions install .",
}


@dataclass
class PRResult:
    """Outcome of a PR generation run."""
    success: bool = False
    pr_url: str | None = None
    branch: str = BRANCH_NAME
    errors: list[str] = field(default_factory=list)

    def add_error(self, error: str) -> None:
        self.errors.append(error)


def pr_title(target: Platform) -> str:
    return f"Add {target.label} support for cross-platform compatibility"


def commit_message(target: Platform) -> str:
    """Build the commit message for the conversion commit."""
    other = Platform.CLAUDE if target is Platform.GEMINI else Platform.GEMINI
    changes = "\n".join(f"- {line}" for line in _ADDED_FILES[target])

    return (
        f"{pr_title(target)}\n\n"
        f"Adds {target.label} support while keeping the existing {other.label} "
        f"files, so the skill/extension works on both platforms.\n\n"
        f"{changes}\n"
        f"- Created `shared/` directory for shared documentation\n"
    )


def pr_body(target: Platform) -> str:
    """Build the pull request description."""
    other = Platform.CLAUDE if target is Platform.GEMINI else Platform.GEMINI

    return (
        f"This PR adds {target.label} support, making this skill/extension work on "
        f"both Claude Code and Gemini CLI.\n\n"
        f"Converted using [skill-porter]({PROJECT_URL}).\n\n"
        f"## What Changed\n\n"
        + "\n".join(f"- {line}" for line in _ADDED_FILES[target])
        + "\n\n## Installation\n\n"
        f"### {other.label} (existing)\n\n```bash\n{_INSTALL_COMMANDS[other]}\n```\n\n"
        f"### {target.label} (new)\n\n```bash\n{_INSTALL_COMMANDS[target]}\n```\n\n"
        f"## Testing Checklist\n\n"
        f"- [x] Conversion validated\n"
        f"- [ ] Tested on {target.label}\n"
    )


def extract_pr_url(output: str) -> str | None:
    """Find the PR URL in `gh pr create` output.

    Examples:
        >>> extract_pr_url("Creating pull request\\nhttps://github.com/o/r/pull/7\\n")
        'https://github.com/o/r/pull/7'
    """
    match = _PR_URL.search(output)
    return match.group(0) if match else None


class PRGenerator:
    """Commits converted files on a branch and opens a pull request with gh.

    ABOUTME: Expects the conversion to have run already (uncommitted changes present)
    ABOUTME: Stops at the first failing step and reports its message
    """

    def __init__(self, path: Path | str, runner: CommandRunner | None = None) -> None:
        self.path = Path(path)
        self.runner = runner if runner is not None else SubprocessRunner()

    def generate(
        self,
        target: Platform | str,
        remote: str = "origin",
        base: str = "main",
        draft: bool = False,
    ) -> PRResult:
        """Run the full branch, commit, push and PR sequence.

        Args:
            target: Platform the conversion added
            remote: Git remote to push to
            base: Base branch for the PR
            draft: Open the PR as a draft

        Returns:
            PRResult with the PR URL on success
        """
        result = PRResult()

        try:
            target = Platform.parse(target)
            if target not in _ADDED_FILES:
                raise PorterError(f"Invalid target platform: {target.value}. Must be 'claude' or 'gemini'")

            self.check_gh()
            self.check_git_repo()
            if not self.has_uncommitted_changes():
                raise PorterError("No uncommitted changes found. Run conversion first.")

            self.create_branch()
            self.commit(target)
            self.push(remote)
            result.pr_url = self.create_pr(target, base, draft)
            result.success = True
        except PorterError as e:
            logger.debug(f"PR generation failed: {e}")
            result.add_error(str(e))

        return result

    def _run(self, cmd: list[str]) -> str:
        return self.runner.run(cmd, cwd=self.path)

    def check_gh(self) -> None:
        try:
            self.runner.run(["gh", "--version"])
        except CommandError as e:
            raise CommandError(
                "GitHub CLI (gh) not found. Install from https://cli.github.com", cmd=e.cmd
            ) from e

        try:
            self.runner.run(["gh", "auth", "status"])
        except CommandError as e:
            raise CommandError(
                "GitHub CLI not authenticated. Run: gh auth login", cmd=e.cmd, stderr=e.stderr
            ) from e

    def check_git_repo(self) -> None:
        try:
            self._run(["git", "rev-parse", "--git-dir"])
        except CommandError as e:
            raise CommandError(
                "Not a git repository. Initialize with: git init", cmd=e.cmd, stderr=e.stderr
            ) from e

    def has_uncommitted_changes(self) -> bool:
        return bool(self._run(["git", "status", "--porcelain"]).strip())

    def create_branch(self) -> None:
        """Check out the PR branch, creating it when it doesn't exist."""
        try:
            self._run(["git", "rev-parse", "--verify", BRANCH_NAME])
        except CommandError:
            checkout = ["git", "checkout", "-b", BRANCH_NAME]
        else:
            checkout = ["git", "checkout", BRANCH_NAME]

        try:
            self._run(checkout)
        except CommandError as e:
            raise CommandError(f"Failed to create branch: {e}", cmd=e.cmd, stderr=e.stderr) from e

    def commit(self, target: Platform) -> None:
        try:
            self._run(["git", "add", "."])
            self._run(["git", "commit", "-m", commit_message(target)])
        except CommandError as e:
            raise CommandError(f"Failed to commit changes: {e}", cmd=e.cmd, stderr=e.stderr) from e

    def push(self, remote: str) -> None:
        try:
            self._run(["git", "push", "-u", remote, BRANCH_NAME])
        except CommandError as e:
            raise CommandError(f"Failed to push branch: {e}", cmd=e.cmd, stderr=e.stderr) from e

    def create_pr(self, target: Platform, base: str, draft: bool) -> str:
        """Open the PR and return its URL (or a generic message if gh printed none)."""
        cmd = [
            "gh", "pr", "create",
            "--base", base,
            "--title", pr_title(target),
            "--body", pr_body(target),
        ]
        if draft:
            cmd.append("--draft")

        try:
            output = self._run(cmd)
        except CommandError as e:
            raise CommandError(f"Failed to create PR: {e}", cmd=e.cmd, stderr=e.stderr) from e

        return extract_pr_url(output) or "PR created successfully"
