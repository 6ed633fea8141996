# CLI interface for skill-porter
import argparse
import logging
import sys
from pathlib import Path

from skillporter import __version__
from skillporter.config import load_config
from skillporter.errors import PorterError
from skillporter.features import ForkSetup, PRGenerator
from skillporter.models import DetectedFile, Platform
from skillporter.porter import SkillPorter

# ABOUTME: Exit codes
# 0 = success, 1 = operation failed, 2 = usage/config error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3

# ABOUTME: ANSI escape codes, applied only when stdout is a terminal
BOLD = "\033[1m"
RESET = "\033[0m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
CYAN = "\033[96m"
GRAY = "\033[90m"


def _style(text: str, *codes: str) -> str:
    if not sys.stdout.isatty():
        return text
    return "".join(codes) + text + RESET


def _print_list(title: str, items: list[str], color: str) -> None:
    if not items:
        return
    print(_style(title, color, BOLD))
    for item in items:
        print(_style(f"  - {item}", color))
    print()


def _print_files(title: str, files: list[DetectedFile]) -> None:
    if not files:
        return
    print(_style(title, BOLD))
    for detected in files:
        status = _style("✓", GREEN) if detected.valid else _style("✗", RED)
        issue = f" ({detected.issue})" if detected.issue else ""
        print(f"  {status} {detected.file}{issue}")
    print()


def _make_porter(args: argparse.Namespace) -> SkillPorter:
    config = load_config(Path(args.config) if args.config else None)
    backup_dir = config.resolved_backup_dir() if getattr(args, "backup", False) else None
    return SkillPorter(config=config, backup_dir=backup_dir)


def _install_hint(target: Platform, path: str) -> str:
    if target is Platform.GEMINI:
        return f"gemini extensions install {path}"
    return f"cp -r {path} ~/.claude/skills/"


def cmd_convert(args: argparse.Namespace) -> int:
    """Execute convert command.

    ABOUTME: Converts one directory and prints files, warnings and next steps
    ABOUTME: Exit 1 when conversion or validation of the output failed
    """
    print(_style("Converting skill/extension...", CYAN))
    print()

    try:
        porter = _make_porter(args)
        result = porter.convert(
            Path(args.path).resolve(),
            args.to,
            output=Path(args.output).resolve() if args.output else None,
            validate=not args.no_validate,
        )
    except PorterError as e:
        print(_style(f"✗ Error: {e}", RED))
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(_style(f"Fatal error: {e}", RED))
        return EXIT_FATAL

    if not result.success:
        print(_style("✗ Conversion failed", RED))
        print()
        _print_list("Errors:", result.errors, RED)
        _print_list("Warnings:", result.warnings, YELLOW)
        return EXIT_FAILURE

    if result.message:
        print(_style(f"✓ {result.message}", GREEN))
        print()
        return EXIT_SUCCESS

    print(_style("✓ Conversion successful!", GREEN))
    print()
    _print_list("Generated files:", [str(path) for path in result.files], GRAY)
    _print_list("Warnings:", result.warnings, YELLOW)

    if result.validation is not None:
        print(_style("✓ Validation passed", GREEN))
        print()
        _print_list("Validation warnings:", result.validation.warnings, YELLOW)

    backups = result.metadata.get("backups", [])
    _print_list("Backups:", [str(path) for path in backups], GRAY)

    print(_style("Next steps:", BOLD))
    print(f"  {_install_hint(Platform.parse(args.to), args.output or args.path)}")
    print()
    return EXIT_SUCCESS


def cmd_analyze(args: argparse.Namespace) -> int:
    """Execute analyze command.

    ABOUTME: Prints detected platform, files per side and key metadata
    """
    print(_style("Analyzing directory...", CYAN))
    print()

    try:
        detection = SkillPorter().analyze(Path(args.path).resolve())
    except PorterError as e:
        print(_style(f"✗ Error: {e}", RED))
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(_style(f"Fatal error: {e}", RED))
        return EXIT_FATAL

    print(_style("Detection Results:", BOLD))
    print(f"  Platform: {detection.platform.value}")
    print(f"  Confidence: {detection.confidence}")
    print()

    _print_files("Claude files found:", detection.claude_files)
    _print_files("Gemini files found:", detection.gemini_files)
    _print_list("Shared files found:", [f.file for f in detection.shared_files], GRAY)

    claude = detection.metadata.get("claude")
    gemini = detection.metadata.get("gemini")
    if claude or gemini:
        print(_style("Metadata:", BOLD))
        if claude:
            print(f"  Name: {claude.get('name') or 'N/A'}")
            print(f"  Description: {claude.get('description') or 'N/A'}")
        if gemini:
            print(f"  Name: {gemini.get('name') or 'N/A'}")
            print(f"  Version: {gemini.get('version') or 'N/A'}")
        print()

    return EXIT_SUCCESS


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute validate command.

    ABOUTME: Platform is auto-detected unless --platform is given
    ABOUTME: Exit 1 when any error was found
    """
    print(_style("Validating...", CYAN))
    print()

    try:
        validation = SkillPorter().validate(Path(args.path).resolve(), args.platform)
    except PorterError as e:
        print(_style(f"✗ Error: {e}", RED))
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(_style(f"Fatal error: {e}", RED))
        return EXIT_FATAL

    if validation.valid:
        print(_style("✓ Validation passed!", GREEN))
    else:
        print(_style("✗ Validation failed", RED))
    print()

    _print_list("Errors:", validation.errors, RED)
    _print_list("Warnings:", validation.warnings, YELLOW)

    return EXIT_SUCCESS if validation.valid else EXIT_FAILURE


def cmd_universal(args: argparse.Namespace) -> int:
    """Execute universal command."""
    print(_style("Creating universal skill/extension...", CYAN))
    print()

    try:
        porter = _make_porter(args)
        result = porter.make_universal(
            Path(args.path).resolve(),
            output=Path(args.output).resolve() if args.output else None,
        )
    except PorterError as e:
        print(_style(f"✗ Error: {e}", RED))
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(_style(f"Fatal error: {e}", RED))
        return EXIT_FATAL

    if not result.success:
        print(_style("✗ Failed to create universal skill/extension", RED))
        print()
        _print_list("Errors:", result.errors, RED)
        return EXIT_FAILURE

    print(_style(f"✓ {result.message}", GREEN))
    print()
    _print_list("Generated files:", [str(path) for path in result.files], GRAY)
    _print_list("Warnings:", result.warnings, YELLOW)
    print("Your skill/extension now works with both Claude Code and Gemini CLI.")
    print()
    return EXIT_SUCCESS


def cmd_create_pr(args: argparse.Namespace) -> int:
    """Execute create-pr command.

    ABOUTME: Commits the converted files and opens a PR through gh
    """
    print(_style("Creating pull request...", CYAN))
    print()

    try:
        result = PRGenerator(Path(args.path).resolve()).generate(
            args.to,
            remote=args.remote,
            base=args.base,
            draft=args.draft,
        )
    except Exception as e:
        print(_style(f"Fatal error: {e}", RED))
        return EXIT_FATAL

    if not result.success:
        print(_style("✗ Failed to create pull request", RED))
        print()
        _print_list("Errors:", result.errors, RED)
        return EXIT_FAILURE

    print(_style("✓ Pull request created!", GREEN))
    print(f"  Branch: {result.branch}")
    print(f"  URL: {result.pr_url}")
    print()
    return EXIT_SUCCESS


def cmd_fork(args: argparse.Namespace) -> int:
    """Execute fork command.

    ABOUTME: Creates a universal fork and links it for both platforms
    """
    print(_style("Setting up fork...", CYAN))
    print()

    try:
        porter = _make_porter(args)
        result = ForkSetup(Path(args.path).resolve(), porter=porter).setup(
            args.fork_location,
            repo_url=args.repo_url,
        )
    except PorterError as e:
        print(_style(f"✗ Error: {e}", RED))
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(_style(f"Fatal error: {e}", RED))
        return EXIT_FATAL

    if not result.success:
        print(_style("✗ Fork setup failed", RED))
        print()
        _print_list("Errors:", result.errors, RED)
        return EXIT_FAILURE

    print(_style("✓ Fork created!", GREEN))
    print(f"  Location: {result.fork_path}")
    print()
    print(_style("Installations:", BOLD))
    print(f"  {Platform.CLAUDE.label}: {result.installations.get('claude')}")
    print(f"  {Platform.GEMINI.label}: {result.installations.get('gemini')}")
    print()
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="skill-porter",
        description="Convert Claude Code skills to Gemini CLI extensions and vice versa"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"skill-porter v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print debug logging to stderr"
    )
    parser.add_argument(
        "--config",
        help="Path to config.toml (default: ~/.skill-porter/config.toml)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    targets = [Platform.CLAUDE.value, Platform.GEMINI.value]

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a skill or extension between platforms"
    )
    convert_parser.add_argument("path", help="Source directory")
    convert_parser.add_argument(
        "--to", "-t",
        choices=targets,
        default=Platform.GEMINI.value,
        help="Target platform (default: gemini)"
    )
    convert_parser.add_argument(
        "--output", "-o",
        help="Output directory (default: convert in place)"
    )
    convert_parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip validation after conversion"
    )
    convert_parser.add_argument(
        "--backup",
        action="store_true",
        help="Back up files before overwriting them"
    )

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Detect the platform of a directory"
    )
    analyze_parser.add_argument("path", help="Directory to analyze")

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a skill or extension"
    )
    validate_parser.add_argument("path", help="Directory to validate")
    validate_parser.add_argument(
        "--platform", "-p",
        choices=targets + [Platform.UNIVERSAL.value],
        help="Platform to validate against (default: auto-detect)"
    )

    # universal command
    universal_parser = subparsers.add_parser(
        "universal",
        help="Make a skill/extension work on both platforms"
    )
    universal_parser.add_argument("path", help="Source directory")
    universal_parser.add_argument(
        "--output", "-o",
        help="Output directory (default: convert in place)"
    )
    universal_parser.add_argument(
        "--backup",
        action="store_true",
        help="Back up files before overwriting them"
    )

    # create-pr command
    pr_parser = subparsers.add_parser(
        "create-pr",
        help="Open a pull request adding the converted platform files"
    )
    pr_parser.add_argument("path", help="Converted repository directory")
    pr_parser.add_argument(
        "--to", "-t",
        choices=targets,
        default=Platform.GEMINI.value,
        help="Platform the conversion added (default: gemini)"
    )
    pr_parser.add_argument("--remote", default="origin", help="Git remote (default: origin)")
    pr_parser.add_argument("--base", default="main", help="Base branch (default: main)")
    pr_parser.add_argument("--draft", action="store_true", help="Open the PR as a draft")

    # fork command
    fork_parser = subparsers.add_parser(
        "fork",
        help="Create a universal fork installed for both platforms"
    )
    fork_parser.add_argument("path", help="Source directory")
    fork_parser.add_argument(
        "--fork-location",
        required=True,
        help="Directory to create the fork in"
    )
    fork_parser.add_argument("--repo-url", help="Clone this repository instead of copying")

    return parser


COMMANDS = {
    "convert": cmd_convert,
    "analyze": cmd_analyze,
    "validate": cmd_validate,
    "universal": cmd_universal,
    "create-pr": cmd_create_pr,
    "fork": cmd_fork,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(name)s] %(levelname)s: %(message)s",
            stream=sys.stderr,
        )

    handler = COMMANDS.get(args.command)
    if handler is None:
        # No command specified, show help
        parser.print_help()
        return EXIT_SUCCESS

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
