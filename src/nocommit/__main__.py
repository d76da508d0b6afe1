"""nocommit CLI entry point.

Usage:
    nocommit check [--config PATH] [--diff-file PATH] [--all] [--format text|json] [--verbose]
    nocommit init [--path DIR] [--force] [--pre-commit-config]
    python -m nocommit check [options]
"""

from __future__ import annotations

import argparse
import sys

from nocommit.config import ConfigError, NoCommitConfig, compile_patterns
from nocommit.diff_parser import parse_diff
from nocommit.diff_source import DiffSourceError, get_staged_diff, read_diff_file
from nocommit.init_command import init_command
from nocommit.matcher import RuleMatcher
from nocommit.reporters.json_reporter import JSONReporter
from nocommit.reporters.text_reporter import BYPASS_HINT, TextReporter


def check_command(args: argparse.Namespace) -> int:
    """Execute the check command."""
    try:
        config = NoCommitConfig.load(args.config)
        patterns = compile_patterns(config.pattern_specs())
    except ConfigError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        print(f"Commit aborted. {BYPASS_HINT}", file=sys.stderr)
        return 1

    # Get diff
    try:
        if args.diff_file:
            diff_text = read_diff_file(args.diff_file)
        else:
            diff_text = get_staged_diff()
    except DiffSourceError as e:
        print(f"Error: could not read staged changes: {e}", file=sys.stderr)
        print(f"Commit aborted. {BYPASS_HINT}", file=sys.stderr)
        return 1

    segments = parse_diff(diff_text)
    if args.verbose:
        print(f"Scanning {len(segments)} staged file(s)...", file=sys.stderr)

    matcher = RuleMatcher(
        patterns,
        report_all=args.all or config.report_all,
        excluded_paths=config.excluded_paths,
    )
    result = matcher.check(segments)

    if args.format == "json":
        print(JSONReporter().render(result))
    else:
        output = TextReporter().render(result)
        if output:
            print(output)

    if args.verbose:
        print(
            f"Verdict: {result.action.value} ({len(result.violations)} violation(s) "
            f"in {result.files_scanned} file(s))",
            file=sys.stderr,
        )

    return 1 if result.blocked else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="nocommit",
        description="Block commits that add lines matching forbidden patterns",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check subcommand
    check_parser = subparsers.add_parser("check", help="Check staged changes (run as the pre-commit hook)")
    check_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to .nocommit.yml config file",
    )
    check_parser.add_argument(
        "--diff-file",
        type=str,
        default=None,
        help="Check a saved diff file instead of the staged changes ('-' for stdin)",
    )
    check_parser.add_argument(
        "--all",
        action="store_true",
        help="Report every offending file instead of stopping at the first",
    )
    check_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and the verdict to stderr",
    )

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a default .nocommit.yml and install the pre-commit hook",
    )
    init_parser.add_argument(
        "--path",
        type=str,
        default=None,
        help="Repository directory to initialize (default: current directory)",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing files without asking",
    )
    init_parser.add_argument(
        "--pre-commit-config",
        action="store_true",
        help="Write a .pre-commit-config.yaml entry instead of installing .git/hooks/pre-commit",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        sys.exit(check_command(args))
    elif args.command == "init":
        sys.exit(init_command(args))
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":  # pragma: no cover
    main()
