# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for brewversion.

This module provides the main CLI entry point for the brewversion tool.

Commands:

    detect: Detect the version a download URL points at
    parse: Normalize a literal version string
    compare: Compare two version strings
    check: Run compatibility checks against a source URL

Example:
    Detect a version:
        ```bash
        $ brewversion detect https://example.com/tool-2.4.1.tar.gz
        2.4.1
        ```

    Compare two versions:
        ```bash
        $ brewversion compare 1.0.0-rc1 1.0.0
        -1
        ```

    Check a URL against the published formula:
        ```bash
        $ brewversion check https://example.com/wget-1.25.0.tar.gz --formula wget
        ```

Exit Codes:

- 0: Success (for check: status ok or warn)
- 1: No result (nothing detected, unparseable, unordered) or an error

Note:
    The CLI uses argparse for command parsing.
    Each command has its own handler function (cmd_<command>).
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and shows which extraction rule matched.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys

from brewversion.checks import run_checks
from brewversion.config import load_config
from brewversion.core import compare_versions, parse_version
from brewversion.exceptions import BrewVersionError
from brewversion.logging import get_logger, set_global_logger
from brewversion.versioning import match_spec


def _configure_logger(args: argparse.Namespace) -> None:
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def cmd_detect(args: argparse.Namespace) -> int:
    """Handler for 'brewversion detect' command.

    Args:
        args: Parsed command-line arguments containing the URL, optional tag
            and verbosity flags.

    Returns:
        Exit code (0 when a version was detected, 1 otherwise).

    """
    _configure_logger(args)

    spec = args.tag if args.tag is not None else args.url
    match = match_spec(spec, from_url=True)
    if match is None:
        print(f"No version detected from: {spec}")
        return 1

    if args.verbose or args.debug:
        print(f"Rule:    {match.index} ({match.rule.name}, {match.rule.mode})")
        print(f"Version: {match.version}")
    else:
        print(match.version)
    return 0


def cmd_parse(args: argparse.Namespace) -> int:
    """Handler for 'brewversion parse' command.

    Returns:
        Exit code (0 when the version parsed, 1 otherwise).

    """
    _configure_logger(args)

    parsed = parse_version(args.version)
    if parsed is None:
        print(f"Could not parse version: {args.version!r}")
        return 1
    print(parsed)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'brewversion compare' command.

    Prints -1, 0 or 1 as LEFT is older than, equal to or newer than RIGHT.

    Returns:
        Exit code (0 when the versions are ordered, 1 otherwise).

    """
    _configure_logger(args)

    result = compare_versions(args.left, args.right)
    if result is None:
        print(f"Versions are not comparable: {args.left!r}, {args.right!r}")
        return 1
    print(result)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'brewversion check' command.

    Loads configuration, runs the compatibility checks and prints the
    report.

    Returns:
        Exit code (0 for "ok" or "warn" reports, 1 for "fail" or errors).

    """
    _configure_logger(args)

    try:
        config = load_config(args.config)
        report = run_checks(
            args.url,
            declared_version=args.declared,
            formula_name=args.formula,
            config=config,
        )
    except BrewVersionError as err:
        return _report_error(err, args)

    print("=" * 70)
    print("CHECK RESULTS")
    print("=" * 70)
    print(f"URL:       {args.url}")
    print(f"Detected:  {report.detected_version or '(none)'}")
    print(f"Status:    {report.status.upper()}")
    print()
    for check in report.checks:
        marker = {"ok": "[OK]", "warn": "[WARNING]", "fail": "[X]"}[check.status]
        print(f"  {marker} {check.message}")
    print("=" * 70)
    print()
    print(f"{report.title}: {report.summary}")

    return 1 if report.status == "fail" else 0


def _add_verbosity(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def _package_version() -> str:
    try:
        return version("brewversion")
    except PackageNotFoundError:
        from brewversion import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands registered."""
    parser = argparse.ArgumentParser(
        prog="brewversion",
        description="Detect and compare software versions from download URLs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"brewversion {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'detect' command
    parser_detect = subparsers.add_parser(
        "detect",
        help="Detect the version a download URL points at",
        description="Run the extraction rules over a URL and print the version.",
    )
    parser_detect.add_argument("url", help="Download URL or filename")
    parser_detect.add_argument(
        "--tag",
        default=None,
        help="Tag name to detect from instead of the URL",
    )
    _add_verbosity(parser_detect)
    parser_detect.set_defaults(func=cmd_detect)

    # 'parse' command
    parser_parse = subparsers.add_parser(
        "parse",
        help="Normalize a literal version string",
        description="Parse a version string the way a filename would be parsed.",
    )
    parser_parse.add_argument("version", help="Version string (e.g. v1.2.3)")
    _add_verbosity(parser_parse)
    parser_parse.set_defaults(func=cmd_parse)

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare two version strings",
        description="Print -1, 0 or 1 as LEFT is older, equal or newer than RIGHT.",
    )
    parser_compare.add_argument("left", help="Left-hand version")
    parser_compare.add_argument("right", help="Right-hand version")
    _add_verbosity(parser_compare)
    parser_compare.set_defaults(func=cmd_compare)

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Run compatibility checks against a source URL",
        description=(
            "Check version detection, HTTPS, archive extension, a declared "
            "version and (optionally) the published formula version."
        ),
    )
    parser_check.add_argument("url", help="Candidate source URL")
    parser_check.add_argument(
        "--declared",
        default=None,
        help="Version the formula will declare",
    )
    parser_check.add_argument(
        "--formula",
        default=None,
        help="Existing formula name to compare against (network lookup)",
    )
    parser_check.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: brewversion.yaml found upward from cwd)",
    )
    _add_verbosity(parser_check)
    parser_check.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the brewversion CLI.

    This function is registered as the 'brewversion' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
