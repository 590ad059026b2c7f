"""CLI entry point: ``callorder check``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from callorder import __version__
from callorder.config import SUPPORTED_LANGUAGES, Settings
from callorder.constants import (
    EXIT_CLEAN,
    EXIT_USAGE,
    EXIT_VIOLATIONS,
    ReportFormat,
)
from callorder.logging_config import setup_logging


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"callorder {__version__}")
        return

    if args.command == "check":
        sys.exit(_run_check(args))
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="callorder",
        description=(
            "Flag functions declared out of call order: "
            "callers before callees, callees in call order."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    check = sub.add_parser(
        "check",
        help="Check source files or directories",
    )
    check.add_argument(
        "paths",
        nargs="+",
        help="Files or directories to check",
    )
    check.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in ReportFormat],
        default=ReportFormat.TEXT.value,
        help="Report format (default: text)",
    )
    check.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the report to this file instead of stdout",
    )
    check.add_argument(
        "--language",
        "-l",
        action="append",
        choices=SUPPORTED_LANGUAGES,
        default=None,
        help=(
            "Only check this language; repeatable "
            "(default: all supported)"
        ),
    )
    check.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser


def _run_check(args: argparse.Namespace) -> int:
    """Execute the check command and return the exit code."""
    from callorder.diagnostics import render_json, render_text
    from callorder.services.check_service import run_check

    paths = [Path(p) for p in args.paths]
    missing = [p for p in paths if not p.exists()]
    if missing:
        for p in missing:
            print(f"Error: {p} does not exist", file=sys.stderr)
        return EXIT_USAGE

    try:
        settings = (
            Settings(languages=args.language)
            if args.language
            else Settings()
        )
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    try:
        setup_logging(settings.log_level, verbose=args.verbose)
    except ValueError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    result = asyncio.run(run_check(paths, settings))

    if args.format == ReportFormat.JSON:
        report = render_json(result)
    else:
        report = render_text(result)

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report + "\n", encoding="utf-8")
    else:
        print(report)

    return EXIT_VIOLATIONS if result.violation_count else EXIT_CLEAN


if __name__ == "__main__":
    main()
