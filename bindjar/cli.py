"""Command line entry point.

    bindjar [-v] [-o <jar>] [-s <dir>] build <pkg1> [<pkg2> ...]

Exit status is 0 only when the jar was written.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from bindjar.core.config import Settings, get_settings
from bindjar.core.logging import configure_structlog
from bindjar.errors import BindError
from bindjar.pipeline import bind_to_jar

USAGE = """bindjar is a tool for creating Java bindings to Go

Usage:

\tbindjar [-v] [-o <jar>] [-s <dir>] build [<pkg1>, [<pkg2>...]]

This generates a jar containing Java bindings to the specified Go packages.
"""


class _UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="bindjar",
        usage=argparse.SUPPRESS,
        description=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Path to write the generated jar file. (default %r)"
        % Settings.model_fields["default_jar"].default,
    )
    parser.add_argument(
        "-s", "--source-dir",
        default=None,
        help="Additional path to scan for Java source code. These files will be "
        "compiled and included in the final jar.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output.")
    parser.add_argument("command", nargs="?", help="Subcommand; only 'build' is supported.")
    parser.add_argument("packages", nargs="*", help="Go import paths to bind.")
    return parser


def _usage(parser: argparse.ArgumentParser) -> int:
    parser.print_help(sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        sys.stderr.write(f"{exc}\n")
        return _usage(parser)

    if args.command != "build" or not args.packages:
        return _usage(parser)

    configure_structlog(verbose=args.verbose)

    try:
        settings = get_settings()
    except ValidationError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 1

    target = args.output or settings.default_jar
    try:
        bind_to_jar(target, args.source_dir, args.packages, settings=settings)
    except BindError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1

    sys.stdout.write(f"Finished building {target}\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
