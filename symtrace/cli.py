"""Command-line interface for symtrace."""

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from rich.console import Console

from symtrace import __version__
from symtrace.exceptions import (
    DirectoryMissingError,
    InvalidFlagError,
    format_error_message,
    handle_error,
)
from symtrace.locate import locate
from symtrace.logging import get_logger, setup_logging
from symtrace.models import CLIConfig, Resolution
from symtrace.probe import FilesystemProbe, OSProbe
from symtrace.reporter import Reporter
from symtrace.resolver import SymlinkResolver
from symtrace.scan import find_broken_symlinks
from symtrace.types import MAX_HOPS

__all__ = [
    "build_parser",
    "parse_args",
    "resolve_name",
    "run",
    "main",
]

logger = get_logger()


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad flags."""

    def error(self, message: str) -> NoReturn:
        raise InvalidFlagError(message)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="symtrace",
        description="Expand every symbolic link on a path and show where it leads.",
        add_help=False,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files, directories or command names to resolve",
    )
    parser.add_argument(
        "-c",
        dest="no_color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "-d",
        dest="list_dirs",
        action="store_true",
        help="List permissions of every directory leading to the resolved path",
    )
    parser.add_argument(
        "-l",
        dest="show_links",
        action="store_true",
        help="Print every intermediate symlink before the final path",
    )
    parser.add_argument(
        "-r",
        dest="recursive",
        action="store_true",
        help="Treat arguments as directories and report broken symlinks below them",
    )
    parser.add_argument(
        "-s",
        dest="script",
        action="store_true",
        help="Script-friendly output without blank lines or colored arrows",
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="Show this help message and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Path to log file (if not specified, only log to console)",
    )
    parser.add_argument(
        "--max-hops",
        type=_positive_int,
        default=MAX_HOPS,
        help=f"Symlinks to follow before giving up (default: {MAX_HOPS})",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show the version and exit",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CLIConfig:
    """Parse command line arguments into unified config.

    Raises:
        InvalidFlagError: On unknown options or bad option values
    """
    return CLIConfig.from_args(build_parser().parse_intermixed_args(argv))


def resolve_name(
    name: str, resolver: SymlinkResolver, probe: FilesystemProbe
) -> Resolution:
    """Locate a supplied name and resolve it, or report it as not found."""
    path = locate(name, probe)
    if path is None:
        return Resolution.not_found(name)
    return resolver.resolve(path, name)


def _resolve_and_report(
    name: str, resolver: SymlinkResolver, reporter: Reporter, probe: FilesystemProbe
) -> bool:
    try:
        return reporter.report(resolve_name(name, resolver, probe))
    except OSError as e:
        reporter.show_error(e)
        return True


def _scan_and_report(
    name: str, resolver: SymlinkResolver, reporter: Reporter, probe: FilesystemProbe
) -> bool:
    root = locate(name, probe)
    if root is None:
        return reporter.report(Resolution.not_found(name))

    failed = False
    try:
        for link in find_broken_symlinks(root, probe):
            link_failed = _resolve_and_report(str(link), resolver, reporter, probe)
            failed = link_failed or failed
    except DirectoryMissingError as e:
        reporter.show_error(e)
        return True
    return failed


def run(
    config: CLIConfig,
    console: Console,
    err_console: Optional[Console] = None,
    probe: Optional[FilesystemProbe] = None,
) -> int:
    """Resolve every path in config, in order.

    Returns:
        0 if every path resolved cleanly, 1 otherwise
    """
    probe = probe or OSProbe()
    resolver = SymlinkResolver(config.resolver_config, probe)
    reporter = Reporter(console, config, err_console=err_console, probe=probe)

    logger.info_with_fields(
        "Starting run",
        operation="start",
        paths=list(config.paths),
        recursive=config.recursive,
        max_hops=config.max_hops,
    )

    handler = _scan_and_report if config.recursive else _resolve_and_report
    failed = False
    for name in config.paths:
        failed = handler(name, resolver, reporter, probe) or failed

    logger.info_with_fields(
        "Finished run", operation="complete", paths=len(config.paths), failed=failed
    )
    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    err_console = Console(stderr=True, highlight=False)
    parser = build_parser()
    try:
        args = parser.parse_intermixed_args(argv)
    except InvalidFlagError as e:
        err_console.print(format_error_message(e), soft_wrap=True)
        parser.print_usage(sys.stderr)
        return 1

    if args.help:
        parser.print_help()
        return 0
    if args.version:
        print(f"symtrace {__version__}")
        return 0
    if not args.paths:
        parser.print_usage(sys.stderr)
        return 1

    config = CLIConfig.from_args(args)
    setup_logging(config.log_file, config.verbose)
    console = Console(no_color=not config.color, highlight=False)
    err_console = Console(stderr=True, no_color=not config.color, highlight=False)

    try:
        return run(config, console, err_console)
    except Exception as e:
        return handle_error(err_console, e)


if __name__ == "__main__":
    sys.exit(main())
