"""Argument parsing functionality for importgraph."""

import argparse
from typing import List, Optional

from .constants import Constants


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root",
                        dest="ROOT",
                        help="Root package directory (default: current directory)",
                        action="store",
                        type=str)
    parser.add_argument("--config",
                        dest="CONFIG",
                        help=f"Path to YAML config file (default: ./{Constants.CONFIG_FILE} if present)",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to JSON output file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="importgraph",
        description="importgraph - Node.js-compatible import resolution and dependency classification",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve import specifiers against the root package",
    )
    resolve_parser.add_argument("SPECS",
                                metavar="SPEC",
                                help="Import specifier to resolve",
                                nargs="+",
                                type=str)
    resolve_parser.add_argument("--from",
                                dest="FROM",
                                help="Resolve relative to the module imported by this specifier",
                                action="store",
                                type=str)
    _add_common_arguments(resolve_parser)

    entries_parser = subparsers.add_parser(
        "entries",
        help="List entry points of the root package",
    )
    entries_parser.add_argument("-c", "--condition",
                                dest="CONDITIONS",
                                help="Export condition to select targets with (repeatable)",
                                action="append",
                                type=str)
    _add_common_arguments(entries_parser)

    return parser.parse_args(argv)
