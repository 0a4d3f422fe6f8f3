"""Command-line interface for Cantabile."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db",
        type=Path,
        help="Library database path (default: settings, then ./cantabile.db)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings path (default: ~/.config/cantabile/settings.json)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON output",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cantabile",
        description="Index local audio files and their classical composers into SQLite",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cantabile {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    init_parser = subparsers.add_parser(
        "init",
        help="Create the Albums and Tracks tables if missing",
    )
    _add_common_arguments(init_parser)

    reset_parser = subparsers.add_parser(
        "reset",
        help="Delete every album and track from the database",
    )
    _add_common_arguments(reset_parser)

    index_parser = subparsers.add_parser(
        "index",
        help="Read tags from library files and store them",
    )
    index_parser.add_argument(
        "roots",
        nargs="*",
        type=Path,
        help="Library roots to scan (default: library_paths from settings)",
    )
    index_parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort on the first file with missing or invalid tags",
    )
    _add_common_arguments(index_parser)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        # Import here to avoid slow startup
        from .infrastructure.database import connect
        from .settings import default_config_path, load_settings

        settings = load_settings(args.config or default_config_path())
        database = connect(args.db or settings.database_path)
        try:
            if args.command == "init":
                from .commands.database import run_init
                return run_init(args, database=database)
            elif args.command == "reset":
                from .commands.database import run_reset
                return run_reset(args, database=database)
            elif args.command == "index":
                from .commands.index import run_index
                return run_index(args, database=database, settings=settings)
            else:
                parser.print_help()
                return 1
        finally:
            database.close()
    except Exception as exc:
        from .errors import exit_code_for_exception

        print(str(exc), file=sys.stderr)
        return exit_code_for_exception(exc)


if __name__ == "__main__":
    sys.exit(main())
