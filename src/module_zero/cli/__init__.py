"""Command-line interface for module-zero.

Usage:
    m0 [--base DIR] [--target DIR] [--config FILE] [-v] files [--dry-run]
    m0 ... blocks [--dry-run]
    m0 ... deps [--dry-run]
    m0 ... sync [--dry-run]
    m0 ... status
    m0 ... styles
"""

import argparse
import logging
import sys

from module_zero.cli.status import cmd_status, cmd_styles
from module_zero.cli.sync import cmd_blocks, cmd_deps, cmd_files, cmd_sync
from module_zero.errors import ModuleZeroError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="m0",
        description="Sync shared files, managed blocks and devDependencies from a base package",
    )
    parser.add_argument(
        "--base", default=None,
        help="Base package root (default: $M0_BASE_DIR or current directory)",
    )
    parser.add_argument(
        "--target", default=None,
        help="Dependent package root (default: $M0_TARGET_DIR)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to module-zero.yaml (default: <base>/module-zero.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Log progress (-vv for debug output)",
    )
    sub = parser.add_subparsers(dest="command")

    for name, help_text in [
        ("files", "Copy shared files, remove ones no longer shared"),
        ("blocks", "Reconcile managed blocks"),
        ("deps", "Install/uninstall managed devDependencies"),
        ("sync", "files + blocks + deps in one step"),
    ]:
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument(
            "--dry-run", action="store_true",
            help="Report changes without writing",
        )

    sub.add_parser("status", help="Show what is currently managed")
    sub.add_parser("styles", help="List extension -> delimiter mappings")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    _configure_logging(args.verbose)

    dispatch = {
        "files": cmd_files,
        "blocks": cmd_blocks,
        "deps": cmd_deps,
        "sync": cmd_sync,
        "status": cmd_status,
        "styles": cmd_styles,
    }

    try:
        return dispatch[args.command](args)
    except ModuleZeroError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
