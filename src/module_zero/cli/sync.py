"""Sync CLI commands."""

import argparse

from module_zero import paths
from module_zero.deps import DepsResult
from module_zero.engine import ModuleZero


def build_engine(args: argparse.Namespace) -> ModuleZero:
    from module_zero.config import load_config

    base = paths.base_dir(args.base)
    target = paths.target_dir(args.target)
    config = load_config(paths.config_path(base, args.config))
    return ModuleZero(config, base, target)


def _print_actions(title: str, actions: dict[str, str]) -> None:
    print(title)
    print("─" * 40)
    if not actions:
        print("  (nothing)")
    for path, action in actions.items():
        print(f"  {action:<10} {path}")


def _dry_run_note(args: argparse.Namespace) -> None:
    if args.dry_run:
        print("\n[DRY RUN] No files were modified.")


def cmd_files(args: argparse.Namespace) -> int:
    result = build_engine(args).copy_files(dry_run=args.dry_run)
    _print_actions("Files", {**result.actions, **result.removed})
    _dry_run_note(args)
    return 0


def cmd_blocks(args: argparse.Namespace) -> int:
    result = build_engine(args).create_blocks(dry_run=args.dry_run)
    _print_actions("Blocks", {**result.actions, **result.stripped})
    _dry_run_note(args)
    return 0


def _print_deps(result: DepsResult | None) -> None:
    print("devDependencies")
    print("─" * 40)
    if result is None:
        print("  (not managed)")
        return
    for name, version in result.installed.items():
        print(f"  install    {name}@{version}")
    for name in result.uninstalled:
        print(f"  uninstall  {name}")
    if result.command is None:
        print("  (up to date)")


def cmd_deps(args: argparse.Namespace) -> int:
    result = build_engine(args).install_dev_dependencies(dry_run=args.dry_run)
    _print_deps(result)
    if args.dry_run and result is not None and result.command:
        print(f"\n[DRY RUN] Would run: {result.command}")
    return 0


def cmd_sync(args: argparse.Namespace) -> int:
    report = build_engine(args).sync(dry_run=args.dry_run)
    _print_actions("Files", {**report.files.actions, **report.files.removed})
    print()
    _print_actions("Blocks", {**report.blocks.actions, **report.blocks.stripped})
    print()
    _print_deps(report.deps)
    _dry_run_note(args)
    return 0
