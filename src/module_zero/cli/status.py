"""Status CLI commands."""

import argparse

from module_zero.cli.sync import build_engine


def cmd_status(args: argparse.Namespace) -> int:
    engine = build_engine(args)
    state = engine.load_state()

    print(f"\n  {engine.manifest_path}")
    print(f"  {'─' * 40}")
    for label, values in [("files", state.files), ("blocks", state.blocks)]:
        if values is None:
            print(f"  {label + ':':<18}(never synced)")
            continue
        print(f"  {label + ':':<18}{len(values)}")
        for value in values:
            print(f"    - {value}")

    deps = state.dev_dependencies
    if deps is None:
        print(f"  {'devDependencies:':<18}(never synced)")
    else:
        print(f"  {'devDependencies:':<18}{len(deps)}")
        for name, version in deps.items():
            print(f"    - {name}@{version}")
    print()
    return 0


def cmd_styles(args: argparse.Namespace) -> int:
    from module_zero import paths
    from module_zero.config import load_config

    base = paths.base_dir(args.base)
    registry = load_config(paths.config_path(base, args.config)).style_registry()

    print(f"\n  {'Key':<16} {'Style':<10} {'Open':<20} {'Close':<20}")
    print(f"  {'─' * 66}")
    for key, family, delimiters in registry.table():
        print(f"  {key:<16} {family:<10} {delimiters.open:<20} {delimiters.close:<20}")
    print()
    return 0
