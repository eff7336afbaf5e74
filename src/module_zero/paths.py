"""Path resolution for the base and dependent packages.

Paths are always supplied explicitly (CLI flags) or through environment
variables; nothing is inferred from where module-zero itself is installed.

Environment variables:
    M0_BASE_DIR   — base package root (default: current directory)
    M0_TARGET_DIR — dependent package root (no default)
    M0_CONFIG     — config file (default: <base>/module-zero.yaml)
"""

from __future__ import annotations

import os
from pathlib import Path

from module_zero.errors import ConfigurationError

CONFIG_FILENAME = "module-zero.yaml"
MANIFEST_FILENAME = "package.json"
FILES_DIRNAME = "files"
BLOCKS_DIRNAME = "blocks"


def base_dir(raw: Path | str | None = None) -> Path:
    """Return the base package root."""
    if raw:
        return Path(raw).expanduser().resolve()
    env = os.environ.get("M0_BASE_DIR")
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd()


def target_dir(raw: Path | str | None = None) -> Path:
    """Return the dependent package root.

    Raises:
        ConfigurationError: If neither an argument nor M0_TARGET_DIR is set.
    """
    if raw:
        return Path(raw).expanduser().resolve()
    env = os.environ.get("M0_TARGET_DIR")
    if env:
        return Path(env).expanduser().resolve()
    raise ConfigurationError("no target package given (use --target or M0_TARGET_DIR)")


def config_path(base: Path, raw: Path | str | None = None) -> Path:
    """Return the path to the base package's module-zero.yaml."""
    if raw:
        return Path(raw).expanduser().resolve()
    env = os.environ.get("M0_CONFIG")
    if env:
        return Path(env).expanduser().resolve()
    return base / CONFIG_FILENAME


def manifest_path(target: Path) -> Path:
    """Return the path to the dependent package's package.json."""
    return target / MANIFEST_FILENAME


def resolve_inside(root: Path, rel_path: str) -> Path:
    """Join a recorded relative path onto ``root``, refusing to escape it.

    Raises:
        ConfigurationError: If ``rel_path`` is absolute or climbs out of ``root``.
    """
    candidate = (root / rel_path).resolve()
    if not candidate.is_relative_to(root.resolve()):
        raise ConfigurationError(f"path '{rel_path}' points outside {root}")
    return root / rel_path
