"""Whole-file sync — copies the base package's files/ into the dependent package.

Files copied on a previous run that the base package no longer ships are
deleted. Files the dependent package owns itself are never touched.
"""

from __future__ import annotations

import filecmp
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from module_zero.changeset import diff
from module_zero.discover import discover_files
from module_zero.errors import IOFailure
from module_zero.manifest.state import ManagedState
from module_zero.paths import resolve_inside
from module_zero.workers import run_parallel

logger = logging.getLogger(__name__)


@dataclass
class FilesResult:
    """Outcome of a file sync run."""

    actions: dict[str, str] = field(default_factory=dict)
    removed: dict[str, str] = field(default_factory=dict)
    state: ManagedState = field(default_factory=ManagedState)
    dry_run: bool = False

    def paths(self, action: str) -> list[str]:
        return [p for p, a in self.actions.items() if a == action]


def copy_file(source: Path, destination: Path, dry_run: bool = False) -> str:
    """Copy one file, creating parent directories.

    Returns:
        "created", "updated" or "unchanged".
    """
    exists = destination.exists()
    if exists and filecmp.cmp(source, destination, shallow=False):
        return "unchanged"
    if not dry_run:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
    return "updated" if exists else "created"


def remove_file(path: Path, dry_run: bool = False) -> str:
    """Delete a previously copied file.

    Returns:
        "removed", or "missing" if it was already gone.
    """
    if not path.exists():
        return "missing"
    if not dry_run:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
    return "removed"


def sync_files(
    files_dir: Path,
    target_dir: Path,
    patterns: list[str],
    state: ManagedState,
    dry_run: bool = False,
    max_workers: int | None = None,
) -> FilesResult:
    """Copy shared files and delete the ones no longer shared.

    Raises:
        IOFailure: Some copies or deletions failed; the rest still ran, and
            the returned snapshot must not be persisted.
    """
    changes = diff(state.files, discover_files(files_dir, patterns))

    destinations = {p: resolve_inside(target_dir, p) for p in changes.current + changes.to_remove}

    actions, copy_failures = run_parallel(
        lambda p: copy_file(files_dir / p, destinations[p], dry_run),
        changes.current,
        max_workers,
    )
    for path, action in actions.items():
        logger.info("%s: %s", path, action)

    removed, remove_failures = run_parallel(
        lambda p: remove_file(destinations[p], dry_run),
        changes.to_remove,
        max_workers,
    )
    for path, action in removed.items():
        logger.info("%s: %s", path, action)

    failures = copy_failures + remove_failures
    if failures:
        raise IOFailure(failures)

    return FilesResult(
        actions=actions,
        removed=removed,
        state=state.with_files(changes.current),
        dry_run=dry_run,
    )
