"""Block sync — renders the base package's blocks/ into the dependent package.

The sync process:
1. Discover block sources under <base>/blocks (sorted)
2. Map each to its destination (``_m0_`` dropped from the path) and resolve
   the destination's comment style; an unmapped extension aborts here,
   before anything is written
3. Strip blocks from files managed last run but no longer shipped
4. Reconcile every current destination
5. Hand back the new snapshot; the caller persists it

Preserves all manually-written content outside the block markers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from module_zero.blocks import NEWLINE_TOKEN
from module_zero.blocks.extract import block_bodies
from module_zero.blocks.reconcile import read_text, reconcile_file
from module_zero.blocks.styles import Delimiters, StyleRegistry
from module_zero.changeset import ChangeSet, diff
from module_zero.discover import discover_files
from module_zero.errors import IOFailure
from module_zero.manifest.state import ManagedState
from module_zero.paths import resolve_inside
from module_zero.workers import run_parallel

logger = logging.getLogger(__name__)

# Dropped from source paths; lets a base package ship e.g. ``_m0_.gitignore``
DEST_MARKER = "_m0_"


@dataclass
class BlocksResult:
    """Outcome of a block sync run."""

    actions: dict[str, str] = field(default_factory=dict)
    stripped: dict[str, str] = field(default_factory=dict)
    state: ManagedState = field(default_factory=ManagedState)
    dry_run: bool = False

    def paths(self, action: str) -> list[str]:
        return [p for p, a in self.actions.items() if a == action]


def destination_for(source_path: str) -> str:
    """Destination path for a source path under blocks/."""
    return source_path.replace(DEST_MARKER, "", 1)


def group_sources(source_paths: list[str]) -> dict[str, list[str]]:
    """Group source paths by destination, keeping sorted source order."""
    groups: dict[str, list[str]] = {}
    for source_path in sorted(source_paths):
        groups.setdefault(destination_for(source_path), []).append(source_path)
    return groups


def _strip_final_eol(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def block_sources(texts: list[str], delimiters: Delimiters) -> list[str]:
    """Turn source file contents into the ordered list of block contents.

    A source file that itself contains delimited blocks contributes one
    block per region. Consecutive plain source files form one block, joined
    with the newline token.
    """
    sources: list[str] = []
    previous_plain = False
    for text in texts:
        bodies = block_bodies(text, delimiters)
        if bodies:
            sources.extend(bodies)
            previous_plain = False
            continue
        content = _strip_final_eol(text)
        if previous_plain:
            sources[-1] = sources[-1] + NEWLINE_TOKEN + content
        else:
            sources.append(content)
        previous_plain = True
    return sources


@dataclass
class BlockPlan:
    """Everything a block sync needs, resolved before anything is written."""

    groups: dict[str, list[str]]
    changes: ChangeSet
    delimiters: dict[str, Delimiters]
    targets: dict[str, Path]


def plan_blocks(
    blocks_dir: Path,
    target_dir: Path,
    patterns: list[str],
    registry: StyleRegistry,
    state: ManagedState,
) -> BlockPlan:
    """Discover sources and resolve every current and stale destination.

    Raises:
        UnknownExtension: A destination has no comment style.
        ConfigurationError: A destination lies outside the target package.
    """
    groups = group_sources(discover_files(blocks_dir, patterns))
    changes = diff(state.blocks, groups)

    delimiters: dict[str, Delimiters] = {}
    targets: dict[str, Path] = {}
    for dest in changes.current + changes.to_remove:
        delimiters[dest] = registry.resolve(dest)
        targets[dest] = resolve_inside(target_dir, dest)
    return BlockPlan(groups, changes, delimiters, targets)


def sync_blocks(
    blocks_dir: Path,
    target_dir: Path,
    patterns: list[str],
    registry: StyleRegistry,
    state: ManagedState,
    dry_run: bool = False,
    max_workers: int | None = None,
) -> BlocksResult:
    """Sync managed blocks into the dependent package.

    Raises:
        UnknownExtension: A current or stale destination has no comment style.
        IOFailure: Some files could not be read or written; the others were
            still processed, and the returned snapshot must not be persisted.
    """
    plan = plan_blocks(blocks_dir, target_dir, patterns, registry, state)
    changes = plan.changes

    def strip(dest: str) -> str:
        return reconcile_file(plan.targets[dest], [], plan.delimiters[dest], dry_run)

    def apply(dest: str) -> str:
        texts = [read_text(blocks_dir / source_path) for source_path in plan.groups[dest]]
        sources = block_sources(texts, plan.delimiters[dest])
        return reconcile_file(
            plan.targets[dest],
            sources,
            plan.delimiters[dest],
            dry_run,
            source_text="".join(texts),
        )

    stripped, strip_failures = run_parallel(strip, changes.to_remove, max_workers)
    for dest, action in stripped.items():
        logger.info("%s: blocks %s", dest, action)

    actions, apply_failures = run_parallel(apply, changes.current, max_workers)
    for dest, action in actions.items():
        logger.info("%s: %s", dest, action)

    failures = strip_failures + apply_failures
    if failures:
        raise IOFailure(failures)

    return BlocksResult(
        actions=actions,
        stripped=stripped,
        state=state.with_blocks(changes.current),
        dry_run=dry_run,
    )
