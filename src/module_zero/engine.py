"""Orchestrates file, block and devDependency sync for one dependent package.

Each operation reads the persisted snapshot, computes a new one, and only
writes it back after everything it guards has succeeded. A failed run leaves
the previous snapshot in place; re-running is always safe.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from module_zero import paths
from module_zero.blocks.sync import BlocksResult, plan_blocks, sync_blocks
from module_zero.config import SyncConfig
from module_zero.deps import CommandExecutor, DepsResult, ShellExecutor, sync_dev_dependencies
from module_zero.files import FilesResult, sync_files
from module_zero.manifest.loader import load_manifest, save_manifest
from module_zero.manifest.state import ManagedState

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Results of a full sync; ``deps`` is None when devDependencies are unmanaged."""

    files: FilesResult
    blocks: BlocksResult
    deps: DepsResult | None = None


class ModuleZero:
    """Syncs a base package into one dependent package.

    Args:
        config: What the base package shares.
        base_dir: Base package root, holding files/ and blocks/.
        target_dir: Dependent package root.
        manifest_path: Dependent package.json. Defaults to <target_dir>/package.json.
        executor: Runs package-manager commands. Defaults to the system shell.
        max_workers: Thread cap for per-file work. Defaults to ThreadPoolExecutor's own.

    Raises:
        ConfigurationError: If the dependent package.json cannot be read.
    """

    def __init__(
        self,
        config: SyncConfig,
        base_dir: Path | str,
        target_dir: Path | str,
        manifest_path: Path | str | None = None,
        executor: CommandExecutor | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config
        self.base_dir = Path(base_dir)
        self.target_dir = Path(target_dir)
        self.manifest_path = Path(manifest_path) if manifest_path else paths.manifest_path(self.target_dir)
        self.executor = executor or ShellExecutor()
        self.max_workers = max_workers
        self.registry = config.style_registry()

        # Fail before any work if there is no dependent package
        load_manifest(self.manifest_path)

    def load_state(self) -> ManagedState:
        return ManagedState.from_manifest(load_manifest(self.manifest_path))

    def commit(self, state: ManagedState) -> bool:
        """Persist ``state`` into package.json.

        The manifest is re-read first: the package manager may have
        rewritten it in the meantime. Nothing is written when the snapshot
        is already current.

        Returns:
            True if the manifest was written.
        """
        manifest = load_manifest(self.manifest_path)
        updated = state.apply_to(manifest)
        if updated == manifest:
            return False
        save_manifest(updated, self.manifest_path)
        logger.debug("snapshot written to %s", self.manifest_path)
        return True

    def copy_files(self, dry_run: bool = False) -> FilesResult:
        result = sync_files(
            self.base_dir / paths.FILES_DIRNAME,
            self.target_dir,
            self.config.files,
            self.load_state(),
            dry_run=dry_run,
            max_workers=self.max_workers,
        )
        if not dry_run:
            self.commit(result.state)
        return result

    def create_blocks(self, dry_run: bool = False) -> BlocksResult:
        result = sync_blocks(
            self.base_dir / paths.BLOCKS_DIRNAME,
            self.target_dir,
            self.config.blocks_src,
            self.registry,
            self.load_state(),
            dry_run=dry_run,
            max_workers=self.max_workers,
        )
        if not dry_run:
            self.commit(result.state)
        return result

    def install_dev_dependencies(self, dry_run: bool = False) -> DepsResult | None:
        """Sync devDependencies; returns None when the config does not manage them."""
        if self.config.dev_dependencies is None:
            logger.info("no dev_dependencies configured, skipping")
            return None
        result = sync_dev_dependencies(
            self.target_dir,
            self.config.dev_dependencies,
            self.load_state(),
            self.executor,
            tool=self.config.tool,
            dry_run=dry_run,
        )
        if not dry_run:
            self.commit(result.state)
        return result

    def check(self) -> None:
        """Resolve every block destination without writing anything.

        Raises:
            UnknownExtension: A current or stale block file has no comment style.
        """
        plan_blocks(
            self.base_dir / paths.BLOCKS_DIRNAME,
            self.target_dir,
            self.config.blocks_src,
            self.registry,
            self.load_state(),
        )

    def sync(self, dry_run: bool = False) -> SyncReport:
        """Files, then blocks, then devDependencies.

        Configuration problems in any step abort before the first write.
        """
        self.check()
        files = self.copy_files(dry_run)
        blocks = self.create_blocks(dry_run)
        deps = self.install_dev_dependencies(dry_run)
        return SyncReport(files=files, blocks=blocks, deps=deps)
