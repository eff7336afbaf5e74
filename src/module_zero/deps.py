"""devDependencies sync — installs and uninstalls through the package manager.

Commands have the exact form other tooling relies on::

    npm uninstall --save-dev a b && npm install --save-dev c@1.0.0 d@^2.1.0

The new snapshot is only valid once the command has exited successfully.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from module_zero.changeset import VersionChangeSet, diff_versions
from module_zero.errors import ExternalCommandFailure
from module_zero.manifest.state import ManagedState

logger = logging.getLogger(__name__)


class CommandExecutor(Protocol):
    """Runs a shell command to completion and returns its exit code."""

    def run(self, command: str, cwd: Path) -> int: ...


class ShellExecutor:
    """Runs commands through the system shell, output going straight to the terminal."""

    def run(self, command: str, cwd: Path) -> int:
        try:
            result = subprocess.run(command, cwd=cwd, shell=True)
        except OSError as e:
            raise ExternalCommandFailure(command, None, str(e)) from e
        return result.returncode


@dataclass
class DepsResult:
    """Outcome of a devDependencies sync run."""

    installed: dict[str, str] = field(default_factory=dict)
    uninstalled: list[str] = field(default_factory=list)
    command: str | None = None
    state: ManagedState = field(default_factory=ManagedState)
    dry_run: bool = False


def plan_commands(changes: VersionChangeSet, tool: str = "npm") -> list[str]:
    """Build the uninstall/install commands for a change set, uninstall first."""
    commands = []
    if changes.to_remove:
        commands.append(f"{tool} uninstall --save-dev {' '.join(changes.to_remove)}")
    if changes.to_add:
        specs = [f"{name}@{version}" for name, version in changes.to_add.items()]
        commands.append(f"{tool} install --save-dev {' '.join(specs)}")
    return commands


def sync_dev_dependencies(
    target_dir: Path,
    dev_dependencies: dict[str, str],
    state: ManagedState,
    executor: CommandExecutor,
    tool: str = "npm",
    dry_run: bool = False,
) -> DepsResult:
    """Install new/changed devDependencies and uninstall dropped ones.

    Raises:
        ExternalCommandFailure: The command failed to spawn or exited non-zero.
    """
    changes = diff_versions(state.dev_dependencies, dev_dependencies)
    commands = plan_commands(changes, tool)
    command = " && ".join(commands) if commands else None

    if command is None:
        logger.info("devDependencies up to date")
    elif dry_run:
        logger.info("would run: %s", command)
    else:
        logger.info("running: %s", command)
        returncode = executor.run(command, target_dir)
        if returncode != 0:
            raise ExternalCommandFailure(command, returncode)

    return DepsResult(
        installed=changes.to_add,
        uninstalled=changes.to_remove,
        command=command,
        state=state.with_dev_dependencies(dev_dependencies),
        dry_run=dry_run,
    )
