"""Change sets between the persisted snapshot and the current run.

Comparison ignores order; everything emitted is sorted, so enumerating files
in a different order (concurrent scans, filesystem quirks) never changes
what gets persisted or deleted.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChangeSet:
    """Difference between two sets of relative paths."""

    to_add: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)
    current: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class VersionChangeSet:
    """Difference between two name → version mappings.

    ``to_add`` keeps the current mapping's order; it lists every package
    that is new or whose version changed.
    """

    to_add: dict[str, str] = field(default_factory=dict)
    to_remove: list[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.to_add and not self.to_remove


def diff(previous: Iterable[str] | None, current: Iterable[str]) -> ChangeSet:
    """Compare the previous snapshot with the current enumeration."""
    prev = set(previous or ())
    cur = set(current)
    return ChangeSet(
        to_add=sorted(cur - prev),
        to_remove=sorted(prev - cur),
        current=sorted(cur),
    )


def diff_versions(previous: dict[str, str] | None, current: dict[str, str]) -> VersionChangeSet:
    """Compare the previous devDependencies snapshot with the current mapping."""
    prev = previous or {}
    return VersionChangeSet(
        to_add={name: version for name, version in current.items() if prev.get(name) != version},
        to_remove=[name for name in prev if name not in current],
    )
