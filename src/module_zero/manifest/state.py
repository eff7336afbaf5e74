"""The persisted snapshot of what module-zero manages in a package.

Stored in package.json as::

    "_m0": {
      "files": ["file1.txt", "subfolder/file2.txt"],
      "blocks": [".gitignore", "index.js"],
      "devDependencies": {"eslint": "^5.8.0"}
    }

Every field is optional; a field is absent until the operation that owns it
has completed once.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from module_zero import STATE_KEY
from module_zero.errors import ConfigurationError

_FIELDS = (
    ("files", "files"),
    ("blocks", "blocks"),
    ("dev_dependencies", "devDependencies"),
)


def _path_list(value: Any, key: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ConfigurationError(f"'{STATE_KEY}.{key}' in package.json must be a list of paths")
    return tuple(value)


def _version_map(value: Any) -> dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ConfigurationError(
            f"'{STATE_KEY}.devDependencies' in package.json must map names to version strings"
        )
    return dict(value)


@dataclass(frozen=True)
class ManagedState:
    """Immutable snapshot. Operations return a new one instead of mutating."""

    files: tuple[str, ...] | None = None
    blocks: tuple[str, ...] | None = None
    dev_dependencies: dict[str, str] | None = None

    @classmethod
    def from_manifest(cls, manifest: dict) -> ManagedState:
        raw = manifest.get(STATE_KEY) or {}
        if not isinstance(raw, dict):
            raise ConfigurationError(f"'{STATE_KEY}' in package.json is not an object")

        return cls(
            files=_path_list(raw.get("files"), "files"),
            blocks=_path_list(raw.get("blocks"), "blocks"),
            dev_dependencies=_version_map(raw.get("devDependencies")),
        )

    def with_files(self, files: list[str]) -> ManagedState:
        return replace(self, files=tuple(files))

    def with_blocks(self, blocks: list[str]) -> ManagedState:
        return replace(self, blocks=tuple(blocks))

    def with_dev_dependencies(self, deps: dict[str, str]) -> ManagedState:
        return replace(self, dev_dependencies=dict(deps))

    def to_dict(self) -> dict[str, Any]:
        """Fields that are set, under their package.json names."""
        out: dict[str, Any] = {}
        for attr, key in _FIELDS:
            value = getattr(self, attr)
            if value is None:
                continue
            out[key] = dict(value) if isinstance(value, dict) else list(value)
        return out

    def apply_to(self, manifest: dict) -> dict:
        """Return a copy of ``manifest`` with this snapshot merged under ``_m0``.

        Unrelated manifest keys and the existing ``_m0`` key order are kept.
        """
        updated = dict(manifest)
        section = dict(manifest.get(STATE_KEY) or {})
        section.update(self.to_dict())
        updated[STATE_KEY] = section
        return updated
