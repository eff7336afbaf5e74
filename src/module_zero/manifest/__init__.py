"""Manifest module — load and save package.json and the ``_m0`` snapshot."""

from module_zero.manifest.loader import load_manifest, save_manifest
from module_zero.manifest.state import ManagedState

__all__ = [
    "load_manifest",
    "save_manifest",
    "ManagedState",
]
