"""Parse and validate module-zero.yaml.

Example::

    files: "**/*"
    blocks:
      src: "**/*"
      comment_styles:
        "#": "#! m0"
        "/**/": "/*! m0 */"
      comment_style_map:
        .gitignore: "#"
        .js: "/**/"
    dev_dependencies:
      eslint: "^5.8.0"
      prettier: "^1.14.3"
    tool: npm

Globs may be a single string or a list. ``dev_dependencies`` left out means
module-zero does not manage devDependencies at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from module_zero.blocks.styles import StyleRegistry
from module_zero.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_GLOB = "**/*"
DEFAULT_TOOL = "npm"


@dataclass
class SyncConfig:
    """What the base package shares."""

    files: list[str] = field(default_factory=lambda: [DEFAULT_GLOB])
    blocks_src: list[str] = field(default_factory=lambda: [DEFAULT_GLOB])
    comment_styles: dict[str, str] = field(default_factory=dict)
    comment_style_map: dict[str, str] = field(default_factory=dict)
    default_styles: bool = True
    dev_dependencies: dict[str, str] | None = None
    tool: str = DEFAULT_TOOL

    def style_registry(self) -> StyleRegistry:
        return StyleRegistry(
            self.comment_styles,
            self.comment_style_map,
            use_defaults=self.default_styles,
        )


def _globs(value, key: str) -> list[str]:
    if value is None:
        return [DEFAULT_GLOB]
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigurationError(f"'{key}' must be a glob string or a list of globs")


def _str_mapping(value, key: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{key}' must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


def _versions(value) -> dict[str, str]:
    # YAML reads 5.10 as the float 5.1; only quoted versions are exact
    if not isinstance(value, dict):
        raise ConfigurationError("'dev_dependencies' must be a mapping")
    for name, version in value.items():
        if not isinstance(version, str):
            raise ConfigurationError(f"version for '{name}' must be a quoted string, got {version!r}")
    return {str(name): version for name, version in value.items()}


def parse_config(data: dict) -> SyncConfig:
    """Build a SyncConfig from an already-parsed mapping."""
    blocks = data.get("blocks") or {}
    if not isinstance(blocks, dict):
        raise ConfigurationError("'blocks' must be a mapping")

    deps = data.get("dev_dependencies")
    return SyncConfig(
        files=_globs(data.get("files"), "files"),
        blocks_src=_globs(blocks.get("src"), "blocks.src"),
        comment_styles=_str_mapping(blocks.get("comment_styles"), "blocks.comment_styles"),
        comment_style_map=_str_mapping(blocks.get("comment_style_map"), "blocks.comment_style_map"),
        default_styles=bool(blocks.get("default_styles", True)),
        dev_dependencies=_versions(deps) if deps is not None else None,
        tool=str(data.get("tool") or DEFAULT_TOOL),
    )


def load_config(path: Path | str) -> SyncConfig:
    """Read and parse module-zero.yaml.

    A missing file yields the defaults: share everything under files/ and
    blocks/, leave devDependencies alone.

    Raises:
        ConfigurationError: If the YAML is malformed or not a mapping.
    """
    config_path = Path(path)
    if not config_path.is_file():
        logger.info("no config at %s, using defaults", config_path)
        return SyncConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{config_path} is not valid YAML: {e}") from e

    if data is None:
        return SyncConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} is not a YAML mapping")

    return parse_config(data)
