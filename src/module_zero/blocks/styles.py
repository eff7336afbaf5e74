"""Comment styles — file extension → delimiter pair.

A comment style is a one-line template holding the ``m0`` placeholder.
The literal marker lines are derived from it:

    "#! m0"      →  "#! m0-start"      / "#! m0-end"
    "/*! m0 */"  →  "/*! m0-start */"  / "/*! m0-end */"

Files already under management are recognized only by re-deriving this
text, so the substitution rule must never change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

from module_zero.blocks import PLACEHOLDER, WARNING
from module_zero.errors import ConfigurationError, UnknownExtension

logger = logging.getLogger(__name__)

# Style family → template
DEFAULT_COMMENT_STYLES: dict[str, str] = {
    "#":       "#! m0",
    "//":      "//! m0",
    "/**/":    "/*! m0 */",
    "<!---->": "<!--! m0 -->",
    "--":      "--! m0",
    ";":       ";! m0",
}

# Extension (or extensionless basename) → style family
DEFAULT_COMMENT_STYLE_MAP: dict[str, str] = {
    ".gitignore":    "#",
    ".npmignore":    "#",
    ".dockerignore": "#",
    ".editorconfig": "#",
    ".gitattributes": "#",
    ".sh":           "#",
    ".py":           "#",
    ".yml":          "#",
    ".yaml":         "#",
    ".toml":         "#",
    "Makefile":      "#",
    "Dockerfile":    "#",
    ".js":           "/**/",
    ".mjs":          "/**/",
    ".cjs":          "/**/",
    ".ts":           "/**/",
    ".css":          "/**/",
    ".scss":         "//",
    ".html":         "<!---->",
    ".md":           "<!---->",
    ".sql":          "--",
    ".ini":          ";",
}


@dataclass(frozen=True)
class Delimiters:
    """Opening/closing marker lines plus the generated warning line."""

    open: str
    close: str
    header: str


def derive_delimiters(template: str) -> Delimiters:
    """Build the marker lines for one comment style template.

    Raises:
        ConfigurationError: If the template lacks the placeholder.
    """
    if PLACEHOLDER not in template:
        raise ConfigurationError(f"comment style '{template}' has no '{PLACEHOLDER}' placeholder")
    open_marker = template.replace(PLACEHOLDER, f"{PLACEHOLDER}-start", 1)
    close_marker = template.replace(PLACEHOLDER, f"{PLACEHOLDER}-end", 1)
    if open_marker == close_marker:
        raise ConfigurationError(f"comment style '{template}' yields identical markers")
    header = template.replace(PLACEHOLDER, WARNING, 1)
    return Delimiters(open=open_marker, close=close_marker, header=header)


def style_key(path: str) -> str:
    """Return the lookup key for a path: its extension, else its basename."""
    p = PurePosixPath(path)
    return p.suffix or p.name


class StyleRegistry:
    """Resolves target paths to delimiter pairs.

    Config-supplied styles and mappings are layered over the defaults.
    """

    def __init__(
        self,
        comment_styles: dict[str, str] | None = None,
        comment_style_map: dict[str, str] | None = None,
        use_defaults: bool = True,
    ) -> None:
        self.comment_styles: dict[str, str] = dict(DEFAULT_COMMENT_STYLES) if use_defaults else {}
        self.comment_style_map: dict[str, str] = dict(DEFAULT_COMMENT_STYLE_MAP) if use_defaults else {}
        self.comment_styles.update(comment_styles or {})
        self.comment_style_map.update(comment_style_map or {})

        self._delimiters: dict[str, Delimiters] = {}
        for family, template in self.comment_styles.items():
            self._delimiters[family] = derive_delimiters(template)

    def resolve(self, path: str) -> Delimiters:
        """Resolve a target path (or a bare extension) to its delimiters.

        Raises:
            UnknownExtension: If nothing maps the path's extension/basename.
            ConfigurationError: If the mapping names an undefined style family.
        """
        key = path if path in self.comment_style_map else style_key(path)
        family = self.comment_style_map.get(key)
        if family is None:
            raise UnknownExtension(key)
        delimiters = self._delimiters.get(family)
        if delimiters is None:
            raise ConfigurationError(f"'{key}' maps to undefined comment style '{family}'")
        return delimiters

    def table(self) -> list[tuple[str, str, Delimiters]]:
        """All (key, family, delimiters) rows, sorted by key."""
        rows = []
        for key in sorted(self.comment_style_map):
            family = self.comment_style_map[key]
            if family in self._delimiters:
                rows.append((key, family, self._delimiters[family]))
            else:
                logger.warning("'%s' maps to undefined comment style '%s'", key, family)
        return rows
