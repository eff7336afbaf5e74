"""Tests for comment style resolution."""

import re

import pytest

from module_zero.blocks import WARNING
from module_zero.blocks.styles import (
    DEFAULT_COMMENT_STYLE_MAP,
    StyleRegistry,
    derive_delimiters,
    style_key,
)
from module_zero.errors import ConfigurationError, UnknownExtension


class TestDeriveDelimiters:
    def test_hash_style(self):
        d = derive_delimiters("#! m0")
        assert d.open == "#! m0-start"
        assert d.close == "#! m0-end"
        assert d.header == f"#! {WARNING}"

    def test_block_comment_style(self):
        d = derive_delimiters("/*! m0 */")
        assert d.open == "/*! m0-start */"
        assert d.close == "/*! m0-end */"
        assert d.header == f"/*! {WARNING} */"

    def test_missing_placeholder(self):
        with pytest.raises(ConfigurationError, match="placeholder"):
            derive_delimiters("# managed")

    def test_markers_are_literal_in_patterns(self):
        d = derive_delimiters("/*! m0 */")
        pattern = re.compile(re.escape(d.open))
        assert pattern.search("x /*! m0-start */ y")
        assert not pattern.search("/!! m0-start */")


class TestStyleKey:
    @pytest.mark.parametrize("path,key", [
        ("index.js", ".js"),
        ("sub/dir/app.min.js", ".js"),
        (".gitignore", ".gitignore"),
        ("sub/.gitignore", ".gitignore"),
        ("Makefile", "Makefile"),
    ])
    def test_extension_or_basename(self, path, key):
        assert style_key(path) == key


class TestStyleRegistry:
    def test_resolves_configured_extension(self):
        reg = StyleRegistry({"#": "#! m0"}, {".gitignore": "#"}, use_defaults=False)
        assert reg.resolve("sub/.gitignore").open == "#! m0-start"

    def test_resolves_bare_extension(self):
        reg = StyleRegistry()
        assert reg.resolve(".js").open == "/*! m0-start */"

    def test_unknown_extension_fails_loudly(self):
        reg = StyleRegistry({"#": "#! m0"}, {".gitignore": "#"}, use_defaults=False)
        with pytest.raises(UnknownExtension) as exc_info:
            reg.resolve("notes.xyz")
        assert exc_info.value.key == ".xyz"
        assert str(exc_info.value).startswith("module-zero: ")

    def test_undefined_style_family(self):
        reg = StyleRegistry({}, {".js": "/**/"}, use_defaults=False)
        with pytest.raises(ConfigurationError, match="undefined comment style"):
            reg.resolve("index.js")

    def test_config_overrides_defaults(self):
        reg = StyleRegistry({"//": "//! m0"}, {".js": "//"})
        assert reg.resolve("index.js").open == "//! m0-start"
        assert reg.resolve(".gitignore").open == "#! m0-start"

    def test_defaults_all_resolve(self):
        reg = StyleRegistry()
        for key in DEFAULT_COMMENT_STYLE_MAP:
            d = reg.resolve(key)
            assert d.open != d.close

    def test_table_sorted(self):
        reg = StyleRegistry()
        keys = [key for key, _, _ in reg.table()]
        assert keys == sorted(keys)
