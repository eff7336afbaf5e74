"""Tests for path resolution and file discovery."""

import pytest

from module_zero import paths
from module_zero.discover import discover_files
from module_zero.errors import ConfigurationError


class TestResolution:
    def test_base_dir_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("M0_BASE_DIR", str(tmp_path))
        assert paths.base_dir() == tmp_path.resolve()

    def test_base_dir_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.delenv("M0_BASE_DIR", raising=False)
        monkeypatch.chdir(tmp_path)
        assert paths.base_dir().resolve() == tmp_path.resolve()

    def test_argument_beats_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("M0_TARGET_DIR", "/somewhere/else")
        assert paths.target_dir(tmp_path) == tmp_path.resolve()

    def test_target_required(self, monkeypatch):
        monkeypatch.delenv("M0_TARGET_DIR", raising=False)
        with pytest.raises(ConfigurationError):
            paths.target_dir()

    def test_config_path_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("M0_CONFIG", raising=False)
        assert paths.config_path(tmp_path) == tmp_path / "module-zero.yaml"

    def test_resolve_inside(self, tmp_path):
        assert paths.resolve_inside(tmp_path, "a/b.txt") == tmp_path / "a" / "b.txt"

    @pytest.mark.parametrize("rel", ["../x.txt", "a/../../x.txt", "/etc/passwd"])
    def test_resolve_inside_rejects_escape(self, tmp_path, rel):
        with pytest.raises(ConfigurationError, match="outside"):
            paths.resolve_inside(tmp_path, rel)


class TestDiscoverFiles:
    def test_includes_dotfiles_and_nested(self, tmp_path):
        (tmp_path / ".hidden").write_text("x")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.txt").write_text("x")
        assert discover_files(tmp_path, ["**/*"]) == [".hidden", "sub/a.txt"]

    def test_multiple_patterns_deduplicated(self, tmp_path):
        (tmp_path / "a.txt").write_text("x")
        (tmp_path / "b.md").write_text("x")
        assert discover_files(tmp_path, ["*.txt", "*", "a.*"]) == ["a.txt", "b.md"]

    def test_missing_root(self, tmp_path):
        assert discover_files(tmp_path / "nope", ["**/*"]) == []
