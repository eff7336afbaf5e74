"""Tests for the ModuleZero orchestrator and snapshot persistence."""

import json
from unittest.mock import MagicMock, patch

import pytest

from module_zero.engine import ModuleZero
from module_zero.errors import ConfigurationError, ExternalCommandFailure, IOFailure, UnknownExtension
from module_zero.manifest.loader import load_manifest


@pytest.fixture
def executor():
    mock = MagicMock()
    mock.run.return_value = 0
    return mock


@pytest.fixture
def m0(config, base, target, executor):
    return ModuleZero(config, base, target, executor=executor)


def _snapshot(target):
    return load_manifest(target / "package.json").get("_m0")


class TestConstruction:
    def test_no_parent_module(self, config, base, tmp_path):
        with pytest.raises(ConfigurationError, match="module-zero: has no parent module"):
            ModuleZero(config, base, tmp_path / "nowhere")

    def test_explicit_manifest_path(self, config, base, target, tmp_path):
        manifest = tmp_path / "elsewhere.json"
        manifest.write_text("{}")
        m0 = ModuleZero(config, base, target, manifest_path=manifest)
        m0.copy_files()
        assert "_m0" in json.loads(manifest.read_text())
        assert "_m0" not in load_manifest(target / "package.json")


class TestCopyFiles:
    def test_records_files(self, m0, target):
        m0.copy_files()
        assert _snapshot(target) == {
            "files": ["file1.txt", "subfolder/file2.txt", "subfolder/subfolder/file3.txt"],
        }

    def test_manifest_fields_untouched(self, m0, target):
        m0.copy_files()
        manifest = load_manifest(target / "package.json")
        assert list(manifest) == ["name", "version", "private", "scripts", "_m0"]
        assert manifest["scripts"] == {"test": "jest"}

    def test_persisted_order_ignores_discovery_order(self, m0, target):
        unordered = ["subfolder/subfolder/file3.txt", "file1.txt", "subfolder/file2.txt"]
        with patch("module_zero.files.discover_files", return_value=unordered):
            m0.copy_files()
        assert _snapshot(target)["files"] == sorted(unordered)

    def test_failure_leaves_snapshot_untouched(self, m0, target):
        with patch("module_zero.files.shutil.copy2", side_effect=PermissionError("denied")):
            with pytest.raises(IOFailure):
                m0.copy_files()
        assert _snapshot(target) is None

    def test_dry_run_leaves_snapshot_untouched(self, m0, target):
        m0.copy_files(dry_run=True)
        assert _snapshot(target) is None


class TestCreateBlocks:
    def test_records_blocks(self, m0, target):
        m0.create_blocks()
        assert _snapshot(target)["blocks"] == [
            ".gitignore",
            "block-with-existing-content.js",
            "subfolder/block2.js",
        ]

    def test_removal_across_runs(self, m0, base, target):
        m0.create_blocks()
        (base / "blocks" / "block-with-existing-content.js").unlink()
        m0.create_blocks()
        assert (target / "block-with-existing-content.js").read_text() == "\nconst someExistingVar = 1;\n"
        assert "block-with-existing-content.js" not in _snapshot(target)["blocks"]

    def test_unchanged_run_does_not_rewrite_manifest(self, m0, target):
        m0.create_blocks()
        manifest = target / "package.json"
        data = load_manifest(manifest)
        manifest.write_text(json.dumps(data, indent=4))
        m0.create_blocks()
        assert manifest.read_text() == json.dumps(data, indent=4)


class TestInstallDevDependencies:
    def test_installs_and_records(self, m0, target, executor):
        m0.install_dev_dependencies()
        executor.run.assert_called_once_with(
            "npm install --save-dev a@0.0.0 b@0.0.1 c@0.1.1", target,
        )
        assert _snapshot(target)["devDependencies"] == {"a": "0.0.0", "b": "0.0.1", "c": "0.1.1"}

    def test_second_run_runs_nothing(self, m0, executor):
        m0.install_dev_dependencies()
        m0.install_dev_dependencies()
        assert executor.run.call_count == 1

    def test_failed_install_not_recorded(self, m0, target, executor):
        executor.run.return_value = 1
        with pytest.raises(ExternalCommandFailure):
            m0.install_dev_dependencies()
        assert _snapshot(target) is None

    def test_keeps_package_manager_changes(self, m0, target, executor):
        manifest = target / "package.json"

        def fake_npm(command, cwd):
            data = load_manifest(manifest)
            data["devDependencies"] = {"a": "0.0.0", "b": "0.0.1", "c": "0.1.1"}
            manifest.write_text(json.dumps(data, indent=2))
            return 0

        executor.run.side_effect = fake_npm
        m0.install_dev_dependencies()
        data = load_manifest(manifest)
        assert data["devDependencies"] == {"a": "0.0.0", "b": "0.0.1", "c": "0.1.1"}
        assert data["_m0"]["devDependencies"] == data["devDependencies"]

    def test_unmanaged(self, config, base, target, executor):
        config.dev_dependencies = None
        m0 = ModuleZero(config, base, target, executor=executor)
        assert m0.install_dev_dependencies() is None
        executor.run.assert_not_called()


class TestSync:
    def test_full_sync(self, m0, target):
        report = m0.sync()
        assert report.files.paths("created")
        assert report.blocks.actions[".gitignore"] == "created"
        assert report.deps.command is not None
        assert set(_snapshot(target)) == {"files", "blocks", "devDependencies"}

    def test_full_sync_idempotent(self, m0, target, executor):
        m0.sync()
        before = {p.relative_to(target): p.read_bytes() for p in target.rglob("*") if p.is_file()}
        m0.sync()
        after = {p.relative_to(target): p.read_bytes() for p in target.rglob("*") if p.is_file()}
        assert after == before
        assert executor.run.call_count == 1

    def test_unknown_extension_aborts_before_any_write(self, m0, base, target, executor):
        (base / "blocks" / "notes.xyz").write_text("hello\n")
        with pytest.raises(UnknownExtension):
            m0.sync()
        assert not (target / "file1.txt").exists()
        assert _snapshot(target) is None
        executor.run.assert_not_called()
