"""Tests for change-set computation."""

import itertools

from module_zero.changeset import diff, diff_versions


class TestDiff:
    def test_first_run(self):
        changes = diff(None, ["b.txt", "a.txt"])
        assert changes.to_add == ["a.txt", "b.txt"]
        assert changes.to_remove == []
        assert changes.current == ["a.txt", "b.txt"]

    def test_add_and_remove(self):
        changes = diff(["a.txt", "old.txt"], ["a.txt", "new.txt"])
        assert changes.to_add == ["new.txt"]
        assert changes.to_remove == ["old.txt"]

    def test_current_order_is_deterministic(self):
        for order in itertools.permutations(["b.txt", "a.txt", "c.txt"]):
            assert diff([], order).current == ["a.txt", "b.txt", "c.txt"]

    def test_previous_order_irrelevant(self):
        assert diff(["c", "a"], ["a"]) == diff(["a", "c"], ["a"])


class TestDiffVersions:
    def test_first_run_installs_everything(self):
        changes = diff_versions(None, {"a": "0.0.0", "b": "0.0.1"})
        assert changes.to_add == {"a": "0.0.0", "b": "0.0.1"}
        assert changes.to_remove == []

    def test_only_changed_versions(self):
        changes = diff_versions(
            {"a": "0.0.0", "b": "0.0.1", "c": "0.1.1"},
            {"a": "0.0.0", "b": "0.0.2", "c": "0.1.1", "d": "1.1.1"},
        )
        assert changes.to_add == {"b": "0.0.2", "d": "1.1.1"}
        assert changes.to_remove == []

    def test_removed_packages(self):
        changes = diff_versions({"a": "1", "b": "1"}, {"a": "1"})
        assert changes.to_remove == ["b"]
        assert not changes.to_add

    def test_empty(self):
        assert diff_versions({"a": "1"}, {"a": "1"}).empty
