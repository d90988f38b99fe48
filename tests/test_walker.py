"""Tests for the bounded directory walker."""

from __future__ import annotations

import os

import pytest

from diskscan.core import walker
from diskscan.core.walker import walk
from diskscan.models.scan import ScanRoot


@pytest.fixture
def tree(tmp_path, make_file):
    """A small tree with one file per depth level."""
    root = tmp_path / "root"
    make_file(root / "a.txt", 10)
    make_file(root / "d1" / "b.txt", 20)
    make_file(root / "d1" / "d2" / "c.txt", 30)
    make_file(root / "d1" / "d2" / "d3" / "e.txt", 40)
    return root


def _names(root: ScanRoot) -> set[str]:
    return {entry.path.name for entry in walk(root)}


class TestDepth:
    @pytest.mark.parametrize(
        ("max_depth", "expected"),
        [
            (0, set()),
            (1, {"a.txt"}),
            (2, {"a.txt", "b.txt"}),
            (3, {"a.txt", "b.txt", "c.txt"}),
            (10, {"a.txt", "b.txt", "c.txt", "e.txt"}),
        ],
    )
    def test_depth_limit(self, tree, max_depth, expected):
        assert _names(ScanRoot(tree, max_depth=max_depth)) == expected

    def test_deep_tree_never_exceeds_depth(self, tmp_path, make_file):
        root = tmp_path / "deep"
        current = root
        for level in range(1, 12):
            make_file(current / f"file{level}", 1)
            current = current / f"level{level}"

        entries = list(walk(ScanRoot(root, max_depth=4)))
        for entry in entries:
            depth = len(entry.path.relative_to(root).parts)
            assert depth <= 4
        assert len(entries) == 4


class TestEntryCap:
    def test_cap_limits_emitted_files(self, tmp_path, make_file):
        root = tmp_path / "many"
        for i in range(10):
            for j in range(5):
                make_file(root / f"dir{i}" / f"f{j}", 1)

        assert len(list(walk(ScanRoot(root, max_depth=5, max_entries=7)))) == 7

    def test_cap_larger_than_tree(self, tree):
        assert len(list(walk(ScanRoot(tree, max_depth=10, max_entries=100)))) == 4

    def test_zero_cap_yields_nothing(self, tree):
        assert list(walk(ScanRoot(tree, max_depth=10, max_entries=0))) == []

    def test_no_cap(self, tree):
        assert len(list(walk(ScanRoot(tree, max_depth=10, max_entries=None)))) == 4

    def test_walk_stops_listing_after_cap(self, tmp_path, make_file, monkeypatch):
        root = tmp_path / "lazy"
        for i in range(20):
            make_file(root / f"dir{i}" / "f", 1)

        listed: list[str] = []
        real_scandir = os.scandir

        def counting_scandir(path):
            listed.append(path)
            return real_scandir(path)

        monkeypatch.setattr(walker.os, "scandir", counting_scandir)
        assert len(list(walk(ScanRoot(root, max_depth=3, max_entries=2)))) == 2
        # root + the two directories that produced the files
        assert len(listed) == 3


class TestEntries:
    def test_entries_carry_path_and_name(self, tree):
        entries = {e.name: e for e in walk(ScanRoot(tree, max_depth=10))}
        assert entries["c.txt"].path == tree / "d1" / "d2" / "c.txt"
        assert set(entries) == {"a.txt", "b.txt", "c.txt", "e.txt"}

    def test_directories_are_not_emitted(self, tmp_path):
        root = tmp_path / "dirs_only"
        (root / "x" / "y").mkdir(parents=True)
        assert list(walk(ScanRoot(root, max_depth=5))) == []

    def test_symlinks_are_skipped(self, tree):
        (tree / "link.txt").symlink_to(tree / "a.txt")
        (tree / "dangling").symlink_to(tree / "missing")
        (tree / "d1" / "loop").symlink_to(tree, target_is_directory=True)

        names = [e.path.name for e in walk(ScanRoot(tree, max_depth=10))]
        assert sorted(names) == ["a.txt", "b.txt", "c.txt", "e.txt"]

    def test_missing_root(self, tmp_path):
        assert list(walk(ScanRoot(tmp_path / "nope", max_depth=3))) == []

    def test_root_is_a_file(self, tmp_path, make_file):
        path = make_file(tmp_path / "plain", 5)
        assert list(walk(ScanRoot(path, max_depth=3))) == []


class TestSoftFailures:
    def test_unreadable_directory_does_not_affect_siblings(self, tmp_path, make_file, monkeypatch):
        root = tmp_path / "root"
        make_file(root / "ok1" / "a", 1)
        make_file(root / "bad" / "hidden", 1)
        make_file(root / "ok2" / "b", 1)
        make_file(root / "top", 1)

        real_scandir = os.scandir
        bad = str(root / "bad")

        def flaky_scandir(path):
            if os.fspath(path) == bad:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(walker.os, "scandir", flaky_scandir)
        assert _names(ScanRoot(root, max_depth=3)) == {"a", "b", "top"}

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
    def test_permission_denied_directory(self, tmp_path, make_file):
        root = tmp_path / "root"
        make_file(root / "visible", 1)
        make_file(root / "locked" / "secret", 1)
        (root / "locked").chmod(0)
        try:
            assert _names(ScanRoot(root, max_depth=3)) == {"visible"}
        finally:
            (root / "locked").chmod(0o755)
