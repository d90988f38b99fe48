"""Tests for the shared helpers."""

from __future__ import annotations

import re

import pytest

from diskscan.utils import (
    bytes_to_human,
    format_elapsed,
    format_timestamp,
    remove_paths,
    reset_dir,
)


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (512, "512 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (1024**3, "1.0 GB"),
        (-2048, "-2.0 KB"),
    ],
)
def test_bytes_to_human(size, expected):
    assert bytes_to_human(size) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0.25, "250 ms"), (2.5, "2.5s"), (125, "2m 5s")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


class TestFormatTimestamp:
    def test_shape(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", format_timestamp(1_700_000_000))

    def test_unrepresentable_falls_back_to_epoch(self):
        assert format_timestamp(1e20) == format_timestamp(0)


class TestRemovePaths:
    def test_removes_and_counts(self, tmp_path, make_file):
        a = make_file(tmp_path / "a", 10)
        b = make_file(tmp_path / "b", 20)
        assert remove_paths([a, b]) == (30, 2, [])
        assert not a.exists() and not b.exists()

    def test_failure_does_not_stop_the_batch(self, tmp_path, make_file):
        missing = tmp_path / "missing"
        c = make_file(tmp_path / "c", 5)
        freed, removed, errors = remove_paths([missing, c])
        assert (freed, removed) == (5, 1)
        assert errors == [f"{missing}: No such file or directory"]

    def test_removes_dangling_symlink(self, tmp_path):
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "nowhere")
        _, removed, errors = remove_paths([link])
        assert removed == 1 and errors == []
        assert not link.is_symlink()


def test_reset_dir(tmp_path, make_file):
    make_file(tmp_path / "cache" / "deep" / "x", 3)
    reset_dir(tmp_path / "cache")
    assert (tmp_path / "cache").is_dir()
    assert list((tmp_path / "cache").iterdir()) == []
