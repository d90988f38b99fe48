"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

import diskscan.core.dirs as dirs_module
from diskscan.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path):
    """Point the settings singleton at an empty temp file."""
    settings = Settings(path=tmp_path / "config" / "diskscan" / "settings.json")
    Settings.reset(settings)
    yield settings
    Settings.reset()


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Create a fake $HOME and /var/log and point directory resolution at them."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("XDG_CACHE_HOME", "XDG_DATA_HOME", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(var, raising=False)

    log_dir = tmp_path / "var" / "log"
    log_dir.mkdir(parents=True)
    monkeypatch.setattr(dirs_module, "LOG_DIR", log_dir)
    return home


@pytest.fixture
def make_file():
    """Return a helper that creates a file of an exact size."""
    return write_file


def write_file(path: Path, size: int) -> Path:
    """Create *path* (and parents) with exactly *size* bytes.

    Sizes above 1 MiB are written sparse so huge files cost no disk space.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        if size > 1024 * 1024:
            f.truncate(size)
        else:
            f.write(b"x" * size)
    return path
