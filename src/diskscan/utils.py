"""Shared utility functions."""

from __future__ import annotations

import os
import shutil
from datetime import datetime
from pathlib import Path

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def format_timestamp(mtime: float) -> str:
    """Format a POSIX timestamp as local time ``YYYY-MM-DD HH:MM:SS``.

    Timestamps the platform cannot represent fall back to the epoch.
    """
    try:
        return datetime.fromtimestamp(mtime).strftime(TIMESTAMP_FORMAT)
    except (OverflowError, OSError, ValueError):
        return datetime.fromtimestamp(0).strftime(TIMESTAMP_FORMAT)


def remove_paths(paths: list[Path]) -> tuple[int, int, list[str]]:
    """Remove regular files and return (freed_bytes, files_removed, errors).

    Each failure is reported as ``"<path>: <reason>"``; the remaining
    paths are still processed.
    """
    freed = 0
    removed = 0
    errors: list[str] = []

    for path in paths:
        try:
            size = path.lstat().st_size
            path.unlink()
            removed += 1
            freed += size
        except OSError as e:
            errors.append(f"{path}: {e.strerror or e}")

    return freed, removed, errors


def reset_dir(path: Path) -> None:
    """Remove a directory tree and recreate it empty."""
    shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


_UNITS = ("KB", "MB", "GB", "TB")


def bytes_to_human(size_bytes: int) -> str:
    """Render a byte count with binary prefixes, e.g. ``1.5 KB``."""
    sign = "-" if size_bytes < 0 else ""
    size_bytes = abs(size_bytes)
    if size_bytes < 1024:
        return f"{sign}{size_bytes} B"
    value = size_bytes / 1024
    for unit in _UNITS:
        if value < 1024 or unit == _UNITS[-1]:
            break
        value /= 1024
    return f"{sign}{value:.1f} {unit}"


def format_elapsed(seconds: float) -> str:
    """Render a scan duration: milliseconds, seconds, or minutes and seconds."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.0f}s"
