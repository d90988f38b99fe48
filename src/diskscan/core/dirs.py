"""Platform directory resolution (home, cache, data and log directories)."""

from __future__ import annotations

import os
from pathlib import Path

LOG_DIR = Path("/var/log")

# User directories searched for large files, relative to $HOME.
USER_DIR_NAMES = ("Downloads", "Documents", "Videos", "Pictures", "Desktop")


class DirectoryResolutionError(Exception):
    """Raised when a required directory cannot be determined on this system."""


class DirectoryResolver:
    """Resolves the host's standard directories.

    Follows the XDG base directory variables and falls back to the usual
    locations under ``$HOME``.  Subclass or pass a different instance to
    the scan functions to point them somewhere else.
    """

    def home_dir(self) -> Path:
        try:
            home = Path.home()
        except (KeyError, RuntimeError) as exc:
            raise DirectoryResolutionError("Home directory not found") from exc
        if not str(home) or not home.is_absolute():
            raise DirectoryResolutionError("Home directory not found")
        return home

    def cache_dir(self) -> Path:
        return self._xdg("XDG_CACHE_HOME", (".cache",), "Cache directory not found")

    def data_dir(self) -> Path:
        return self._xdg("XDG_DATA_HOME", (".local", "share"), "Data directory not found")

    def trash_files_dir(self) -> Path:
        return self.data_dir() / "Trash" / "files"

    def log_dir(self) -> Path:
        return LOG_DIR

    def user_dirs(self) -> tuple[Path, ...]:
        home = self.home_dir()
        return tuple(home / name for name in USER_DIR_NAMES)

    def _xdg(self, variable: str, fallback: tuple[str, ...], error: str) -> Path:
        value = os.environ.get(variable, "")
        # Relative XDG values are invalid and must be ignored.
        if value and os.path.isabs(value):
            return Path(value)
        try:
            return self.home_dir().joinpath(*fallback)
        except DirectoryResolutionError as exc:
            raise DirectoryResolutionError(error) from exc
