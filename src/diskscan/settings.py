"""User overrides for scan bounds and worker count, stored as JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from diskscan.utils import xdg_config_home

log = logging.getLogger(__name__)

_MISSING = object()


def default_settings_path() -> Path:
    return xdg_config_home() / "diskscan" / "settings.json"


class Settings:
    """Settings file addressed with dotted keys.

    ``{"scan": {"cache": {"max_depth": 3}}}`` is read back with
    ``settings.get("scan.cache.max_depth")``.  Writes go straight to disk.
    An unreadable or malformed file behaves like an empty one.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()
        self._data: dict[str, Any] = self._read()

    @classmethod
    def instance(cls) -> Settings:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls, settings: Settings | None = None) -> None:
        """Install *settings* as the shared instance, or drop it so the next call reloads."""
        cls._instance = settings

    @property
    def path(self) -> Path:
        return self._path

    def _lookup(self, key: str) -> Any:
        value: Any = self._data
        for part in key.split("."):
            if not isinstance(value, dict):
                return _MISSING
            value = value.get(part, _MISSING)
            if value is _MISSING:
                break
        return value

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def get_count(self, key: str, default: int | None, *, allow_none: bool = False) -> int | None:
        """Read a non-negative integer, falling back to *default* on bad values.

        With *allow_none*, an explicit ``null`` in the file means "unbounded".
        """
        value = self._lookup(key)
        if value is _MISSING:
            return default
        if value is None and allow_none:
            return None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            log.warning("Ignoring invalid value for %s in %s: %r", key, self._path, value)
            return default
        return value

    def set(self, key: str, value: Any) -> None:
        *parents, leaf = key.split(".")
        section = self._data
        for part in parents:
            child = section.get(part)
            if not isinstance(child, dict):
                child = section[part] = {}
            section = child
        section[leaf] = value
        self._write()

    def _read(self) -> dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: top level is not an object", self._path)
            return {}
        return data

    def _write(self) -> None:
        payload = json.dumps(self._data, indent=2, ensure_ascii=False) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(payload, encoding="utf-8")
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)
