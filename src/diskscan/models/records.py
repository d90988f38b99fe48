"""Per-category file records returned by list scans."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Union

from diskscan.models.scan import FileEntry
from diskscan.utils import format_timestamp


def _text(value: str) -> str:
    """Make a filesystem name safe for JSON.

    Names that are not valid UTF-8 come back from ``os.fsdecode`` with lone
    surrogates; their undecodable bytes become U+FFFD instead.
    """
    return os.fsencode(value).decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class CacheFileRecord:
    """File under the user cache directory."""

    path: str
    size: int
    modified: float

    @classmethod
    def from_entry(cls, entry: FileEntry) -> CacheFileRecord:
        return cls(path=_text(str(entry.path)), size=entry.size, modified=entry.modified)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "size": self.size, "modified": format_timestamp(self.modified)}


@dataclass(frozen=True, slots=True)
class TrashFileRecord:
    """File in the trash; ``deleted`` is the file's modification time."""

    name: str
    path: str
    size: int
    deleted: float

    @classmethod
    def from_entry(cls, entry: FileEntry) -> TrashFileRecord:
        return cls(
            name=_text(entry.display_name),
            path=_text(str(entry.path)),
            size=entry.size,
            deleted=entry.modified,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "deletedDate": format_timestamp(self.deleted),
        }


@dataclass(frozen=True, slots=True)
class LogFileRecord:
    """File under the system log directory."""

    path: str
    size: int
    modified: float

    @classmethod
    def from_entry(cls, entry: FileEntry) -> LogFileRecord:
        return cls(path=_text(str(entry.path)), size=entry.size, modified=entry.modified)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "size": self.size, "modified": format_timestamp(self.modified)}


@dataclass(frozen=True, slots=True)
class LargeFileRecord:
    """File above the large-file threshold in one of the user directories."""

    name: str
    path: str
    size: int
    modified: float

    @classmethod
    def from_entry(cls, entry: FileEntry) -> LargeFileRecord:
        return cls(
            name=_text(entry.display_name),
            path=_text(str(entry.path)),
            size=entry.size,
            modified=entry.modified,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "modified": format_timestamp(self.modified),
        }


FileRecord = Union[CacheFileRecord, TrashFileRecord, LogFileRecord, LargeFileRecord]
