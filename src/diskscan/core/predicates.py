"""Per-category keep/drop rules and record transforms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from diskscan.models.records import (
    CacheFileRecord,
    FileRecord,
    LargeFileRecord,
    LogFileRecord,
    TrashFileRecord,
)
from diskscan.models.scan import FileEntry

# 100 MiB; a file must be strictly larger to count as large.
LARGE_FILE_THRESHOLD = 100 * 1024 * 1024


def keep_all(entry: FileEntry) -> bool:
    return True


def is_large_file(entry: FileEntry) -> bool:
    return entry.size > LARGE_FILE_THRESHOLD


@dataclass(frozen=True, slots=True)
class CategoryPredicate:
    """Stateless filter plus optional transform into a category record.

    ``transform`` may raise ``OSError``, ``ValueError`` or
    ``OverflowError`` for entries with unusable metadata; the reducer
    drops such entries.
    """

    keep: Callable[[FileEntry], bool] = keep_all
    transform: Callable[[FileEntry], FileRecord] | None = None

    def record(self, entry: FileEntry) -> FileRecord:
        if self.transform is None:
            raise TypeError("This predicate has no record transform")
        return self.transform(entry)


CACHE_FILES = CategoryPredicate(keep_all, CacheFileRecord.from_entry)
TRASH_FILES = CategoryPredicate(keep_all, TrashFileRecord.from_entry)
LOG_FILES = CategoryPredicate(keep_all, LogFileRecord.from_entry)
LARGE_FILES = CategoryPredicate(is_large_file, LargeFileRecord.from_entry)

ANY_FILE = CategoryPredicate(keep_all)
LARGE_FILE_SIZE = CategoryPredicate(is_large_file)
