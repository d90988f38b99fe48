"""Scan input and intermediate dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanRoot:
    """One directory tree to walk, with its traversal bounds.

    ``max_depth`` counts the root itself as depth 0, so ``max_depth=1``
    visits only the root's direct children.  ``max_entries=None`` means
    the walk is bounded by depth alone.
    """

    path: Path
    max_depth: int
    max_entries: int | None = None


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """Regular file found by the walker, before its metadata is read."""

    path: Path
    name: str


@dataclass(frozen=True, slots=True)
class FileEntry:
    """Regular file with the metadata read from disk."""

    path: Path
    size: int
    modified: float
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else self.path.name


@dataclass(frozen=True, slots=True)
class AggregateSummary:
    """Total size and count of the files that passed a category predicate.

    Summaries combine with ``+``; ``AggregateSummary()`` is the identity,
    so partial summaries can be merged in any grouping or order.
    """

    total_size: int = 0
    file_count: int = 0

    def __post_init__(self) -> None:
        if self.total_size < 0 or self.file_count < 0:
            raise ValueError("AggregateSummary values must be non-negative")

    def __add__(self, other: AggregateSummary) -> AggregateSummary:
        if not isinstance(other, AggregateSummary):
            return NotImplemented
        return AggregateSummary(self.total_size + other.total_size, self.file_count + other.file_count)

    def to_dict(self) -> dict[str, int]:
        return {"totalSize": self.total_size, "fileCount": self.file_count}
