"""Parallel filter/transform/reduce over a bounded list of file entries.

The walked entry list is materialized before any parallel work starts and
cut into contiguous slices, one per worker.  Each worker stats the files
of its slice and folds them into a private partial result (a record list
or an :class:`AggregateSummary`), and the partials are combined with ``+``
only after every worker has finished.  No worker ever touches another
worker's partial, so no lock is needed and the result does not depend on
how the slices were scheduled.
"""

from __future__ import annotations

import functools
import logging
import operator
import os
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Sequence, Union

from diskscan.core.predicates import CategoryPredicate
from diskscan.models.records import FileRecord
from diskscan.models.scan import AggregateSummary, FileEntry, WalkEntry

log = logging.getLogger(__name__)

# Below this many entries the thread pool costs more than it saves.
SEQUENTIAL_THRESHOLD = 64

Partial = Union[list[FileRecord], AggregateSummary]

# Per-entry failures that drop just that entry.
_SOFT_ERRORS = (OSError, ValueError, OverflowError)

# Reads the metadata of one walked entry.
MetadataReader = Callable[[WalkEntry], FileEntry]


class ReduceMode(Enum):
    COLLECT = "collect"
    AGGREGATE = "aggregate"

    def identity(self) -> Partial:
        if self is ReduceMode.COLLECT:
            return []
        return AggregateSummary()


def default_workers() -> int:
    """Worker count matching the available hardware parallelism."""
    return os.cpu_count() or 1


def partition(entries: Sequence[WalkEntry], parts: int) -> list[Sequence[WalkEntry]]:
    """Split *entries* into at most *parts* contiguous, non-empty slices."""
    if not entries:
        return []
    parts = max(1, min(parts, len(entries)))
    size = -(-len(entries) // parts)
    return [entries[i : i + size] for i in range(0, len(entries), size)]


def merge(partials: Sequence[Partial], mode: ReduceMode) -> Partial:
    """Combine partial results with the mode's associative ``+``."""
    return functools.reduce(operator.add, partials, mode.identity())


def read_metadata(found: WalkEntry) -> FileEntry:
    """Stat a walked file without following symlinks."""
    st = os.stat(found.path, follow_symlinks=False)
    return FileEntry(path=found.path, size=st.st_size, modified=st.st_mtime, name=found.name)


def _collect_slice(
    entries: Sequence[WalkEntry],
    predicate: CategoryPredicate,
    metadata: MetadataReader,
) -> list[FileRecord]:
    records: list[FileRecord] = []
    for found in entries:
        try:
            entry = metadata(found)
            if predicate.keep(entry):
                records.append(predicate.record(entry))
        except _SOFT_ERRORS as e:
            log.debug("Dropping %r: %s", found.path, e)
    return records


def _aggregate_slice(
    entries: Sequence[WalkEntry],
    predicate: CategoryPredicate,
    metadata: MetadataReader,
) -> AggregateSummary:
    total = 0
    count = 0
    for found in entries:
        try:
            entry = metadata(found)
            if predicate.keep(entry):
                total += entry.size
                count += 1
        except _SOFT_ERRORS as e:
            log.debug("Dropping %r: %s", found.path, e)
    return AggregateSummary(total, count)


_FOLDS: dict[ReduceMode, Callable[[Sequence[WalkEntry], CategoryPredicate, MetadataReader], Partial]] = {
    ReduceMode.COLLECT: _collect_slice,
    ReduceMode.AGGREGATE: _aggregate_slice,
}


def reduce_entries(
    entries: Sequence[WalkEntry],
    predicate: CategoryPredicate,
    mode: ReduceMode,
    *,
    workers: int | None = None,
    metadata: MetadataReader = read_metadata,
) -> Partial:
    """Filter *entries* with *predicate* and reduce them according to *mode*.

    Returns a list of records for ``COLLECT`` (in no particular order) or
    an :class:`AggregateSummary` for ``AGGREGATE``.  Metadata is read by
    *metadata* inside the workers; entries that vanished or whose metadata
    cannot be used are dropped individually.
    """
    fold = _FOLDS[mode]
    workers = workers or default_workers()

    if workers <= 1 or len(entries) < SEQUENTIAL_THRESHOLD:
        return merge([fold(entries, predicate, metadata)], mode)

    slices = partition(entries, workers)
    with ThreadPoolExecutor(max_workers=len(slices), thread_name_prefix="diskscan-reduce") as executor:
        futures = [executor.submit(fold, part, predicate, metadata) for part in slices]
        partials = [future.result() for future in futures]

    log.debug("Reduced %d entries across %d workers (%s)", len(entries), len(slices), mode.value)
    return merge(partials, mode)


def collect(
    entries: Sequence[WalkEntry],
    predicate: CategoryPredicate,
    *,
    workers: int | None = None,
    metadata: MetadataReader = read_metadata,
) -> list[FileRecord]:
    return reduce_entries(entries, predicate, ReduceMode.COLLECT, workers=workers, metadata=metadata)


def aggregate(
    entries: Sequence[WalkEntry],
    predicate: CategoryPredicate,
    *,
    workers: int | None = None,
    metadata: MetadataReader = read_metadata,
) -> AggregateSummary:
    return reduce_entries(entries, predicate, ReduceMode.AGGREGATE, workers=workers, metadata=metadata)
