"""Size ranking for list scans."""

from __future__ import annotations

from typing import Iterable, TypeVar

from diskscan.models.records import FileRecord

R = TypeVar("R", bound=FileRecord)


def rank(records: Iterable[R], max_results: int | None) -> list[R]:
    """Sort *records* by descending size and keep the first *max_results*.

    Equal sizes are ordered by path so the top-N depends only on the set
    of candidates, never on the order they were produced in.  Truncation
    happens strictly after the full sort.
    """
    ranked = sorted(records, key=lambda r: (-r.size, r.path))
    if max_results is not None and len(ranked) > max_results:
        del ranked[max_results:]
    return ranked
