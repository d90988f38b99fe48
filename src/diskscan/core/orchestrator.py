"""Scan and summary operations, one per category."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from diskscan.core.catalog import max_results, scan_roots
from diskscan.core.dirs import DirectoryResolutionError, DirectoryResolver
from diskscan.core.predicates import (
    ANY_FILE,
    CACHE_FILES,
    LARGE_FILE_SIZE,
    LARGE_FILES,
    LOG_FILES,
    TRASH_FILES,
    CategoryPredicate,
)
from diskscan.core.ranking import rank
from diskscan.core.reducer import Partial, ReduceMode, default_workers, merge, reduce_entries
from diskscan.core.walker import walk
from diskscan.models.records import FileRecord
from diskscan.models.response import Response
from diskscan.models.scan import AggregateSummary, ScanRoot
from diskscan.settings import Settings

log = logging.getLogger(__name__)

_PREDICATES: dict[str, CategoryPredicate] = {
    "cache": CACHE_FILES,
    "trash": TRASH_FILES,
    "logs": LOG_FILES,
    "large_files": LARGE_FILES,
    "cache_summary": ANY_FILE,
    "trash_summary": ANY_FILE,
    "logs_summary": ANY_FILE,
    "large_files_summary": LARGE_FILE_SIZE,
}


def _scan_root(root: ScanRoot, predicate: CategoryPredicate, mode: ReduceMode, workers: int) -> Partial:
    """Walk one root to completion, then filter and reduce its entries."""
    entries = list(walk(root))
    log.debug("Walked %s: %d files (depth %d, cap %s)", root.path, len(entries), root.max_depth, root.max_entries)
    return reduce_entries(entries, predicate, mode, workers=workers)


def _run(
    category_id: str,
    mode: ReduceMode,
    dirs: DirectoryResolver | None,
    settings: Settings | None,
) -> Partial:
    settings = settings or Settings.instance()
    roots = scan_roots(category_id, dirs or DirectoryResolver(), settings)
    predicate = _PREDICATES[category_id]
    workers = settings.get_count("scan.workers", None) or default_workers()

    present: list[ScanRoot] = []
    for root in roots:
        if root.path.is_dir():
            present.append(root)
        else:
            log.info("Scan root not found, skipping: %s", root.path)

    if len(present) <= 1:
        partials = [_scan_root(root, predicate, mode, workers) for root in present]
    else:
        # Roots share the worker budget so nested pools stay bounded.
        per_root = max(1, workers // len(present))
        with ThreadPoolExecutor(max_workers=len(present), thread_name_prefix="diskscan-root") as executor:
            futures = [executor.submit(_scan_root, root, predicate, mode, per_root) for root in present]
            partials = [future.result() for future in futures]

    return merge(partials, mode)


def collect_records(
    category_id: str,
    dirs: DirectoryResolver | None = None,
    settings: Settings | None = None,
) -> list[FileRecord]:
    """Return the records of a list category, ranked when it has a result cap.

    Raises:
        DirectoryResolutionError: A required root directory cannot be determined.
    """
    start = time.monotonic()
    records = _run(category_id, ReduceMode.COLLECT, dirs, settings)
    cap = max_results(category_id, settings)
    if cap is not None:
        records = rank(records, cap)
    log.info("Scanned %s: %d records in %.3fs", category_id, len(records), time.monotonic() - start)
    return records


def summarize(
    category_id: str,
    dirs: DirectoryResolver | None = None,
    settings: Settings | None = None,
) -> AggregateSummary:
    """Return the total size and count of a summary category.

    Raises:
        DirectoryResolutionError: A required root directory cannot be determined.
    """
    start = time.monotonic()
    summary = _run(category_id, ReduceMode.AGGREGATE, dirs, settings)
    log.info(
        "Summarized %s: %d files, %d bytes in %.3fs",
        category_id,
        summary.file_count,
        summary.total_size,
        time.monotonic() - start,
    )
    return summary


def _records_response(category_id: str, message: str, dirs: DirectoryResolver | None) -> Response:
    try:
        records = collect_records(category_id, dirs)
    except DirectoryResolutionError as e:
        log.warning("Cannot scan %s: %s", category_id, e)
        return Response.error(str(e))
    return Response.records(message, records)


def _summary_response(category_id: str, message: str, dirs: DirectoryResolver | None) -> Response:
    try:
        summary = summarize(category_id, dirs)
    except DirectoryResolutionError as e:
        log.warning("Cannot summarize %s: %s", category_id, e)
        return Response.error(str(e))
    return Response.summary(message, summary)


def scan_cache(dirs: DirectoryResolver | None = None) -> Response:
    return _records_response("cache", "Cache files retrieved successfully", dirs)


def scan_trash(dirs: DirectoryResolver | None = None) -> Response:
    return _records_response("trash", "Trash files retrieved successfully", dirs)


def scan_logs(dirs: DirectoryResolver | None = None) -> Response:
    return _records_response("logs", "System logs retrieved successfully", dirs)


def scan_large_files(dirs: DirectoryResolver | None = None) -> Response:
    return _records_response("large_files", "Large files retrieved successfully", dirs)


def cache_summary(dirs: DirectoryResolver | None = None) -> Response:
    return _summary_response("cache_summary", "Cache summary retrieved successfully", dirs)


def trash_summary(dirs: DirectoryResolver | None = None) -> Response:
    return _summary_response("trash_summary", "Trash summary retrieved successfully", dirs)


def logs_summary(dirs: DirectoryResolver | None = None) -> Response:
    return _summary_response("logs_summary", "Log summary retrieved successfully", dirs)


def large_files_summary(dirs: DirectoryResolver | None = None) -> Response:
    return _summary_response("large_files_summary", "Large files summary retrieved successfully", dirs)


ScanOperation = Callable[[DirectoryResolver | None], Response]

SCANS: dict[str, ScanOperation] = {
    "cache": scan_cache,
    "trash": scan_trash,
    "logs": scan_logs,
    "large_files": scan_large_files,
}

SUMMARIES: dict[str, ScanOperation] = {
    "cache": cache_summary,
    "trash": trash_summary,
    "logs": logs_summary,
    "large_files": large_files_summary,
}
