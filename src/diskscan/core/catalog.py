"""Scan roots and traversal bounds for every scan category."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from diskscan.core.dirs import DirectoryResolver
from diskscan.models.scan import ScanRoot
from diskscan.settings import Settings

LARGE_FILES_MAX_RESULTS = 200


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Where a category looks and how far it may go."""

    id: str
    roots: Callable[[DirectoryResolver], tuple[Path, ...]]
    max_depth: int
    max_entries: int | None = None
    max_results: int | None = None


def _cache_roots(dirs: DirectoryResolver) -> tuple[Path, ...]:
    return (dirs.cache_dir(),)


def _trash_roots(dirs: DirectoryResolver) -> tuple[Path, ...]:
    return (dirs.trash_files_dir(),)


def _log_roots(dirs: DirectoryResolver) -> tuple[Path, ...]:
    return (dirs.log_dir(),)


def _user_roots(dirs: DirectoryResolver) -> tuple[Path, ...]:
    return dirs.user_dirs()


CATALOG: dict[str, CatalogEntry] = {
    entry.id: entry
    for entry in (
        CatalogEntry("cache", _cache_roots, max_depth=4, max_entries=1000),
        CatalogEntry("trash", _trash_roots, max_depth=1),
        CatalogEntry("logs", _log_roots, max_depth=3, max_entries=500),
        CatalogEntry("large_files", _user_roots, max_depth=3, max_results=LARGE_FILES_MAX_RESULTS),
        CatalogEntry("cache_summary", _cache_roots, max_depth=4, max_entries=2000),
        CatalogEntry("trash_summary", _trash_roots, max_depth=1),
        CatalogEntry("logs_summary", _log_roots, max_depth=2, max_entries=500),
        CatalogEntry("large_files_summary", _user_roots, max_depth=3),
    )
}


def get_entry(category_id: str) -> CatalogEntry:
    try:
        return CATALOG[category_id]
    except KeyError:
        raise ValueError(f"Unknown scan category: {category_id!r}") from None


def scan_roots(
    category_id: str,
    dirs: DirectoryResolver,
    settings: Settings | None = None,
) -> list[ScanRoot]:
    """Resolve the roots of *category_id* with any configured bound overrides.

    Raises:
        DirectoryResolutionError: A root directory cannot be determined.
    """
    entry = get_entry(category_id)
    settings = settings or Settings.instance()
    max_depth = settings.get_count(f"scan.{category_id}.max_depth", entry.max_depth)
    max_entries = settings.get_count(f"scan.{category_id}.max_entries", entry.max_entries, allow_none=True)
    return [ScanRoot(path=path, max_depth=max_depth, max_entries=max_entries) for path in entry.roots(dirs)]


def max_results(category_id: str, settings: Settings | None = None) -> int | None:
    """Result-set cap applied after ranking, or None for unranked categories."""
    entry = get_entry(category_id)
    if entry.max_results is None:
        return None
    settings = settings or Settings.instance()
    return settings.get_count(f"scan.{category_id}.max_results", entry.max_results)
