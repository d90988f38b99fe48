"""Batch removal of scanned files.

User-owned files (cache, trash, large files) are unlinked directly.
System logs are root-owned, so every clear of logs goes through a single
elevated ``rm`` command.  Every target path must lie inside one of its
category's scan roots; anything else is reported and left alone.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Sequence

from diskscan.core.catalog import get_entry
from diskscan.core.dirs import DirectoryResolutionError, DirectoryResolver
from diskscan.core.orchestrator import collect_records
from diskscan.core.privileges import CommandRunner, PrivilegeError, run_elevated
from diskscan.models.clear_result import ClearResult
from diskscan.models.response import Response, TextPayload
from diskscan.utils import remove_paths, reset_dir

log = logging.getLogger(__name__)


def check_path(raw: str | os.PathLike[str], roots: Sequence[Path]) -> tuple[Path | None, str | None]:
    """Validate a clear target against the category roots.

    Returns ``(path, None)`` for an acceptable target or ``(None, reason)``.
    The parent directories are resolved, so a symlinked directory inside a
    root cannot lead outside of it.  The last component is not resolved, so
    a target that is itself a symlink removes the link only.
    """
    path = Path(raw)
    if not path.is_absolute():
        return None, "not an absolute path"
    parent, name = os.path.split(os.path.normpath(path))
    resolved = os.path.join(os.path.realpath(parent), name)
    for root in roots:
        root_str = os.path.realpath(root)
        if resolved != root_str and os.path.commonpath([resolved, root_str]) == root_str:
            return Path(resolved), None
    return None, f"outside of {', '.join(str(r) for r in roots)}"


def _drop_trashinfo(path: Path) -> None:
    """Remove the ``.trashinfo`` record belonging to a removed trash file."""
    info = path.parent.parent / "info" / f"{path.name}.trashinfo"
    try:
        info.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        log.debug("Cannot remove trash info %s: %s", info, e)


def _clear_paths(
    category_id: str,
    noun: str,
    paths: Iterable[str | os.PathLike[str]],
    dirs: DirectoryResolver | None,
    on_removed: Callable[[Path], None] | None = None,
) -> Response:
    dirs = dirs or DirectoryResolver()
    try:
        roots = get_entry(category_id).roots(dirs)
    except DirectoryResolutionError as e:
        log.warning("Cannot clear %s files: %s", noun, e)
        return Response.error(str(e))

    result = ClearResult(noun)
    for raw in paths:
        path, reason = check_path(raw, roots)
        if path is None:
            result.errors.append(f"{raw}: {reason}")
            continue
        freed, removed, errors = remove_paths([path])
        result.merge(freed, removed, errors)
        if removed and on_removed is not None:
            on_removed(path)

    if result.errors:
        log.warning("Cleared %d %s files with %d failures", result.cleared, noun, len(result.errors))
    return result.to_response()


def clear_selected_cache_files(
    paths: Iterable[str | os.PathLike[str]],
    dirs: DirectoryResolver | None = None,
) -> Response:
    return _clear_paths("cache", "cache", paths, dirs)


def clear_selected_trash_files(
    paths: Iterable[str | os.PathLike[str]],
    dirs: DirectoryResolver | None = None,
) -> Response:
    return _clear_paths("trash", "trash", paths, dirs, on_removed=_drop_trashinfo)


def clear_selected_large_files(
    paths: Iterable[str | os.PathLike[str]],
    dirs: DirectoryResolver | None = None,
) -> Response:
    return _clear_paths("large_files", "large", paths, dirs)


def clear_selected_log_files(
    paths: Iterable[str | os.PathLike[str]],
    runner: CommandRunner | None = None,
    dirs: DirectoryResolver | None = None,
) -> Response:
    """Remove the selected log files with one elevated ``rm`` command."""
    paths = list(paths)
    if not paths:
        return Response.success("No log files selected")

    roots = get_entry("logs").roots(dirs or DirectoryResolver())
    result = ClearResult("log")
    valid: list[Path] = []
    for raw in paths:
        path, reason = check_path(raw, roots)
        if path is None:
            result.errors.append(f"{raw}: {reason}")
        else:
            valid.append(path)

    if valid:
        try:
            outcome = run_elevated(["rm", "-f", "--", *map(str, valid)], runner)
        except PrivilegeError as e:
            log.warning("Cannot launch elevated removal: %s", e)
            return Response.error(f"Failed to run pkexec: {e}")
        if not outcome.success:
            return Response.error(f"Failed to clear log files: {outcome.stderr}")
        result.cleared = len(valid)

    return result.to_response()


def clear_trash(dirs: DirectoryResolver | None = None) -> Response:
    """Remove every file directly inside the trash ``files`` directory."""
    dirs = dirs or DirectoryResolver()
    try:
        trash_dir = dirs.trash_files_dir()
    except DirectoryResolutionError as e:
        log.warning("Cannot clear trash: %s", e)
        return Response.error(str(e))

    try:
        items = sorted(trash_dir.iterdir())
    except OSError as e:
        return Response.error(f"Failed to read trash: {e.strerror or e}")

    result = ClearResult("trash")
    for item in items:
        if item.is_dir() and not item.is_symlink():
            continue
        freed, removed, errors = remove_paths([item])
        result.merge(freed, removed, errors)
        if removed:
            _drop_trashinfo(item)

    return result.to_response("Trash cleared successfully")


def clear_cache(dirs: DirectoryResolver | None = None) -> Response:
    """Remove the whole cache directory and recreate it empty."""
    dirs = dirs or DirectoryResolver()
    try:
        cache_dir = dirs.cache_dir()
    except DirectoryResolutionError as e:
        log.warning("Cannot clear cache: %s", e)
        return Response.error(str(e))

    if not cache_dir.exists():
        return Response.info("No cache to clear")
    try:
        reset_dir(cache_dir)
    except OSError as e:
        log.warning("Failed to clear cache directory %s: %s", cache_dir, e)
        return Response.error(f"Failed to clear cache directory: {e.strerror or e}")
    return Response.success("Cache directory cleared successfully")


def clear_all_logs(
    runner: CommandRunner | None = None,
    dirs: DirectoryResolver | None = None,
) -> Response:
    """Scan the log directory and remove everything found in one elevated batch."""
    try:
        records = collect_records("logs", dirs)
    except DirectoryResolutionError as e:
        return Response.error(str(e), TextPayload("0"))

    if not records:
        return Response.success("No log files found to clear", TextPayload("0"))

    try:
        outcome = run_elevated(["rm", "-f", "--", *(r.path for r in records)], runner)
    except PrivilegeError as e:
        log.warning("Cannot launch elevated removal: %s", e)
        return Response.error(f"Failed to run pkexec: {e}", TextPayload("0"))
    if not outcome.success:
        return Response.error(f"Failed to clear logs: {outcome.stderr}", TextPayload("0"))

    count = len(records)
    return Response.success(f"Cleared {count} log files", TextPayload(str(count)))


def clear_all_large_files(dirs: DirectoryResolver | None = None) -> Response:
    """Scan for large files and remove every file the scan returns."""
    try:
        records = collect_records("large_files", dirs)
    except DirectoryResolutionError as e:
        return Response.error(str(e), TextPayload("0"))

    result = ClearResult("large")
    result.merge(*remove_paths([Path(r.path) for r in records]))
    return result.to_response(f"Cleared {result.cleared} large files", count_payload=True)


CLEAR_SELECTED: dict[str, Callable[[Iterable[str]], Response]] = {
    "cache": clear_selected_cache_files,
    "trash": clear_selected_trash_files,
    "logs": clear_selected_log_files,
    "large_files": clear_selected_large_files,
}

CLEAR_ALL: dict[str, Callable[[], Response]] = {
    "cache": clear_cache,
    "trash": clear_trash,
    "logs": clear_all_logs,
    "large_files": clear_all_large_files,
}
