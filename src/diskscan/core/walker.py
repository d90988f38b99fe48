"""Bounded depth-first directory traversal."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterator

from diskscan.models.scan import ScanRoot, WalkEntry

log = logging.getLogger(__name__)


def walk(root: ScanRoot) -> Iterator[WalkEntry]:
    """Yield the regular files under *root*, lazily and within its bounds.

    The root is depth 0 and its direct children are depth 1; nothing
    deeper than ``root.max_depth`` is listed.  At most ``root.max_entries``
    files are yielded.  Symlinks are never followed, directories already
    seen (same device and inode) are skipped, and unreadable directories
    or entries are logged and skipped without affecting their siblings.
    """
    if root.max_depth < 1 or root.max_entries == 0:
        return

    try:
        root_stat = os.stat(root.path)
    except OSError as e:
        log.debug("Cannot access scan root %s: %s", root.path, e)
        return
    if not stat.S_ISDIR(root_stat.st_mode):
        log.debug("Scan root is not a directory: %s", root.path)
        return

    visited = {(root_stat.st_dev, root_stat.st_ino)}
    stack: list[tuple[str, int]] = [(os.fspath(root.path), 0)]
    emitted = 0

    while stack:
        current, depth = stack.pop()
        try:
            with os.scandir(current) as it:
                children = list(it)
        except OSError as e:
            log.debug("Cannot read directory %s: %s", current, e)
            continue

        child_depth = depth + 1
        for child in children:
            try:
                # File type comes from d_type; file metadata is read later by the reducer.
                if child.is_file(follow_symlinks=False):
                    yield WalkEntry(path=Path(child.path), name=child.name)
                    emitted += 1
                    if root.max_entries is not None and emitted >= root.max_entries:
                        return
                elif child_depth < root.max_depth and child.is_dir(follow_symlinks=False):
                    st = child.stat(follow_symlinks=False)
                    key = (st.st_dev, st.st_ino)
                    if key in visited:
                        log.debug("Skipping already visited directory: %s", child.path)
                        continue
                    visited.add(key)
                    stack.append((child.path, child_depth))
            except OSError as e:
                log.debug("Cannot access %s: %s", child.path, e)
