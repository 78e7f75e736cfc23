"""Recursive file discovery for the source tree."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import TraversalError
from .models import FileEntry

LOGGER = logging.getLogger(__name__)


def collect_files(root: Path, *, guard_cycles: bool = True) -> list[FileEntry]:
    """Return every non-directory entry reachable beneath root.

    Directories, including symlinks to directories, are descended into
    depth-first; every other entry is reported as a file. Ordering follows the
    operating system's directory listing and is not stable across runs.

    Args:
        root: Directory to enumerate.
        guard_cycles: Skip directories whose device/inode pair was already
            visited, which stops symlink loops.

    Returns:
        list[FileEntry]: Flat list of discovered files.

    Raises:
        TraversalError: If root is not a directory or any entry beneath it
            cannot be listed or classified. No partial result is returned.
    """
    entries: list[FileEntry] = []
    visited: set[tuple[int, int]] | None = set() if guard_cycles else None
    _walk(Path(root), entries, visited)
    LOGGER.debug("Collected %d file(s) under %s", len(entries), root)
    return entries


def _walk(
    directory: Path,
    entries: list[FileEntry],
    visited: set[tuple[int, int]] | None,
) -> None:
    if visited is not None:
        try:
            stat = directory.stat()
        except OSError as exc:
            raise TraversalError(f"Unable to stat directory {directory}: {exc}", directory) from exc
        identity = (stat.st_dev, stat.st_ino)
        if identity in visited:
            LOGGER.warning("Skipping already visited directory %s", directory)
            return
        visited.add(identity)

    try:
        with os.scandir(directory) as iterator:
            children = list(iterator)
    except OSError as exc:
        raise TraversalError(f"Unable to read directory {directory}: {exc}", directory) from exc

    for child in children:
        path = Path(child.path)
        try:
            is_dir = child.is_dir()
        except OSError as exc:
            raise TraversalError(f"Unable to classify {path}: {exc}", path) from exc

        if is_dir:
            _walk(path, entries, visited)
        else:
            entries.append(FileEntry(path=path))


__all__ = ["collect_files"]
