"""Creation-time lookup and bucket key derivation."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

from .errors import MetadataError

LOGGER = logging.getLogger(__name__)


def read_creation_time(path: Path, *, fallback_to_modified: bool = False) -> datetime:
    """Return the creation time of path as a naive local datetime.

    Args:
        path: File to inspect.
        fallback_to_modified: Use the modification time when the platform
            does not expose a creation time.

    Returns:
        datetime: Creation (or fallback modification) time in local time.

    Raises:
        MetadataError: If the file cannot be stat'ed, or no creation time is
            available and the fallback is disabled.
    """
    try:
        stat = os.stat(path)
    except OSError as exc:
        raise MetadataError(f"Unable to read metadata for {path}: {exc}", path) from exc

    created = getattr(stat, "st_birthtime", None)
    if created is None:
        if not fallback_to_modified:
            raise MetadataError(
                f"Creation time is not available for {path} on this platform or filesystem",
                path,
            )
        LOGGER.debug("No creation time for %s; using modification time.", path)
        created = stat.st_mtime

    try:
        return datetime.fromtimestamp(created)
    except (ValueError, OverflowError, OSError) as exc:
        raise MetadataError(
            f"Timestamp {created!r} of {path} is out of range: {exc}", path
        ) from exc


def bucket_key(created: datetime) -> str:
    """Return the ``YYYY/YYYY-MM`` bucket key for a timestamp."""
    return f"{created.year:04d}/{created.year:04d}-{created.month:02d}"


__all__ = ["read_creation_time", "bucket_key"]
