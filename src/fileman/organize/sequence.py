"""Per-bucket sequence numbering."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .errors import DirectoryCreationError, SeedCountError

LOGGER = logging.getLogger(__name__)


def count_files(directory: Path) -> int:
    """Return the number of regular files directly inside directory.

    Subdirectories are not walked. Symlinks pointing at regular files count.

    Raises:
        SeedCountError: If the directory cannot be listed.
    """
    try:
        with os.scandir(directory) as iterator:
            return sum(1 for entry in iterator if entry.is_file())
    except OSError as exc:
        raise SeedCountError(f"Unable to count files in {directory}: {exc}", directory) from exc


class SequenceCache:
    """Issue sequence numbers per bucket beneath a target root.

    The first request for a bucket seeds its counter from the files already on
    disk, or from zero when the bucket directory has to be created. Afterwards
    the in-memory counter is authoritative and the filesystem is not
    consulted again.
    """

    def __init__(self, target: Path) -> None:
        self._target = Path(target)
        self._next: dict[str, int] = {}
        self._assigned: dict[str, int] = {}

    @property
    def target(self) -> Path:
        """Return the root directory buckets are created under."""
        return self._target

    @property
    def assigned(self) -> Mapping[str, int]:
        """Return a read-only view of how many numbers each bucket issued."""
        return MappingProxyType(self._assigned)

    def next(self, bucket: str) -> int:
        """Return the next sequence number for bucket and advance the counter.

        Args:
            bucket: Bucket key such as ``2024/2024-01``.

        Returns:
            int: Sequence number to use for the next file in the bucket.

        Raises:
            DirectoryCreationError: If a missing bucket directory cannot be created.
            SeedCountError: If an existing bucket directory cannot be read.
        """
        if bucket not in self._next:
            self._next[bucket] = self._seed(bucket)

        sequence = self._next[bucket]
        self._next[bucket] = sequence + 1
        self._assigned[bucket] = self._assigned.get(bucket, 0) + 1
        return sequence

    def _seed(self, bucket: str) -> int:
        directory = self._target / bucket
        try:
            directory.stat()
        except (FileNotFoundError, NotADirectoryError):
            exists = False
        except OSError as exc:
            raise SeedCountError(f"Unable to inspect bucket {directory}: {exc}", directory) from exc
        else:
            exists = True

        if exists:
            seed = count_files(directory)
            LOGGER.debug("Seeded bucket %s from %d existing file(s).", bucket, seed)
            return seed

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreationError(
                f"Unable to create bucket directory {directory}: {exc}", directory
            ) from exc
        LOGGER.debug("Created bucket directory %s.", directory)
        return 0

    def __contains__(self, bucket: object) -> bool:
        return bucket in self._next

    def __len__(self) -> int:
        return len(self._next)


__all__ = ["SequenceCache", "count_files"]
