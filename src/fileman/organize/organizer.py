"""Organize orchestration: collect, bucket, number, and move."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Callable

from fileman.config.models import OrganizeOptions

from .buckets import bucket_key, read_creation_time
from .discovery import collect_files
from .errors import OrganizeError
from .models import FileEntry, MoveRecord, OrganizeResult, OrganizeState, OrganizeTask
from .mover import move_file
from .paths import build_destination
from .sequence import SequenceCache

LOGGER = logging.getLogger(__name__)

TimestampReader = Callable[[Path], datetime]
Mover = Callable[[Path, Path], None]


class Organizer:
    """Move every file under a source tree into dated buckets under a target.

    Each organizer performs a single run and owns the sequence cache for it.
    Files are processed one at a time; the first failure stops the run and
    files already moved stay in the target tree.
    """

    def __init__(
        self,
        task: OrganizeTask,
        options: OrganizeOptions | None = None,
        *,
        cache: SequenceCache | None = None,
        read_timestamp: TimestampReader | None = None,
        mover: Mover = move_file,
    ) -> None:
        """Initialize the organizer.

        Args:
            task: Validated source and target directories.
            options: Organize options; defaults are used when omitted.
            cache: Sequence cache to consult; a fresh one rooted at the task
                target is created when omitted.
            read_timestamp: Callable returning a file's creation time.
            mover: Callable renaming a file to its destination.
        """
        self.task = task
        self.options = options or OrganizeOptions()
        self.cache = cache if cache is not None else SequenceCache(task.target)
        self.read_timestamp = read_timestamp or partial(
            read_creation_time,
            fallback_to_modified=self.options.creation_time_fallback,
        )
        self.mover = mover
        self._state = OrganizeState.IDLE

    @property
    def state(self) -> OrganizeState:
        """Return the current lifecycle state."""
        return self._state

    def run(self) -> OrganizeResult:
        """Organize every file under the task source.

        Returns:
            OrganizeResult: Moves performed and per-bucket counts.

        Raises:
            OrganizeError: The first traversal, metadata, directory-creation,
                seed-count, or move failure encountered.
            RuntimeError: If the organizer has already run.
        """
        if self._state is not OrganizeState.IDLE:
            raise RuntimeError(f"Organizer already ran (state={self._state.value}).")

        result = OrganizeResult(task=self.task)
        LOGGER.info("Organizing %s into %s", self.task.source, self.task.target)

        try:
            self._state = OrganizeState.COLLECTING
            entries = collect_files(
                self.task.source,
                guard_cycles=self.options.guard_symlink_cycles,
            )

            self._state = OrganizeState.PROCESSING_FILES
            for entry in entries:
                result.moves.append(self._process(entry))
        except OrganizeError as exc:
            self._state = OrganizeState.FAILED
            LOGGER.error("Organize run failed at %s: %s", exc.path, exc)
            raise
        except Exception:
            self._state = OrganizeState.FAILED
            LOGGER.exception("Organize run failed unexpectedly")
            raise

        self._state = OrganizeState.DONE
        result.buckets = dict(self.cache.assigned)
        result.finished_at = datetime.now(timezone.utc)
        LOGGER.info(
            "Moved %d file(s) into %d bucket(s).", len(result.moves), len(result.buckets)
        )
        return result

    def _process(self, entry: FileEntry) -> MoveRecord:
        bucket = bucket_key(self.read_timestamp(entry.path))
        sequence = self.cache.next(bucket)
        destination = build_destination(self.task.target, bucket, sequence, entry.extension)
        self.mover(entry.path, destination)
        LOGGER.debug("Moved %s -> %s", entry.path, destination)
        return MoveRecord(
            source=entry.path,
            destination=destination,
            bucket=bucket,
            sequence=sequence,
        )


def organize(task: OrganizeTask, options: OrganizeOptions | None = None) -> OrganizeResult:
    """Run a fresh organizer for task and return its result."""
    return Organizer(task, options).run()


__all__ = ["Organizer", "organize"]
