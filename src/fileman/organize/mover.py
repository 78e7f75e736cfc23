"""Rename files into their bucket destinations."""

from __future__ import annotations

import errno
from pathlib import Path

from .errors import CrossDeviceError, MoveError


def move_file(source: Path, destination: Path) -> None:
    """Rename source to destination on the same filesystem.

    Args:
        source: File to move.
        destination: Final path; its parent is created when missing.

    Raises:
        CrossDeviceError: If source and destination are on different filesystems.
        MoveError: If the destination exists or the rename fails.
    """
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise MoveError(f"Unable to prepare {destination.parent}: {exc}", destination) from exc

    try:
        destination.lstat()
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise MoveError(f"Unable to inspect {destination}: {exc}", destination) from exc
    else:
        raise MoveError(f"Destination already exists: {destination}", destination)

    try:
        source.rename(destination)
    except OSError as exc:
        if exc.errno == errno.EXDEV:
            raise CrossDeviceError(
                f"Cannot move {source} to {destination} across filesystems", source
            ) from exc
        raise MoveError(f"Failed to move {source} to {destination}: {exc}", source) from exc


__all__ = ["move_file"]
