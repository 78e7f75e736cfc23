"""Errors raised by the organize pipeline."""

from __future__ import annotations

from pathlib import Path


class OrganizeError(Exception):
    """Base exception for organize pipeline failures.

    Attributes:
        path: Filesystem path involved in the failure.
        code: Machine-readable identifier surfaced by the CLI.
    """

    code = "organize_error"

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class TraversalError(OrganizeError):
    """Raised when a path under the source root cannot be enumerated."""

    code = "traversal_error"


class MetadataError(OrganizeError):
    """Raised when a file's creation timestamp cannot be read."""

    code = "metadata_error"


class DirectoryCreationError(OrganizeError):
    """Raised when a bucket directory cannot be created."""

    code = "directory_creation_error"


class SeedCountError(OrganizeError):
    """Raised when an existing bucket cannot be read to seed its counter."""

    code = "seed_count_error"


class MoveError(OrganizeError):
    """Raised when a file cannot be renamed to its destination."""

    code = "move_error"


class CrossDeviceError(MoveError):
    """Raised when source and destination live on different filesystems."""

    code = "cross_device_error"


__all__ = [
    "OrganizeError",
    "TraversalError",
    "MetadataError",
    "DirectoryCreationError",
    "SeedCountError",
    "MoveError",
    "CrossDeviceError",
]
