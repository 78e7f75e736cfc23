"""Date-bucketed organize pipeline."""

from .buckets import bucket_key, read_creation_time
from .discovery import collect_files
from .errors import (
    CrossDeviceError,
    DirectoryCreationError,
    MetadataError,
    MoveError,
    OrganizeError,
    SeedCountError,
    TraversalError,
)
from .models import FileEntry, MoveRecord, OrganizeResult, OrganizeState, OrganizeTask
from .mover import move_file
from .organizer import Organizer, organize
from .paths import build_destination, file_extension
from .sequence import SequenceCache, count_files

__all__ = [
    "Organizer",
    "organize",
    "OrganizeTask",
    "OrganizeResult",
    "OrganizeState",
    "FileEntry",
    "MoveRecord",
    "SequenceCache",
    "collect_files",
    "count_files",
    "read_creation_time",
    "bucket_key",
    "build_destination",
    "file_extension",
    "move_file",
    "OrganizeError",
    "TraversalError",
    "MetadataError",
    "DirectoryCreationError",
    "SeedCountError",
    "MoveError",
    "CrossDeviceError",
]
