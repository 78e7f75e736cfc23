"""Data models describing organize runs."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .paths import file_extension


class OrganizeTask(BaseModel):
    """Source and target directories for a single organize run.

    Attributes:
        source: Directory holding the unorganized files.
        target: Directory receiving the dated bucket tree.
    """

    model_config = ConfigDict(frozen=True)

    source: Path
    target: Path

    @field_validator("source", "target")
    @classmethod
    def _require_directory(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"'{value}' does not correspond to a valid directory")
        return value


class FileEntry(BaseModel):
    """A file discovered under the source root."""

    model_config = ConfigDict(frozen=True)

    path: Path

    @property
    def extension(self) -> str:
        """Return the original extension without the leading dot."""
        return file_extension(self.path)


class MoveRecord(BaseModel):
    """Represents one completed move into a bucket.

    Attributes:
        source: Original file path.
        destination: Final path inside the target tree.
        bucket: Bucket key the file was assigned to.
        sequence: Sequence number issued for the file.
    """

    source: Path
    destination: Path
    bucket: str
    sequence: int


class OrganizeState(str, Enum):
    """Lifecycle states of an organize run."""

    IDLE = "idle"
    COLLECTING = "collecting"
    PROCESSING_FILES = "processing_files"
    DONE = "done"
    FAILED = "failed"


class OrganizeResult(BaseModel):
    """Summary of a successful organize run."""

    task: OrganizeTask
    moves: List[MoveRecord] = Field(default_factory=list)
    buckets: Dict[str, int] = Field(default_factory=dict)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None


__all__ = ["OrganizeTask", "FileEntry", "MoveRecord", "OrganizeState", "OrganizeResult"]
