"""Tests for creation-time lookup and bucket keys."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from fileman.organize import MetadataError, bucket_key, read_creation_time
from fileman.organize import buckets


def test_bucket_key_formats_year_and_month() -> None:
    assert bucket_key(datetime(2023, 3, 9, 23, 59)) == "2023/2023-03"
    assert bucket_key(datetime(2024, 12, 1)) == "2024/2024-12"


def test_bucket_key_ignores_day_and_time() -> None:
    early = bucket_key(datetime(2024, 1, 1, 0, 0))
    late = bucket_key(datetime(2024, 1, 31, 23, 59, 59))

    assert early == late == "2024/2024-01"


def test_read_creation_time_uses_birthtime(monkeypatch: pytest.MonkeyPatch) -> None:
    born = datetime(2023, 3, 14, 12, 0).timestamp()
    modified = datetime(2025, 8, 1, 12, 0).timestamp()
    monkeypatch.setattr(
        buckets.os, "stat", lambda path: SimpleNamespace(st_birthtime=born, st_mtime=modified)
    )

    assert read_creation_time(Path("photo.jpg")) == datetime(2023, 3, 14, 12, 0)


def test_read_creation_time_without_birthtime_is_strict(monkeypatch: pytest.MonkeyPatch) -> None:
    modified = datetime(2025, 8, 1, 12, 0).timestamp()
    monkeypatch.setattr(buckets.os, "stat", lambda path: SimpleNamespace(st_mtime=modified))

    with pytest.raises(MetadataError) as excinfo:
        read_creation_time(Path("photo.jpg"))

    assert excinfo.value.path == Path("photo.jpg")


def test_read_creation_time_falls_back_to_modified(monkeypatch: pytest.MonkeyPatch) -> None:
    modified = datetime(2025, 8, 1, 12, 0).timestamp()
    monkeypatch.setattr(buckets.os, "stat", lambda path: SimpleNamespace(st_mtime=modified))

    created = read_creation_time(Path("photo.jpg"), fallback_to_modified=True)

    assert created == datetime(2025, 8, 1, 12, 0)


def test_read_creation_time_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(MetadataError):
        read_creation_time(tmp_path / "gone.txt", fallback_to_modified=True)


def test_read_creation_time_out_of_range_raises_metadata_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        buckets.os, "stat", lambda path: SimpleNamespace(st_birthtime=2**40, st_mtime=0.0)
    )

    with pytest.raises(MetadataError) as excinfo:
        read_creation_time(Path("far-future.txt"))

    assert excinfo.value.path == Path("far-future.txt")
    assert isinstance(excinfo.value.__cause__, (ValueError, OverflowError, OSError))
