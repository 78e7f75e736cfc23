"""Tests for the rename step."""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from fileman.organize import CrossDeviceError, MoveError, move_file


def test_move_file_renames_into_new_directory(tmp_path: Path) -> None:
    source = tmp_path / "a.txt"
    source.write_text("content", encoding="utf-8")
    destination = tmp_path / "target" / "2024" / "2024-01" / "2024-01_0.txt"

    move_file(source, destination)

    assert not source.exists()
    assert destination.read_text(encoding="utf-8") == "content"


def test_move_file_refuses_to_overwrite(tmp_path: Path) -> None:
    source = tmp_path / "a.txt"
    source.write_text("new", encoding="utf-8")
    destination = tmp_path / "existing.txt"
    destination.write_text("old", encoding="utf-8")

    with pytest.raises(MoveError):
        move_file(source, destination)

    assert source.exists()
    assert destination.read_text(encoding="utf-8") == "old"


def test_move_file_missing_source_raises(tmp_path: Path) -> None:
    with pytest.raises(MoveError) as excinfo:
        move_file(tmp_path / "gone.txt", tmp_path / "dest.txt")

    assert excinfo.value.path == tmp_path / "gone.txt"


def test_move_file_reports_cross_device(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = tmp_path / "a.txt"
    source.write_text("content", encoding="utf-8")

    def _cross_device(self: Path, target: Path) -> Path:
        raise OSError(errno.EXDEV, "Invalid cross-device link")

    monkeypatch.setattr(Path, "rename", _cross_device)

    with pytest.raises(CrossDeviceError) as excinfo:
        move_file(source, tmp_path / "out" / "a.txt")

    assert isinstance(excinfo.value, MoveError)
    assert excinfo.value.code == "cross_device_error"
    assert source.exists()


def test_move_file_uninspectable_destination_raises(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    source = tmp_path / "a.txt"
    source.write_text("content", encoding="utf-8")
    destination = tmp_path / "out" / "a.txt"
    original_lstat = Path.lstat

    def _lstat(self: Path):
        if self == destination:
            raise PermissionError(errno.EACCES, "Permission denied", str(self))
        return original_lstat(self)

    monkeypatch.setattr(Path, "lstat", _lstat)

    with pytest.raises(MoveError) as excinfo:
        move_file(source, destination)

    assert excinfo.value.path == destination
    assert source.exists()
