"""Tests for recursive file discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fileman.organize import TraversalError, collect_files


def _touch_all(paths: list[Path]) -> None:
    for path in paths:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(path.name, encoding="utf-8")


def test_collect_files_flat_directory(tmp_path: Path) -> None:
    expected = [tmp_path / "1.txt", tmp_path / "2.txt", tmp_path / "3.txt"]
    _touch_all(expected)

    found = collect_files(tmp_path)

    assert {entry.path for entry in found} == set(expected)
    assert len(found) == len(expected)


def test_collect_files_nested_directory(tmp_path: Path) -> None:
    expected = [
        tmp_path / "1.txt",
        tmp_path / "2.txt",
        tmp_path / "nested_dir" / "1.txt",
        tmp_path / "nested_dir" / "deeper" / "2.txt",
    ]
    _touch_all(expected)
    (tmp_path / "empty").mkdir()

    found = collect_files(tmp_path)

    assert {entry.path for entry in found} == set(expected)
    assert all(entry.path.is_file() for entry in found)


def test_collect_files_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()

    assert collect_files(tmp_path) == []


def test_collect_files_rejects_file_root(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "not_a_dir.txt"
    not_a_dir.write_text("x", encoding="utf-8")

    with pytest.raises(TraversalError) as excinfo:
        collect_files(not_a_dir)

    assert excinfo.value.path == not_a_dir


def test_collect_files_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(TraversalError):
        collect_files(tmp_path / "missing")


def test_collect_files_guards_symlink_cycles(tmp_path: Path) -> None:
    root = tmp_path / "root"
    _touch_all([root / "a.txt", root / "child" / "b.txt"])
    try:
        os.symlink(root, root / "child" / "loop", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    found = collect_files(root)

    assert sorted(entry.path.name for entry in found) == ["a.txt", "b.txt"]


def test_collect_files_reports_dangling_symlink_as_file(tmp_path: Path) -> None:
    _touch_all([tmp_path / "a.txt"])
    dangling = tmp_path / "dangling"
    try:
        os.symlink(tmp_path / "missing-target", dangling)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    found = collect_files(tmp_path)

    assert {entry.path for entry in found} == {tmp_path / "a.txt", dangling}
