"""Destination path construction."""

from __future__ import annotations

from pathlib import Path

MONTH_PREFIX_LENGTH = len("YYYY-MM")


def file_extension(path: Path) -> str:
    """Return the text after the last dot of the file name.

    Names without a dot, names whose only dot is leading (``.bashrc``), and
    names ending in a dot have no extension. Case is preserved.
    """
    stem, dot, extension = path.name.rpartition(".")
    if not dot or not stem:
        return ""
    return extension


def build_destination(target: Path, bucket: str, sequence: int, extension: str) -> Path:
    """Return the destination path for a file assigned to a bucket.

    Args:
        target: Root of the organized tree.
        bucket: Bucket key such as ``2023/2023-03``.
        sequence: Sequence number issued by the cache.
        extension: Original extension, possibly empty.

    Returns:
        Path: ``target / bucket / "<YYYY-MM>_<sequence>[.<extension>]"``.
    """
    name = f"{bucket[-MONTH_PREFIX_LENGTH:]}_{sequence}"
    if extension:
        name = f"{name}.{extension}"
    return target / bucket / name


__all__ = ["file_extension", "build_destination"]
