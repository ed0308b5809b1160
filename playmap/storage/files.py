"""Whole-file reads and writes for record files."""

from __future__ import annotations

from pathlib import Path

from playmap.exceptions import FileReadError, FileWriteError


def read_record_bytes(path: Path) -> bytes:
    """Read a record file.

    Raises:
        FileReadError: If the file is missing or unreadable.
    """
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileReadError(str(e), path=str(path)) from e


def write_record_bytes(path: Path, data: bytes) -> None:
    """Replace a record file in full via a temporary file in the same directory.

    Raises:
        FileWriteError: If the file could not be written.
    """
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_bytes(data)
        tmp.replace(path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise FileWriteError(str(e), path=str(path)) from e
