"""
file_helper.py: Directory listing and lazy line reading.

These are the I/O collaborators of the engine:
- list_text_files(directory) validates the input directory and returns its files
- read_lines(path) yields a file's lines one at a time, terminators removed
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from textstats.exceptions import DirectoryError, EmptyDirectoryError


def list_text_files(directory: str | Path) -> list[Path]:
    """
    Return the regular files directly inside ``directory``, sorted by name.

    Subdirectories are not descended into. Sorting makes batch composition
    reproducible across runs and platforms.

    Raises:
        DirectoryError: the path does not exist or is not a directory
        EmptyDirectoryError: the directory holds no regular files
    """
    folder = Path(directory)
    if not folder.is_dir():
        raise DirectoryError(
            message=f"Directory does not exist: {folder}",
            context={"path": str(folder)},
        )

    files = sorted((p for p in folder.iterdir() if p.is_file()), key=lambda p: p.name)
    if not files:
        raise EmptyDirectoryError(
            message=f"No files found in the directory: {folder}",
            context={"path": str(folder)},
        )
    return files


def read_lines(path: str | Path, encoding: str = "utf-8") -> Iterator[str]:
    """
    Lazily yield the lines of a text file without their line terminators.

    Universal newlines are on, so ``\\n``, ``\\r\\n`` and ``\\r`` all end a line.
    A final line without a terminator is still yielded; an empty file yields
    nothing. Opening and decoding errors propagate to the caller as ``OSError``
    or ``UnicodeDecodeError``.
    """
    with open(path, encoding=encoding) as f:
        for line in f:
            yield line[:-1] if line.endswith("\n") else line
