"""Recursive discovery of target files under a library root."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .logging import get_logger

_logger = get_logger("tree_walker")


def has_extension(path: Path | str, extension: str) -> bool:
    """Return True when ``path`` carries exactly ``extension`` (no dot, case-sensitive)."""
    return Path(path).suffix == f".{extension}"


def _list_directory(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return list(entries)


def iter_target_files(root: Path | str, extension: str) -> Iterator[Path]:
    """Yield files under ``root`` whose extension is ``extension``.

    Directories are descended into as they are met (pre-order), before the
    remaining entries of their parent. Listing errors propagate as ``OSError``.
    """
    directory = Path(root)
    if not directory.is_dir():
        return

    _logger.debug("Listing %s", directory)
    for entry in _list_directory(directory):
        path = directory / entry.name
        if entry.is_dir():
            yield from iter_target_files(path, extension)
        elif has_extension(entry.name, extension):
            yield path


class TreeWalker:
    """Walks a library tree looking for files of a single extension."""

    def __init__(self, extension: str) -> None:
        self.extension = extension

    def walk(self, root: Path | str) -> Iterator[Path]:
        """Return a fresh generator over the target files below ``root``."""
        return iter_target_files(root, self.extension)


__all__ = ["TreeWalker", "has_extension", "iter_target_files"]
