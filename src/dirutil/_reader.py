"""Directory listing adapters used by :func:`~dirutil.walk`.

The walker only needs two capabilities from the host: list the children
of a directory with a type hint, and query the type of a single path
when the hint is missing.  :class:`ScandirReader` provides both on top
of :func:`os.scandir`, which covers POSIX and Windows alike.
"""

from __future__ import annotations

import os
import stat
from typing import Iterator, Protocol

from ._types import ItemType


class DirectoryReader(Protocol):
    """Capability the walker traverses with."""

    def scan(self, path: str) -> Iterator[tuple[str, ItemType | None]]:
        """Yield ``(name, type_hint)`` for each child of *path*.

        A hint of ``None`` means the type is not known without a
        metadata query.  Raises :class:`OSError` if *path* is not a
        readable directory.
        """
        ...

    def item_type(self, path: str) -> ItemType:
        """Return the :class:`ItemType` of *path* without following symlinks."""
        ...


def _type_from_mode(mode: int) -> ItemType:
    if stat.S_ISDIR(mode):
        return ItemType.DIR
    if stat.S_ISREG(mode):
        return ItemType.FILE
    return ItemType.UNHANDLED


def _hint(entry: os.DirEntry) -> ItemType | None:
    try:
        if entry.is_symlink():
            return ItemType.UNHANDLED
        if entry.is_dir(follow_symlinks=False):
            return ItemType.DIR
        if entry.is_file(follow_symlinks=False):
            return ItemType.FILE
    except OSError:
        return None
    # Neither dir nor file nor link: let the walker ask lstat()
    return None


class ScandirReader:
    """:class:`DirectoryReader` backed by :func:`os.scandir` and :func:`os.lstat`."""

    def scan(self, path: str) -> Iterator[tuple[str, ItemType | None]]:
        with os.scandir(path) as it:
            for entry in it:
                yield entry.name, _hint(entry)

    def item_type(self, path: str) -> ItemType:
        return _type_from_mode(os.lstat(path).st_mode)
