"""Recursive directory traversal with a visitor callback.

:func:`walk` reports every entry under a root to a visitor, together
with its ``/``-separated full path, its path relative to the root, its
name and its :class:`~dirutil.ItemType`.  One path buffer is shared by
the whole walk: each descent appends ``/name`` and every exit path
truncates it back, so path storage grows with depth, not with the
number of entries.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Union

from ._glob import glob_match, is_valid_pattern
from ._reader import DirectoryReader, ScandirReader
from ._types import DirError, GlobResult, ItemType, WalkConfig, WalkItem

logger = logging.getLogger(__name__)

VisitorResult = Union[bool, DirError, None]
Visitor = Callable[[WalkItem], VisitorResult]


class _PathBuffer:
    """Bounded, truncatable path under construction.

    Segments are stored with their encoded sizes so that the capacity
    check is made in bytes, like the fixed ``char[4096]`` buffers of the
    OS APIs it mirrors.
    """

    __slots__ = ("_parts", "_sizes", "_size", "_capacity")

    def __init__(self, root: str, capacity: int):
        self._parts: list[str] = [root]
        self._sizes: list[int] = [len(os.fsencode(root))]
        self._size = self._sizes[0]
        self._capacity = capacity

    @property
    def overflowed(self) -> bool:
        return self._size > self._capacity

    def __len__(self) -> int:
        return len(self._parts)

    def push(self, name: str) -> bool:
        """Append ``/name``; return ``False`` (buffer unchanged) if it would not fit."""
        n = len(os.fsencode(name)) + 1
        if self._size + n > self._capacity:
            return False
        self._parts.append(name)
        self._sizes.append(n)
        self._size += n
        return True

    def truncate(self, length: int) -> None:
        """Drop segments until only *length* remain."""
        while len(self._parts) > length:
            self._parts.pop()
            self._size -= self._sizes.pop()

    @property
    def path(self) -> str:
        if self._parts[0].endswith("/"):
            return self._parts[0] + "/".join(self._parts[1:])
        return "/".join(self._parts)

    @property
    def relative(self) -> str:
        return "/".join(self._parts[1:])


def _normalize_root(root: str | os.PathLike[str]) -> str:
    """Use ``/`` separators and drop a single trailing separator."""
    root = os.fspath(root)
    if os.sep != "/":
        root = root.replace(os.sep, "/")
    if len(root) > 1 and root.endswith("/") and not root.endswith(":/"):
        root = root[:-1]
    return root


def _open_error(exc: OSError) -> DirError:
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return DirError.PATH_DO_NOT_EXIST
    return DirError.FAILED


def _stop_result(res: VisitorResult) -> DirError | None:
    """Translate a visitor return value; ``None`` means keep going."""
    if res is None or res is False or res is DirError.OK:
        return None
    if isinstance(res, DirError):
        return res
    return DirError.OK


class _Walk:
    """State of one in-flight walk."""

    def __init__(self, buf: _PathBuffer, config: WalkConfig,
                 visitor: Visitor, reader: DirectoryReader):
        self.buf = buf
        self.config = config
        self.visitor = visitor
        self.reader = reader
        self.stopped: DirError | None = None
        self.exclude = None
        if config.exclude is not None and config.exclude.active:
            self.exclude = config.exclude.for_walk()

    def _skip(self, name: str, kind: ItemType, relative: str) -> bool:
        cfg = self.config
        if name.startswith("."):
            if kind is ItemType.DIR and cfg.skip_dot_dirs:
                return True
            if kind is ItemType.FILE and cfg.skip_dot_files:
                return True
        if self.exclude is not None:
            return self.exclude.is_excluded_in_walk(
                relative, is_dir=kind is ItemType.DIR)
        return False

    def _visit(self, item: WalkItem) -> bool:
        """Call the visitor; return ``True`` if it asked to stop."""
        self.stopped = _stop_result(self.visitor(item))
        return self.stopped is not None

    def run(self, top: bool = False) -> DirError:
        """Walk the directory currently held in the buffer."""
        buf = self.buf
        dir_path = buf.path
        try:
            entries = list(self.reader.scan(dir_path))
        except OSError as exc:
            logger.debug("cannot list %s: %s", dir_path, exc)
            if top:
                return DirError.PATH_DO_NOT_EXIST
            return _open_error(exc)

        if self.exclude is not None:
            try:
                self.exclude.enter_directory(dir_path, buf.relative)
            except OSError as exc:
                logger.debug("cannot read .gitignore in %s: %s", dir_path, exc)
                return DirError.FAILED

        depth = len(buf)
        for name, kind in entries:
            if name in (".", ".."):
                continue
            if not buf.push(name):
                return DirError.PATH_TOO_DEEP
            try:
                path = buf.path
                if kind is None:
                    try:
                        kind = self.reader.item_type(path)
                    except OSError as exc:
                        logger.debug("cannot stat %s: %s", path, exc)
                        return DirError.FAILED
                relative = buf.relative
                if self._skip(name, kind, relative):
                    continue
                item = WalkItem(path, relative, name, kind)

                if kind is not ItemType.DIR:
                    if self._visit(item):
                        return self.stopped
                    continue

                if not self.config.depth_first and self._visit(item):
                    return self.stopped
                err = self.run()
                if err is not DirError.OK or self.stopped is not None:
                    return err
                if self.config.depth_first and self._visit(item):
                    return self.stopped
            finally:
                buf.truncate(depth)
        return DirError.OK


def walk(
    root: str | os.PathLike[str],
    visitor: Visitor,
    config: WalkConfig | None = None,
    *,
    reader: DirectoryReader | None = None,
) -> DirError:
    """Call *visitor* once for every entry under *root*.

    Args:
        root: Directory to walk.  A single trailing separator is ignored.
        visitor: Called with a :class:`~dirutil.WalkItem` per entry.
            Return ``None``/``False`` to continue, ``True`` to stop (the
            walk then returns ``OK``), or a :class:`~dirutil.DirError` to
            stop and have the walk return that value.
        config: :class:`~dirutil.WalkConfig`; defaults to a pre-order
            walk with no filtering.
        reader: :class:`~dirutil._reader.DirectoryReader` to list
            directories with (default :class:`ScandirReader`).

    Returns:
        ``OK`` when the walk completed or was stopped by the visitor,
        ``PATH_DO_NOT_EXIST`` if *root* is not a readable directory,
        ``PATH_TOO_DEEP`` if a path would exceed ``config.max_path``,
        ``FAILED`` on other listing, metadata or ``.gitignore`` read errors.
    """
    config = config or WalkConfig()
    reader = reader or ScandirReader()
    root = _normalize_root(root)

    buf = _PathBuffer(root, config.max_path)
    if buf.overflowed:
        return DirError.PATH_TOO_DEEP

    logger.debug("walk %s (%s)", root, config.order)
    err = _Walk(buf, config, visitor, reader).run(top=True)
    logger.debug("walk %s finished: %s", root, err)
    return err


def collect(
    root: str | os.PathLike[str],
    config: WalkConfig | None = None,
    *,
    reader: DirectoryReader | None = None,
) -> tuple[DirError, list[WalkItem]]:
    """Walk *root* and return the outcome with every visited item, in visit order."""
    items: list[WalkItem] = []
    err = walk(root, items.append, config, reader=reader)
    return err, items


def walk_matching(
    root: str | os.PathLike[str],
    pattern: str,
    visitor: Visitor,
    config: WalkConfig | None = None,
    *,
    reader: DirectoryReader | None = None,
) -> DirError:
    """Like :func:`walk`, but only visit items whose ``relative`` path matches *pattern*.

    Directories that do not match are still descended into.  An invalid
    *pattern* returns ``FAILED`` without listing anything; check it first
    with :func:`~dirutil.is_valid_pattern` to tell the two apart.
    """
    if not is_valid_pattern(pattern):
        logger.error("invalid glob pattern: %r", pattern)
        return DirError.FAILED

    def _filter(item: WalkItem) -> VisitorResult:
        if glob_match(pattern, item.relative) is GlobResult.MATCH:
            return visitor(item)
        return None

    return walk(root, _filter, config, reader=reader)
