"""Directory creation and removal built on :func:`~dirutil.walk`."""

from __future__ import annotations

import logging
import os

from ._types import DirError, ItemType, WalkConfig, WalkItem, WalkOrder
from .walk import walk

logger = logging.getLogger(__name__)


def create(path: str | os.PathLike[str]) -> DirError:
    """Create a single directory.

    An already existing directory is not an error.  Returns
    ``PATH_IS_FILE`` if something other than a directory is in the way
    and ``PATH_DO_NOT_EXIST`` if the parent is missing.
    """
    path = os.fspath(path)
    try:
        os.mkdir(path, 0o777)
    except FileExistsError:
        if os.path.isdir(path):
            return DirError.OK
        return DirError.PATH_IS_FILE
    except FileNotFoundError:
        return DirError.PATH_DO_NOT_EXIST
    except NotADirectoryError:
        return DirError.PATH_IS_FILE
    except OSError as exc:
        logger.debug("mkdir %s failed: %s", path, exc)
        return DirError.FAILED
    logger.debug("created %s", path)
    return DirError.OK


def mktree(path: str | os.PathLike[str]) -> DirError:
    """Create every missing directory along *path*, one segment at a time."""
    path = os.fspath(path)
    if os.sep != "/":
        path = path.replace(os.sep, "/")
    drive, rest = os.path.splitdrive(path)
    prefix = drive + "/" if rest.startswith("/") else drive
    segments = [seg for seg in rest.split("/") if seg]
    for i in range(len(segments)):
        err = create(prefix + "/".join(segments[:i + 1]))
        if err is not DirError.OK:
            return err
    return DirError.OK


def rmtree(path: str | os.PathLike[str]) -> DirError:
    """Remove *path* and everything below it.

    Children are deleted before their parent (depth-first walk).  A
    deletion failure does not stop the walk, but it is reported as
    ``FAILED`` and *path* itself is then left in place.

    If *path* is a symlink, the link itself is removed and its target is
    left alone.

    This is not atomic: after a failure the tree may be partly removed.
    """
    path = os.fspath(path)
    link = path.rstrip("/" + os.sep) or path
    if os.path.islink(link):
        try:
            os.unlink(link)
        except OSError as exc:
            logger.warning("failed to remove %s: %s", link, exc)
            return DirError.FAILED
        logger.debug("removed symlink %s", link)
        return DirError.OK

    failed = False

    def _remove(item: WalkItem) -> None:
        nonlocal failed
        try:
            if item.type is ItemType.DIR:
                os.rmdir(item.path)
            else:
                os.unlink(item.path)
        except OSError as exc:
            logger.warning("failed to remove %s: %s", item.path, exc)
            failed = True

    err = walk(path, _remove, WalkConfig(order=WalkOrder.DEPTH_FIRST))
    if err is not DirError.OK:
        return err
    if failed:
        return DirError.FAILED
    try:
        os.rmdir(path)
    except OSError as exc:
        logger.warning("failed to remove %s: %s", os.fspath(path), exc)
        return DirError.FAILED
    return DirError.OK
