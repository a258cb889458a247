"""Value types shared by the walker, the glob matcher, and tree operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from ._exclude import ExcludeFilter


MAX_PATH = 4096


class DirError(str, Enum):
    """Outcome of a walk or tree operation.

    Members: ``OK``, ``FAILED``, ``PATH_TOO_DEEP``, ``PATH_IS_FILE``,
    ``PATH_DO_NOT_EXIST``.
    """
    OK = "ok"
    FAILED = "failed"
    PATH_TOO_DEEP = "path too deep"
    PATH_IS_FILE = "path is file"
    PATH_DO_NOT_EXIST = "path does not exist"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class ItemType(str, Enum):
    """Kind of a walked entry: ``FILE``, ``DIR``, or ``UNHANDLED``.

    ``UNHANDLED`` covers symlinks, devices, fifos and sockets.  Such
    entries are reported but never descended into.
    """
    FILE = "file"
    DIR = "dir"
    UNHANDLED = "unhandled"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class GlobResult(str, Enum):
    """Result of :func:`~dirutil.glob_match`."""
    MATCH = "match"
    NO_MATCH = "no match"
    INVALID_PATTERN = "invalid pattern"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class WalkOrder(str, Enum):
    """When a directory is visited relative to its children.

    ``PRE_ORDER`` visits the directory and then recurses into it;
    ``DEPTH_FIRST`` recurses first (post-order), so children are seen
    before their parent.
    """
    PRE_ORDER = "pre-order"
    DEPTH_FIRST = "depth-first"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class WalkItem(NamedTuple):
    """An entry passed to the visitor of :func:`~dirutil.walk`.

    Attributes:
        path: Root joined with *relative*, always ``/``-separated.
        relative: Path relative to the walk root, no leading separator.
        name: Final path segment.
        type: :class:`ItemType` of the entry.
    """

    path: str
    relative: str
    name: str
    type: ItemType

    @property
    def is_dir(self) -> bool:
        return self.type is ItemType.DIR


@dataclass(frozen=True)
class WalkConfig:
    """Options for one walk.

    Attributes:
        order: :class:`WalkOrder` for directory visits.
        skip_dot_dirs: Skip (and do not descend into) ``.``-prefixed dirs.
        skip_dot_files: Skip ``.``-prefixed files.
        max_path: Upper bound, in encoded bytes, of any constructed path.
        exclude: Optional :class:`~dirutil._exclude.ExcludeFilter` applied
            to every entry before recursion.
    """
    order: WalkOrder = WalkOrder.PRE_ORDER
    skip_dot_dirs: bool = False
    skip_dot_files: bool = False
    max_path: int = MAX_PATH
    exclude: ExcludeFilter | None = None

    @property
    def depth_first(self) -> bool:
        return self.order is WalkOrder.DEPTH_FIRST
