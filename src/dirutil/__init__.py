from ._types import (
    MAX_PATH, DirError, GlobResult, ItemType, WalkConfig, WalkItem, WalkOrder,
)
from ._glob import glob_match, is_valid_pattern
from ._reader import DirectoryReader, ScandirReader
from ._exclude import ExcludeFilter
from .walk import walk, collect, walk_matching
from .tree import create, mktree, rmtree

__all__ = [
    "MAX_PATH", "DirError", "GlobResult", "ItemType", "WalkConfig", "WalkItem", "WalkOrder",
    "glob_match", "is_valid_pattern",
    "DirectoryReader", "ScandirReader",
    "ExcludeFilter",
    "walk", "collect", "walk_matching",
    "create", "mktree", "rmtree",
]
