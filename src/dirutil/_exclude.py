"""Gitignore-style pruning for :func:`~dirutil.walk`.

An :class:`ExcludeFilter` set as ``WalkConfig.exclude`` is asked about
each entry before the visitor sees it; an excluded directory is not
listed at all.  Rules come from two places:

* base patterns, given directly or read from a file, which apply to
  every path relative to the walk root;
* ``.gitignore`` files (``gitignore=True``), picked up from each
  directory as the walk enters it and applied below that directory.

Rule evaluation (negation, anchoring, trailing ``/``) is dulwich's
``IgnoreFilter``.  This syntax is separate from :func:`~dirutil.glob_match`.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Iterable, Sequence

from dulwich.ignore import IgnoreFilter


def _pattern_lines(
    patterns: Iterable[str], exclude_from: str | os.PathLike[str] | None,
) -> list[bytes]:
    lines = [p.encode("utf-8") for p in patterns]
    if exclude_from is not None:
        for raw in Path(exclude_from).read_bytes().splitlines():
            line = raw.strip()
            if line and not line.startswith(b"#"):
                lines.append(line)
    return lines


class ExcludeFilter:
    """Decides which walk entries to prune.

    The walker never mutates the filter it is configured with: it calls
    :meth:`for_walk` and feeds directories to the copy, so one filter can
    be shared by any number of walks and roots.
    """

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | os.PathLike[str] | None = None,
        gitignore: bool = False,
    ) -> None:
        lines = _pattern_lines(patterns or (), exclude_from)
        self._base = IgnoreFilter(lines) if lines else None
        self._gitignore = gitignore
        # root-relative dir -> rules of its .gitignore (None: no file)
        self._dir_rules: dict[str, IgnoreFilter | None] = {}

    @property
    def active(self) -> bool:
        return self._base is not None or self._gitignore

    def for_walk(self) -> ExcludeFilter:
        """Return a copy with the same base patterns and no ``.gitignore`` loaded."""
        fresh = copy.copy(self)
        fresh._dir_rules = {}
        return fresh

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """True if the base patterns exclude *rel_path*; ``.gitignore`` files are not consulted."""
        if self._base is None:
            return False
        return self._base.is_ignored(rel_path + "/" if is_dir else rel_path) is True

    def enter_directory(self, abs_dir: str | os.PathLike[str], rel_dir: str) -> None:
        """Read ``abs_dir/.gitignore``, if any, as the rules for *rel_dir*.

        Raises ``OSError`` if the file exists but cannot be read.
        """
        if not self._gitignore or rel_dir in self._dir_rules:
            return
        gi = Path(abs_dir) / ".gitignore"
        self._dir_rules[rel_dir] = (
            IgnoreFilter.from_path(str(gi)) if gi.is_file() else None
        )

    def is_excluded_in_walk(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Apply base patterns, then the ``.gitignore`` rules of every entered ancestor.

        ``.gitignore`` files themselves are pruned in gitignore mode.
        """
        if self.is_excluded(rel_path, is_dir=is_dir):
            return True
        if not self._gitignore:
            return False

        parts = rel_path.split("/")
        if not is_dir and parts[-1] == ".gitignore":
            return True

        # Deepest directory first; the first file with an opinion decides,
        # so a negation below overrides an exclusion above.
        for depth in range(len(parts) - 1, -1, -1):
            rules = self._dir_rules.get("/".join(parts[:depth]))
            if rules is None:
                continue
            sub = "/".join(parts[depth:])
            verdict = rules.is_ignored(sub + "/" if is_dir else sub)
            if verdict is not None:
                return verdict
        return False
