"""Glob matching of path strings, with ``**`` path-segment wildcards.

Rules:

``?``
    one character except ``/``.
``*``
    any run of characters (including none) except ``/``.
``**``
    zero or more whole path segments; must be followed by ``/``.
``[...]``
    one character except ``/`` from the set, ``x-y`` ranges allowed,
    ``[!...]`` negates.
``{a,b}``
    any of the comma-separated literals.  Alternatives cannot contain
    other wildcards.

Nothing here touches the filesystem.
"""

from __future__ import annotations

from ._types import GlobResult

_SPECIAL = "*?[{"


def _parse_class(pattern: str, pos: int) -> tuple[str, bool, int] | None:
    """Split the ``[...]`` at ``pattern[pos]`` into (members, negate, end).

    ``end`` is the index of the closing ``]``.  ``None`` if the class is
    unterminated or has no members.
    """
    end = pattern.find("]", pos + 1)
    if end < 0:
        return None
    body = pattern[pos + 1:end]
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    if not body:
        return None
    return body, negate, end


def _parse_group(pattern: str, pos: int) -> tuple[str, int] | None:
    """Body and closing index of the ``{...}`` at ``pattern[pos]``, or ``None``."""
    end = pattern.find("}", pos + 1)
    if end <= pos + 1:
        return None
    return pattern[pos + 1:end], end


def _match_class(pattern: str, pos: int, ch: str) -> tuple[GlobResult, int]:
    """Match *ch* against the ``[...]`` class starting at ``pattern[pos]``.

    Returns the result and the pattern index just past the closing ``]``.
    """
    parsed = _parse_class(pattern, pos)
    if parsed is None:
        return GlobResult.INVALID_PATTERN, pos
    body, negate, end = parsed

    if ch == "/":
        return GlobResult.NO_MATCH, end + 1

    found = False
    i = 0
    while i < len(body):
        if i + 2 < len(body) and body[i + 1] == "-":
            if body[i] <= ch <= body[i + 2]:
                found = True
                break
            i += 3
        else:
            if body[i] == ch:
                found = True
                break
            i += 1

    if found != negate:
        return GlobResult.MATCH, end + 1
    return GlobResult.NO_MATCH, end + 1


def _match_group(pattern: str, pos: int, path: str, ppos: int) -> GlobResult:
    """Match the ``{a,b}`` group at ``pattern[pos]`` and the rest of the pattern."""
    parsed = _parse_group(pattern, pos)
    if parsed is None:
        return GlobResult.INVALID_PATTERN
    body, end = parsed
    for alt in body.split(","):
        if path.startswith(alt, ppos):
            res = _match_from(pattern, end + 1, path, ppos + len(alt))
            if res is not GlobResult.NO_MATCH:
                return res
    return GlobResult.NO_MATCH


def _match_doublestar(pattern: str, pos: int, path: str, ppos: int) -> GlobResult:
    """Try ``pattern[pos:]`` against every segment-aligned suffix of ``path[ppos:]``."""
    start = ppos
    while True:
        res = _match_from(pattern, pos, path, start)
        if res is not GlobResult.NO_MATCH:
            return res
        sep = path.find("/", start)
        if sep < 0:
            return GlobResult.NO_MATCH
        start = sep + 1


def _match_star(pattern: str, pos: int, path: str, ppos: int) -> GlobResult:
    """Match a single ``*`` at ``pattern[pos]`` against ``path[ppos:]``."""
    if pos + 1 == len(pattern):
        # a trailing star never reaches into the next segment
        if "/" in path[ppos:]:
            return GlobResult.NO_MATCH
        return GlobResult.MATCH

    nxt = pattern[pos + 1]
    seg_end = path.find("/", ppos)
    if seg_end < 0:
        seg_end = len(path)

    # Scan forward; every position where the rest of the pattern could
    # start is tried in turn.  The separator closing the segment is the
    # last candidate.
    for i in range(ppos, seg_end + 1):
        if i == len(path):
            if nxt not in _SPECIAL:
                return GlobResult.NO_MATCH
        elif nxt not in _SPECIAL and path[i] != nxt:
            continue
        res = _match_from(pattern, pos + 1, path, i)
        if res is not GlobResult.NO_MATCH:
            return res
    return GlobResult.NO_MATCH


def _match_from(pattern: str, pos: int, path: str, ppos: int) -> GlobResult:
    plen = len(pattern)
    slen = len(path)

    while pos < plen:
        c = pattern[pos]

        if c == "*":
            if pattern.startswith("**", pos):
                if not pattern.startswith("/", pos + 2):
                    return GlobResult.INVALID_PATTERN
                return _match_doublestar(pattern, pos + 3, path, ppos)
            return _match_star(pattern, pos, path, ppos)

        if c == "{":
            return _match_group(pattern, pos, path, ppos)

        if c == "[":
            if ppos == slen:
                # still report a malformed class
                if _parse_class(pattern, pos) is None:
                    return GlobResult.INVALID_PATTERN
                return GlobResult.NO_MATCH
            res, pos = _match_class(pattern, pos, path[ppos])
            if res is not GlobResult.MATCH:
                return res
            ppos += 1
            continue

        if ppos == slen:
            return GlobResult.NO_MATCH

        if c == "?":
            if path[ppos] == "/":
                return GlobResult.NO_MATCH
        elif c != path[ppos]:
            return GlobResult.NO_MATCH
        pos += 1
        ppos += 1

    return GlobResult.MATCH if ppos == slen else GlobResult.NO_MATCH


def glob_match(pattern: str, path: str) -> GlobResult:
    """Match *path* against the glob *pattern*.

    Returns :attr:`GlobResult.MATCH`, :attr:`GlobResult.NO_MATCH`, or
    :attr:`GlobResult.INVALID_PATTERN`.  Malformed syntax is reported as
    soon as the scan reaches it, so a ``NO_MATCH`` does not mean the whole
    pattern was validated.
    """
    return _match_from(pattern, 0, path, 0)


def is_valid_pattern(pattern: str) -> bool:
    """Check the whole of *pattern* for the errors :func:`glob_match` reports.

    Unlike :func:`glob_match`, which stops at the first mismatch, this
    looks at every token, so it can vet a pattern before it is used.
    """
    pos = 0
    while pos < len(pattern):
        c = pattern[pos]
        if c == "[":
            parsed = _parse_class(pattern, pos)
            if parsed is None:
                return False
            pos = parsed[2] + 1
        elif c == "{":
            parsed = _parse_group(pattern, pos)
            if parsed is None:
                return False
            pos = parsed[1] + 1
        elif pattern.startswith("**", pos):
            if not pattern.startswith("/", pos + 2):
                return False
            pos += 3
        else:
            pos += 1
    return True
