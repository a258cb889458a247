"""Basic commands: walk, match, mkdir, mktree, rmtree."""

from __future__ import annotations

import json

import click

from .._glob import glob_match, is_valid_pattern
from .._types import GlobResult, ItemType, WalkConfig, WalkItem, WalkOrder
from ..tree import create, mktree as _mktree, rmtree as _rmtree
from ..walk import collect, walk_matching
from ._helpers import (
    main,
    _build_exclude,
    _check,
    _exclude_options,
    _format_option,
    _max_path_option,
    _status,
)

_LABELS = {
    ItemType.FILE: "FILE: ",
    ItemType.DIR: "DIR:  ",
    ItemType.UNHANDLED: "OTHER:",
}


# ---------------------------------------------------------------------------
# walk
# ---------------------------------------------------------------------------

@main.command("walk")
@click.argument("root", required=False, default=".")
@click.option("-d", "--depth-first", is_flag=True,
              help="Visit directories after their contents.")
@click.option("--skip-dot-dirs", is_flag=True, help="Do not enter directories starting with '.'.")
@click.option("--skip-dot-files", is_flag=True, help="Skip files starting with '.'.")
@click.option("--relative", is_flag=True, help="Print paths relative to ROOT.")
@click.option("--match", "match_pattern", default=None,
              help="Only print entries whose relative path matches this glob.")
@_exclude_options
@_max_path_option
@_format_option
@click.pass_context
def walk_cmd(ctx, root, depth_first, skip_dot_dirs, skip_dot_files, relative,
             match_pattern, exclude, exclude_from, gitignore, max_path, fmt):
    """List every entry under ROOT (default: current directory).

    \b
    Examples:
        dirutil walk                          # everything under .
        dirutil walk -d build                 # children before parents
        dirutil walk --match '**/*.py' src    # only Python files
        dirutil walk --exclude '*.o' --gitignore .
    """
    config = WalkConfig(
        order=WalkOrder.DEPTH_FIRST if depth_first else WalkOrder.PRE_ORDER,
        skip_dot_dirs=skip_dot_dirs,
        skip_dot_files=skip_dot_files,
        max_path=max_path,
        exclude=_build_exclude(exclude, exclude_from, gitignore),
    )

    if match_pattern is not None:
        if not is_valid_pattern(match_pattern):
            raise click.ClickException(f"Invalid pattern: {match_pattern}")
        items: list[WalkItem] = []
        err = walk_matching(root, match_pattern, items.append, config)
    else:
        err, items = collect(root, config)
    _check(err, root)

    if fmt == "json":
        click.echo(json.dumps([
            {"path": it.path, "relative": it.relative, "name": it.name, "type": str(it.type)}
            for it in items
        ], indent=2))
    else:
        for it in items:
            click.echo(f"{_LABELS[it.type]} {it.relative if relative else it.path}")
    _status(ctx, f"{len(items)} entries under {root}")


# ---------------------------------------------------------------------------
# match
# ---------------------------------------------------------------------------

@main.command("match")
@click.argument("pattern")
@click.argument("paths", nargs=-1, required=True)
@click.option("-q", "--quiet", is_flag=True, help="Print nothing; only set the exit status.")
@click.pass_context
def match_cmd(ctx, pattern, paths, quiet):
    """Match PATHS against the glob PATTERN without touching the filesystem.

    Exit status is 0 if every path matched, 1 if any did not, and 2 if
    the pattern is invalid.

    \b
    Examples:
        dirutil match '**/*.py' src/a.py docs/b.md
        dirutil match 'img[0-9].{png,jpg}' img3.png
    """
    all_matched = True
    for path in paths:
        res = glob_match(pattern, path)
        if res is GlobResult.INVALID_PATTERN:
            click.echo(f"Error: invalid pattern: {pattern}", err=True)
            ctx.exit(2)
        if res is not GlobResult.MATCH:
            all_matched = False
        if not quiet:
            click.echo(f"{res}\t{path}")
    ctx.exit(0 if all_matched else 1)


# ---------------------------------------------------------------------------
# mkdir / mktree / rmtree
# ---------------------------------------------------------------------------

@main.command("mkdir")
@click.argument("path")
@click.pass_context
def mkdir_cmd(ctx, path):
    """Create directory PATH (its parent must exist)."""
    _check(create(path), path)
    _status(ctx, f"Created {path}")


@main.command("mktree")
@click.argument("path")
@click.pass_context
def mktree_cmd(ctx, path):
    """Create PATH and any missing parent directories."""
    _check(_mktree(path), path)
    _status(ctx, f"Created {path}")


@main.command("rmtree")
@click.argument("path")
@click.pass_context
def rmtree_cmd(ctx, path):
    """Remove PATH and everything below it.

    Not atomic: on failure the tree may be partly removed.
    """
    _check(_rmtree(path), path)
    _status(ctx, f"Removed {path}")
