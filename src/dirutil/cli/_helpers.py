"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging

import click

from .._exclude import ExcludeFilter
from .._types import MAX_PATH, DirError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _check(err: DirError, path: str) -> None:
    """Turn a non-OK outcome into a ClickException (exit status 1)."""
    if err is not DirError.OK:
        raise click.ClickException(f"{path}: {err}")


def _build_exclude(exclude, exclude_from, gitignore) -> ExcludeFilter | None:
    """Build an ExcludeFilter from CLI options, or None if none were given."""
    if not exclude and not exclude_from and not gitignore:
        return None
    return ExcludeFilter(patterns=exclude, exclude_from=exclude_from,
                         gitignore=gitignore)


def _exclude_options(f):
    """Shared --exclude / --exclude-from / --gitignore options."""
    f = click.option("--gitignore", is_flag=True, default=False,
                     help="Honor .gitignore files found during the walk.")(f)
    f = click.option("--exclude-from", "exclude_from", type=click.Path(exists=True),
                     help="Read exclude patterns from file.")(f)
    f = click.option("--exclude", multiple=True,
                     help="Exclude entries matching pattern (gitignore syntax, repeatable).")(f)
    return f


def _max_path_option(f):
    """Shared --max-path option (or DIRUTIL_MAX_PATH)."""
    return click.option(
        "--max-path", "max_path", type=click.IntRange(min=1), default=MAX_PATH,
        envvar="DIRUTIL_MAX_PATH", show_default=True,
        help="Longest path, in bytes, the walk may build (or set DIRUTIL_MAX_PATH).",
    )(f)


def _format_option(f):
    """Shared --format text|json option."""
    return click.option(
        "--format", "fmt", type=click.Choice(["text", "json"]), default="text",
        help="Output format.",
    )(f)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """dirutil: walk directory trees and match glob patterns.

    \b
    Quick start:
      dirutil walk src
      dirutil walk --match '**/*.py' .
      dirutil match '*.{c,h}' main.c util.h
      dirutil mktree build/out/obj
      dirutil rmtree build

    \b
    Patterns for --match and `match` are globs: ? * ** [..] {a,b}.
    Patterns for --exclude use gitignore syntax.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")
