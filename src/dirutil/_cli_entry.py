"""Console-script target for ``dirutil``.

The library itself only needs dulwich; click comes with the ``cli`` extra,
so the command group is imported lazily here.
"""

import sys

_NEED_CLI_EXTRA = (
    "dirutil: the command line tool is not installed (click is missing).\n"
    "Add it with:  pip install 'dirutil[cli]'"
)


def main():
    try:
        from .cli import main as group
    except ImportError:
        sys.exit(_NEED_CLI_EXTRA)
    group(prog_name="dirutil")
