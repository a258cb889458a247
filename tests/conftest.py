"""Shared fixtures for dirutil tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sample_tree(tmp_path):
    """A small tree for walk tests; returns its root.

    Tree:
        readme.txt, setup.py, .hidden,
        src/main.py, src/util.py, src/.config, src/sub/deep.txt,
        docs/guide.md, docs/api.md,
        .git/HEAD
    """
    root = tmp_path / "tree"
    root.mkdir()
    (root / "readme.txt").write_text("readme")
    (root / "setup.py").write_text("setup")
    (root / ".hidden").write_text("hidden")

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("main")
    (src / "util.py").write_text("util")
    (src / ".config").write_text("cfg")
    sub = src / "sub"
    sub.mkdir()
    (sub / "deep.txt").write_text("deep")

    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("guide")
    (docs / "api.md").write_text("api")

    git = root / ".git"
    git.mkdir()
    (git / "HEAD").write_text("ref: refs/heads/main\n")
    return root


@pytest.fixture
def nested_tree(tmp_path):
    """root/a/b/c with one file at every level; returns the root."""
    root = tmp_path / "root"
    d = root
    for name in ("a", "b", "c"):
        d = d / name
    d.mkdir(parents=True)
    (root / "f0.txt").write_text("0")
    (root / "a" / "f1.txt").write_text("1")
    (root / "a" / "b" / "f2.txt").write_text("2")
    (root / "a" / "b" / "c" / "f3.txt").write_text("3")
    return root
