"""Tests for create(), mktree() and rmtree()."""

import os

import pytest

from dirutil import DirError, create, mktree, rmtree


@pytest.fixture
def local(tmp_path, monkeypatch):
    """Work inside tmp_path with an existing ``local`` directory."""
    monkeypatch.chdir(tmp_path)
    os.mkdir("local")
    return tmp_path


def _fill(base):
    for d in ("local/apa", "local/apa/bepa", "local/apa/bepa/cepa"):
        with open(os.path.join(base, d, "file.txt"), "wb") as f:
            f.write(b"abc\0")


class TestCreate:
    def test_create(self, tmp_path):
        assert create(tmp_path / "new") is DirError.OK
        assert (tmp_path / "new").is_dir()

    def test_existing_dir_ok(self, tmp_path):
        assert create(tmp_path) is DirError.OK

    def test_existing_file(self, tmp_path):
        (tmp_path / "f").write_text("x")
        assert create(tmp_path / "f") is DirError.PATH_IS_FILE

    def test_missing_parent(self, tmp_path):
        assert create(tmp_path / "a" / "b") is DirError.PATH_DO_NOT_EXIST


class TestMktree:
    def test_creates_all_levels(self, local):
        assert mktree("local/apa/bepa/cepa") is DirError.OK
        for p in ("local", "local/apa", "local/apa/bepa", "local/apa/bepa/cepa"):
            assert os.path.isdir(p)

    def test_existing_is_ok(self, local):
        assert mktree("local/apa") is DirError.OK
        assert mktree("local/apa") is DirError.OK

    def test_absolute_and_trailing_slash(self, tmp_path):
        target = str(tmp_path).replace(os.sep, "/") + "/x/y/"
        assert mktree(target) is DirError.OK
        assert (tmp_path / "x" / "y").is_dir()

    def test_doubled_separators(self, local):
        assert mktree("local//apa///bepa") is DirError.OK
        assert os.path.isdir("local/apa/bepa")

    def test_file_in_the_way(self, local):
        with open("local/apa", "w") as f:
            f.write("x")
        assert mktree("local/apa/bepa") is DirError.PATH_IS_FILE


class TestRmtree:
    def test_create_remove_tree(self, local):
        assert not os.path.exists("local/apa")
        assert mktree("local/apa/bepa/cepa") is DirError.OK
        assert rmtree("local/apa") is DirError.OK
        assert os.path.exists("local")
        assert not os.path.exists("local/apa")

    def test_create_remove_tree_slash(self, local):
        assert mktree("local/apa/bepa/cepa") is DirError.OK
        assert rmtree("local/apa/") is DirError.OK
        assert os.path.exists("local")
        assert not os.path.exists("local/apa")

    def test_create_remove_tree_with_files(self, local):
        assert mktree("local/apa/bepa/cepa") is DirError.OK
        _fill(local)
        assert rmtree("local/apa") is DirError.OK
        assert os.path.exists("local")
        assert not os.path.exists("local/apa")

    def test_missing(self, local):
        assert rmtree("local/nope") is DirError.PATH_DO_NOT_EXIST

    def test_removes_dot_entries(self, local):
        mktree("local/apa/.cache")
        with open("local/apa/.cache/.lock", "w") as f:
            f.write("x")
        assert rmtree("local/apa") is DirError.OK
        assert not os.path.exists("local/apa")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
    def test_symlink_removed_not_followed(self, local):
        mktree("local/keep")
        with open("local/keep/data.txt", "w") as f:
            f.write("x")
        mktree("local/apa")
        try:
            os.symlink(os.path.abspath("local/keep"), "local/apa/link")
        except OSError:
            pytest.skip("cannot create symlinks")
        assert rmtree("local/apa") is DirError.OK
        assert not os.path.lexists("local/apa")
        assert os.path.exists("local/keep/data.txt")

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
    @pytest.mark.parametrize("suffix", ["", "/"])
    def test_symlinked_root_is_unlinked(self, local, suffix):
        mktree("local/target")
        with open("local/target/precious.txt", "w") as f:
            f.write("x")
        try:
            os.symlink(os.path.abspath("local/target"), "local/link")
        except OSError:
            pytest.skip("cannot create symlinks")
        assert rmtree("local/link" + suffix) is DirError.OK
        assert not os.path.lexists("local/link")
        assert os.path.exists("local/target/precious.txt")

    def test_deletion_failure_reported(self, local, monkeypatch, caplog):
        mktree("local/apa/bepa")
        _fill_one = os.path.join("local", "apa", "bepa", "file.txt")
        with open(_fill_one, "w") as f:
            f.write("x")

        real_unlink = os.unlink

        def failing_unlink(path, *args, **kwargs):
            if str(path).endswith("file.txt"):
                raise PermissionError(path)
            return real_unlink(path, *args, **kwargs)

        monkeypatch.setattr(os, "unlink", failing_unlink)
        with caplog.at_level("WARNING", logger="dirutil.tree"):
            assert rmtree("local/apa") is DirError.FAILED
        assert "failed to remove" in caplog.text
        # not atomic: the root of the removal is left in place
        assert os.path.isdir("local/apa")
