import os

import pytest

from rustrules.runfiles import Runfiles, find_runfiles_dir


@pytest.fixture
def binary_with_runfiles(tmp_path):
    binary = tmp_path / "bin" / "tool"
    binary.parent.mkdir()
    binary.write_text("binary")
    runfiles = tmp_path / "bin" / "tool.runfiles"
    (runfiles / "ws" / "data").mkdir(parents=True)
    (runfiles / "ws" / "data" / "sample.txt").write_text("Example Text!")
    return binary, runfiles


def test_finds_neighbouring_runfiles_dir(binary_with_runfiles):
    binary, runfiles = binary_with_runfiles
    assert find_runfiles_dir(binary) == runfiles


def test_finds_enclosing_runfiles_dir(tmp_path):
    enclosing = tmp_path / "pkg.runfiles"
    inner = enclosing / "ws" / "nested" / "prog"
    inner.parent.mkdir(parents=True)
    inner.write_text("x")
    assert find_runfiles_dir(inner) == enclosing


def test_follows_absolute_symlink(tmp_path, binary_with_runfiles):
    binary, runfiles = binary_with_runfiles
    link = tmp_path / "link"
    link.symlink_to(binary)
    assert find_runfiles_dir(link) == runfiles


def test_follows_relative_symlink(tmp_path, binary_with_runfiles):
    binary, runfiles = binary_with_runfiles
    link_dir = tmp_path / "links"
    link_dir.mkdir()
    link = link_dir / "tool_link"
    link.symlink_to(os.path.join("..", "bin", "tool"))
    found = find_runfiles_dir(link)
    assert found.resolve() == runfiles.resolve()
    assert found.name == runfiles.name


def test_no_runfiles_dir_raises(tmp_path):
    binary = tmp_path / "lonely"
    binary.write_text("x")
    with pytest.raises(OSError, match="Failed to find .runfiles directory."):
        find_runfiles_dir(binary)


def test_missing_binary_raises(tmp_path):
    with pytest.raises(OSError):
        find_runfiles_dir(tmp_path / "does-not-exist")


def test_can_read_data_from_runfiles(binary_with_runfiles):
    binary, runfiles = binary_with_runfiles
    r = Runfiles.create(binary)
    assert r.runfiles_dir == runfiles
    assert r.rlocation("ws/data/sample.txt").read_text() == "Example Text!"


def test_rlocation_relative_joins(binary_with_runfiles):
    binary, runfiles = binary_with_runfiles
    r = Runfiles.create(binary)
    assert r.rlocation("a/b") == runfiles / "a" / "b"


def test_rlocation_absolute_is_unchanged(tmp_path):
    r = Runfiles(tmp_path / "x.runfiles")
    absolute = tmp_path / "elsewhere" / "file"
    assert r.rlocation(absolute) == absolute
    assert r.rlocation(str(absolute)) == absolute