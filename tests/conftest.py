"""Shared fixtures for boxcp tests."""

import os

import pytest
from click.testing import CliRunner

from boxcp import ContainerFS, LocalFS


def make_test_content(base):
    """Populate *base* with the standard copy test layout.

    Layout:
        file1, file2,
        dir1/file1-1, dir1/file1-2, dir2/file2-1, dir2/file2-2,
        symlinkToFile1 -> file1, symlinkToDir1 -> dir1,
        brokenSymlinkToFileX -> fileX, brokenSymlinkToDirX -> dirX
    """
    base.mkdir(parents=True, exist_ok=True)
    (base / "file1").write_text("file1\n")
    (base / "file2").write_text("file2\n")
    for d in ("dir1", "dir2"):
        (base / d).mkdir()
        n = d[-1]
        (base / d / f"file{n}-1").write_text(f"file{n}-1\n")
        (base / d / f"file{n}-2").write_text(f"file{n}-2\n")
    os.symlink("file1", base / "symlinkToFile1")
    os.symlink("dir1", base / "symlinkToDir1")
    os.symlink("fileX", base / "brokenSymlinkToFileX")
    os.symlink("dirX", base / "brokenSymlinkToDirX")
    return base


@pytest.fixture
def host_dir(tmp_path):
    """Host directory with the standard test content."""
    return make_test_content(tmp_path / "host")


@pytest.fixture
def empty_host_dir(tmp_path):
    d = tmp_path / "out"
    d.mkdir()
    return d


@pytest.fixture
def rootfs(tmp_path):
    """Container rootfs with the test content at / and under /root."""
    root = tmp_path / "rootfs"
    make_test_content(root)
    make_test_content(root / "root")
    return root


@pytest.fixture
def container(rootfs):
    return ContainerFS(rootfs)


@pytest.fixture
def local():
    return LocalFS()


@pytest.fixture
def runner():
    return CliRunner()
