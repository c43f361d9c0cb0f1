"""Tests for path classification."""

import pytest

from boxcp import PathSpec, Side, classify


class TestTrailingSeparator:
    @pytest.mark.parametrize("raw, expected", [
        ("file1", False),
        ("dir1/", True),
        ("dir1/.", True),
        ("dir1/./", True),
        ("/abs/dir//", True),
        (".", True),
        ("./", True),
        ("/", True),
    ])
    def test_trailing_separator(self, raw, expected):
        assert classify(raw, Side.SOURCE).trailing_separator is expected
        assert classify(raw, Side.DESTINATION).trailing_separator is expected


class TestContentsOnly:
    def test_dot_suffix_on_source(self):
        spec = classify("dir1/.", Side.SOURCE)
        assert spec == PathSpec("dir1", trailing_separator=True, contents_only=True)

    def test_dot_suffix_with_trailing_slash(self):
        assert classify("/a/dir1/./", Side.SOURCE).contents_only

    def test_bare_dot(self):
        spec = classify(".", Side.SOURCE)
        assert spec.contents_only
        assert spec.path == "."

    def test_trailing_slash_alone_is_not_contents(self):
        spec = classify("dir1/", Side.SOURCE)
        assert spec.trailing_separator
        assert not spec.contents_only

    def test_root_is_contents(self):
        assert classify("/", Side.SOURCE).contents_only

    def test_never_on_destination(self):
        spec = classify("dir2/.", Side.DESTINATION)
        assert spec == PathSpec("dir2", trailing_separator=True, contents_only=False)

    def test_dot_inside_name_is_not_marker(self):
        spec = classify("dir1/.hidden", Side.SOURCE)
        assert not spec.contents_only
        assert not spec.trailing_separator


class TestNormalize:
    @pytest.mark.parametrize("raw, expected", [
        ("a//b/", "a/b"),
        ("a/./b", "a/b"),
        ("a/b/../c", "a/c"),
        ("//abs/x", "/abs/x"),
        ("", "."),
    ])
    def test_path(self, raw, expected):
        assert classify(raw, Side.DESTINATION).path == expected

    def test_pathlike(self, tmp_path):
        spec = classify(tmp_path / "x", Side.SOURCE)
        assert spec.path == str(tmp_path / "x")
