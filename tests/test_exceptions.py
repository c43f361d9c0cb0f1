"""Tests for the error taxonomy."""

import pytest

from boxcp import (
    CannotCopyDirError,
    CopyError,
    CopyIntoSelfError,
    DestinationNotDirectoryError,
    DestinationParentNotExistError,
    DirNotExistsError,
    ErrorKind,
    SourceNotDirectoryError,
    SourceNotExistError,
)
from boxcp.exceptions import error_for


@pytest.mark.parametrize("kind, cls, builtin", [
    (ErrorKind.DIR_NOT_EXISTS, DirNotExistsError, FileNotFoundError),
    (ErrorKind.CANNOT_COPY_DIR, CannotCopyDirError, IsADirectoryError),
    (ErrorKind.SOURCE_NOT_EXIST, SourceNotExistError, FileNotFoundError),
    (ErrorKind.DESTINATION_PARENT_NOT_EXIST, DestinationParentNotExistError, FileNotFoundError),
    (ErrorKind.SOURCE_NOT_DIRECTORY, SourceNotDirectoryError, NotADirectoryError),
    (ErrorKind.DESTINATION_NOT_DIRECTORY, DestinationNotDirectoryError, NotADirectoryError),
    (ErrorKind.COPY_INTO_SELF, CopyIntoSelfError, OSError),
])
def test_error_for(kind, cls, builtin):
    exc = error_for(kind, "/some/path")
    assert type(exc) is cls
    assert isinstance(exc, CopyError)
    assert isinstance(exc, builtin)
    assert exc.kind is kind
    assert exc.path == "/some/path"
    assert "/some/path" in str(exc)


def test_custom_message():
    exc = CannotCopyDirError("/x", "nope")
    assert str(exc) == "nope"


def test_kind_str():
    assert str(ErrorKind.CANNOT_COPY_DIR) == "cannot_copy_dir"
