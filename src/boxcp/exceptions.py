"""Exceptions for boxcp."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Kind of copy failure.

    ``DIR_NOT_EXISTS`` and ``CANNOT_COPY_DIR`` come out of plan
    resolution, and ``COPY_INTO_SELF`` is checked right after it.  The
    others are preconditions checked before it.
    """
    DIR_NOT_EXISTS = "dir_not_exists"
    CANNOT_COPY_DIR = "cannot_copy_dir"
    SOURCE_NOT_EXIST = "source_not_exist"
    DESTINATION_PARENT_NOT_EXIST = "destination_parent_not_exist"
    SOURCE_NOT_DIRECTORY = "source_not_directory"
    DESTINATION_NOT_DIRECTORY = "destination_not_directory"
    COPY_INTO_SELF = "copy_into_self"

    def __str__(self) -> str:          # noqa: D105
        return self.value


class CopyError(Exception):
    """Base class for copy failures.

    Attributes:
        kind: :class:`ErrorKind` of the failure.
        path: The path the failure refers to.
    """
    kind: ErrorKind
    default_message = "copy failed"

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"{self.default_message}: {path}")


class DirNotExistsError(CopyError, FileNotFoundError):
    """Raised when a trailing-separator destination is not an existing directory."""
    kind = ErrorKind.DIR_NOT_EXISTS
    default_message = "destination directory does not exist"


class CannotCopyDirError(CopyError, IsADirectoryError):
    """Raised when a directory source would overwrite a file destination."""
    kind = ErrorKind.CANNOT_COPY_DIR
    default_message = "cannot copy a directory into a file path"


class SourceNotExistError(CopyError, FileNotFoundError):
    kind = ErrorKind.SOURCE_NOT_EXIST
    default_message = "source does not exist"


class DestinationParentNotExistError(CopyError, FileNotFoundError):
    kind = ErrorKind.DESTINATION_PARENT_NOT_EXIST
    default_message = "destination parent directory does not exist"


class SourceNotDirectoryError(CopyError, NotADirectoryError):
    """Raised when a source ending in a separator is not a directory."""
    kind = ErrorKind.SOURCE_NOT_DIRECTORY
    default_message = "source is not a directory"


class DestinationNotDirectoryError(CopyError, NotADirectoryError):
    """Raised when a destination ending in a separator is an existing non-directory."""
    kind = ErrorKind.DESTINATION_NOT_DIRECTORY
    default_message = "destination is not a directory"


class CopyIntoSelfError(CopyError, OSError):
    kind = ErrorKind.COPY_INTO_SELF
    default_message = "cannot copy a path onto itself or into its own subtree"


_ERRORS_BY_KIND: dict[ErrorKind, type[CopyError]] = {
    cls.kind: cls
    for cls in (
        DirNotExistsError,
        CannotCopyDirError,
        SourceNotExistError,
        DestinationParentNotExistError,
        SourceNotDirectoryError,
        DestinationNotDirectoryError,
        CopyIntoSelfError,
    )
}


def error_for(kind: ErrorKind, path: str) -> CopyError:
    """Return the exception instance matching *kind* for *path*."""
    return _ERRORS_BY_KIND[kind](path)
