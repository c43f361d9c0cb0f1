from . import _logging  # noqa: F401  (default structlog config)

from .exceptions import (
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
from .fs import ContainerFS, LocalFS
from .copy import classify, resolve, plan_copy, execute_plan
from .copy import CopyOperation, CopyPlan, CopyReport, FileEntry, FileType, PathSpec, Side, StatInfo

__all__ = [
    "LocalFS", "ContainerFS",
    "classify", "resolve", "plan_copy", "execute_plan",
    "CopyOperation", "CopyPlan", "CopyReport", "FileEntry", "FileType",
    "PathSpec", "Side", "StatInfo",
    "ErrorKind", "CopyError", "DirNotExistsError", "CannotCopyDirError",
    "SourceNotExistError", "DestinationParentNotExistError", "SourceNotDirectoryError",
    "DestinationNotDirectoryError", "CopyIntoSelfError",
]
