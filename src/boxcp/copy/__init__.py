"""Copy files and directory trees between a container and the host.

``cp SRC DST`` semantics are decided from the shape of SRC and DST alone:
whether each exists, is a directory, ends in a separator, or is a
symlink.  A source ending in ``/.`` means "the contents of" the
directory.  Symlinks at the destination are always written through to
their target; the link itself is never replaced.
"""

from ._types import (
    CopyOperation,
    CopyPlan,
    CopyReport,
    EntryError,
    EntryMeta,
    FileEntry,
    FileType,
    PathSpec,
    Side,
    StatInfo,
    TreeEntry,
)
from ._classify import classify
from ._resolve import decide, resolve
from ._io import execute_plan
from ._ops import copy, copy_dry_run, plan_copy

__all__ = [
    # Public types
    "CopyOperation", "CopyPlan", "CopyReport", "EntryError", "EntryMeta",
    "FileEntry", "FileType", "PathSpec", "Side", "StatInfo", "TreeEntry",
    # Public functions
    "classify", "resolve", "decide", "execute_plan",
    "plan_copy", "copy", "copy_dry_run",
]
