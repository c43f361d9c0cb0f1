"""Data structures for copy planning and execution."""

from __future__ import annotations

import stat
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Callable

from ..exceptions import ErrorKind, error_for


class Side(str, Enum):
    """Which argument of ``cp SRC DST`` a path was given as."""
    SOURCE = "source"
    DESTINATION = "destination"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True, slots=True)
class PathSpec:
    """A classified path string.

    Attributes:
        path: Lexically normalized path (no trailing separator).
        trailing_separator: The raw path ended in a separator, so it must
            name (or become) a directory.
        contents_only: The raw path ended in a ``.`` segment: copy the
            directory's children, not the directory itself.  Never set
            on a destination.
    """
    path: str
    trailing_separator: bool = False
    contents_only: bool = False


@dataclass(frozen=True, slots=True)
class StatInfo:
    """Result of inspecting a path on its owning filesystem.

    For a symlink, *exists* and *is_dir* describe the link itself;
    *resolved_target* is the spec of the final target (the literal path
    for a broken link) and *target* is that target's stat.

    Attributes:
        exists: The path exists (a broken symlink exists).
        is_dir: The path is a directory.  Meaningless when not *exists*.
        is_symlink: The path is a symbolic link.
        resolved_target: Spec of the final link target, or ``None``.
        target: Stat of the final link target, or ``None``.
    """
    exists: bool
    is_dir: bool = False
    is_symlink: bool = False
    resolved_target: PathSpec | None = None
    target: StatInfo | None = None


MISSING = StatInfo(exists=False)


class CopyOperation(str, Enum):
    """Operation chosen by the resolver."""
    CREATE_FILE = "create_file"
    OVERWRITE_FILE = "overwrite_file"
    COPY_INTO_DIR = "copy_into_dir"
    CREATE_DIR_RECURSIVE = "create_dir_recursive"
    OVERWRITE_DIR_RECURSIVE = "overwrite_dir_recursive"
    COPY_CONTENTS_INTO_DIR = "copy_contents_into_dir"
    CREATE_DIR_FROM_CONTENTS = "create_dir_from_contents"
    ERROR = "error"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @property
    def copies_tree(self) -> bool:
        """``True`` if the operation copies a directory tree."""
        return self in _TREE_OPERATIONS


_TREE_OPERATIONS = frozenset({
    CopyOperation.CREATE_DIR_RECURSIVE,
    CopyOperation.OVERWRITE_DIR_RECURSIVE,
    CopyOperation.COPY_CONTENTS_INTO_DIR,
    CopyOperation.CREATE_DIR_FROM_CONTENTS,
})


@dataclass(frozen=True, slots=True)
class CopyPlan:
    """What to copy and where.

    Attributes:
        operation: :class:`CopyOperation` to perform.
        source: Path to read from on the source filesystem.
        destination: Path to write to, after symlink redirection.
        error_kind: Set only when *operation* is ``ERROR``.
        source_is_dir: The source is read as a directory tree.
        source_is_link: The source is a symlink copied as a link.
    """
    operation: CopyOperation
    source: str
    destination: str
    error_kind: ErrorKind | None = None
    source_is_dir: bool = False
    source_is_link: bool = False

    @property
    def is_error(self) -> bool:
        """True when the plan is an ``ERROR`` plan."""
        return self.operation is CopyOperation.ERROR

    def raise_for_error(self) -> None:
        """Raise the typed exception for an ``ERROR`` plan; no-op otherwise."""
        if self.error_kind is not None:
            raise error_for(self.error_kind, self.destination)


class FileType(str, Enum):
    """Type of a tree entry: ``FILE``, ``LINK`` or ``DIR``."""
    FILE = "file"
    LINK = "link"
    DIR = "dir"

    def __str__(self) -> str:          # noqa: D105
        return self.value

    @classmethod
    def from_mode(cls, mode: int) -> FileType:
        """Convert an ``st_mode`` value to a :class:`FileType`."""
        if stat.S_ISLNK(mode):
            return cls.LINK
        if stat.S_ISDIR(mode):
            return cls.DIR
        return cls.FILE


@dataclass(frozen=True, slots=True)
class EntryMeta:
    """Metadata carried alongside an entry's bytes.

    Attributes:
        file_type: :class:`FileType` of the entry.
        mode: Permission bits (``st_mode & 0o7777``).
        size: Size in bytes (0 for directories).
        mtime: Modification time as POSIX epoch seconds.
        link_target: Literal link target for ``LINK`` entries.
    """
    file_type: FileType
    mode: int = 0o644
    size: int = 0
    mtime: float | None = None
    link_target: str | None = None


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """One entry produced by ``read_tree``.

    *rel_path* is relative to the tree root (``""`` for the root itself
    when the root is not a directory).  *open* returns a binary stream
    for ``FILE`` entries and is ``None`` otherwise.
    """
    rel_path: str
    meta: EntryMeta
    open: Callable[[], BinaryIO] | None = None


@dataclass
class FileEntry:
    """A written (or to-be-written) path, used in :class:`CopyReport` lists.

    Attributes:
        path: Destination path.
        type: :class:`FileType` of the entry.
        src: Source path it came from.
    """
    path: str
    type: FileType
    src: str | None = None


@dataclass
class EntryError:
    """A path that failed during execution.

    Attributes:
        path: The path that caused the error.
        error: Human-readable error message.
    """
    path: str
    error: str


@dataclass
class CopyReport:
    """Result of a copy (real or dry-run).

    Attributes:
        plan: The :class:`CopyPlan` that was executed.
        add: Entries that did not exist at the destination.
        update: Entries that replaced an existing destination path.
        errors: Per-entry errors (populated when ``ignore_errors=True``).
    """
    plan: CopyPlan
    add: list[FileEntry] = field(default_factory=list)
    update: list[FileEntry] = field(default_factory=list)
    errors: list[EntryError] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Total number of add + update entries."""
        return len(self.add) + len(self.update)

    @property
    def ok(self) -> bool:
        """True when no entry failed."""
        return not self.errors
