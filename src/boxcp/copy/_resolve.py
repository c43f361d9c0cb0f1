"""Resolve classified and stat-ed paths into a :class:`CopyPlan`.

Resolution is a pure function of its inputs: all stat-ing and symlink
following happens before :func:`resolve` is called, so it is safe to
call from any thread.
"""

from __future__ import annotations

from dataclasses import replace

from ..exceptions import ErrorKind
from ._classify import basename, join
from ._types import MISSING, CopyOperation, CopyPlan, PathSpec, StatInfo


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------

# Key: (src_is_dir, contents_only, dst_exists, dst_is_dir, dst_trailing_sep).
# None marks a column that does not matter for the row; _table_key()
# collapses the same columns so every combination lands on exactly one row.
# Value: (operation, error kind, destination gets basename(SRC) appended).
_Key = tuple[bool, "bool | None", bool, "bool | None", "bool | None"]
_Row = tuple[CopyOperation, "ErrorKind | None", bool]

_DECISION_TABLE: dict[_Key, _Row] = {
    # source is a file
    (False, None, False, None, False): (CopyOperation.CREATE_FILE, None, False),
    (False, None, False, None, True): (CopyOperation.ERROR, ErrorKind.DIR_NOT_EXISTS, False),
    (False, None, True, False, None): (CopyOperation.OVERWRITE_FILE, None, False),
    (False, None, True, True, None): (CopyOperation.COPY_INTO_DIR, None, True),
    # source is a directory
    (True, False, False, None, None): (CopyOperation.CREATE_DIR_RECURSIVE, None, False),
    (True, False, True, False, None): (CopyOperation.ERROR, ErrorKind.CANNOT_COPY_DIR, False),
    (True, False, True, True, None): (CopyOperation.OVERWRITE_DIR_RECURSIVE, None, True),
    # source is a directory's contents
    (True, True, False, None, None): (CopyOperation.CREATE_DIR_FROM_CONTENTS, None, False),
    (True, True, True, False, None): (CopyOperation.ERROR, ErrorKind.CANNOT_COPY_DIR, False),
    (True, True, True, True, None): (CopyOperation.COPY_CONTENTS_INTO_DIR, None, False),
}


def _table_key(src_is_dir: bool, contents_only: bool, dst_exists: bool,
               dst_is_dir: bool, dst_trailing: bool) -> _Key:
    """Collapse the columns a row does not look at to ``None``."""
    contents = contents_only if src_is_dir else None
    is_dir = dst_is_dir if dst_exists else None
    # Trailing separator only constrains a file copy to a missing path.
    trailing = dst_trailing if (not src_is_dir and not dst_exists) else None
    return (src_is_dir, contents, dst_exists, is_dir, trailing)


def decide(src_is_dir: bool, contents_only: bool, dst_exists: bool,
           dst_is_dir: bool, dst_trailing: bool) -> _Row:
    """Look up the decision table row for one combination."""
    return _DECISION_TABLE[_table_key(src_is_dir, contents_only, dst_exists,
                                      dst_is_dir, dst_trailing)]


# ---------------------------------------------------------------------------
# Symlink redirection
# ---------------------------------------------------------------------------

def _redirect_destination(dst_spec: PathSpec, dst_stat: StatInfo) -> tuple[PathSpec, StatInfo]:
    """Swap a symlink destination for its final target.

    The link itself is never the write target.  A broken link becomes
    "does not exist" at the link's literal target path.  The original
    trailing separator carries over to the target.
    """
    if not dst_stat.is_symlink or dst_stat.resolved_target is None:
        return dst_spec, dst_stat
    target_spec = replace(
        dst_stat.resolved_target,
        trailing_separator=dst_spec.trailing_separator,
        contents_only=False,
    )
    return target_spec, dst_stat.target or MISSING


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve(src_spec: PathSpec, src_stat: StatInfo,
            dst_spec: PathSpec, dst_stat: StatInfo) -> CopyPlan:
    """Decide what ``cp SRC DST`` does.

    *src_stat* is the stat the copy reads from: the caller passes the
    target's stat when a source symlink is followed, or the link's own
    stat when the link is copied as-is.  Never raises; failures come
    back as a plan with ``operation == CopyOperation.ERROR``.
    """
    dst_spec, dst_stat = _redirect_destination(dst_spec, dst_stat)

    src_is_dir = src_stat.exists and src_stat.is_dir and not src_stat.is_symlink
    operation, error_kind, into = decide(
        src_is_dir,
        src_spec.contents_only,
        dst_stat.exists,
        dst_stat.is_dir,
        dst_spec.trailing_separator,
    )

    destination = dst_spec.path
    if into:
        destination = join(destination, basename(src_spec))

    return CopyPlan(
        operation=operation,
        source=src_spec.path,
        destination=destination,
        error_kind=error_kind,
        source_is_dir=src_is_dir,
        source_is_link=src_stat.is_symlink,
    )
