"""Public copy operations: plan, copy, dry-run."""

from __future__ import annotations

import os
import posixpath
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from ..exceptions import (
    CopyIntoSelfError,
    DestinationNotDirectoryError,
    DestinationParentNotExistError,
    SourceNotDirectoryError,
    SourceNotExistError,
)
from ._classify import classify
from ._io import execute_plan
from ._resolve import resolve
from ._types import CopyPlan, CopyReport, PathSpec, Side, StatInfo

if TYPE_CHECKING:
    from ..fs import LocalFS

log = structlog.get_logger(__name__)


def _default_fs(fs: LocalFS | None) -> LocalFS:
    if fs is not None:
        return fs
    from ..fs import LocalFS
    return LocalFS()


def _parent(path: str) -> str:
    return posixpath.dirname(path) or "."


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

def _stat_source(fs: LocalFS, spec: PathSpec, follow_symlinks: bool) -> tuple[str, StatInfo]:
    """Stat the source and pick the path to read from.

    A symlinked source is followed when *follow_symlinks* is set or the
    path ends in a separator; otherwise the link itself is copied.
    """
    st = fs.stat_path(spec.path)
    if not st.exists:
        raise SourceNotExistError(fs.display(spec.path))

    read_path = spec.path
    if st.is_symlink and (follow_symlinks or spec.trailing_separator):
        target = st.target
        if target is None or not target.exists or st.resolved_target is None:
            raise SourceNotExistError(fs.display(spec.path))
        read_path, st = st.resolved_target.path, target

    if spec.trailing_separator and not st.is_dir:
        raise SourceNotDirectoryError(fs.display(spec.path))
    return read_path, st


def _stat_destination(fs: LocalFS, spec: PathSpec) -> StatInfo:
    """Stat the destination, checking that a missing path has a parent.

    A destination ending in a separator that exists must be a directory,
    after following any symlink.
    """
    st = fs.stat_path(spec.path)
    final = st.target if st.is_symlink and st.target is not None else st
    if spec.trailing_separator and final.exists and not final.is_dir:
        raise DestinationNotDirectoryError(fs.display(spec.path))
    missing = None
    if not st.exists:
        missing = spec.path
    elif st.is_symlink and st.target is not None and not st.target.exists:
        missing = st.resolved_target.path if st.resolved_target else spec.path
    if missing is not None and not fs.is_dir(_parent(missing)):
        raise DestinationParentNotExistError(fs.display(missing))
    return st


def _check_not_into_self(plan: CopyPlan, src_fs: LocalFS, dst_fs: LocalFS) -> None:
    """Reject a write onto the source itself or inside the source tree."""
    if plan.is_error:
        return
    src_real = src_fs.real_path(plan.source)
    dst_real = dst_fs.real_path(plan.destination)
    inside = plan.source_is_dir and dst_real.startswith(src_real.rstrip(os.sep) + os.sep)
    if dst_real == src_real or inside:
        raise CopyIntoSelfError(dst_fs.display(plan.destination))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plan_copy(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    *,
    src_fs: LocalFS | None = None,
    dst_fs: LocalFS | None = None,
    follow_symlinks: bool = True,
) -> CopyPlan:
    """Work out what ``cp SRC DST`` would do, without writing anything.

    *src_fs* and *dst_fs* default to the host filesystem.  A plan whose
    operation is ``ERROR`` is returned, not raised; call
    :meth:`CopyPlan.raise_for_error` to turn it into an exception.

    With ``follow_symlinks=True`` (default) a symlinked SRC is
    dereferenced and its target copied under the link's own name; with
    ``False`` the link itself is copied.

    Raises:
        SourceNotExistError: SRC does not exist.
        SourceNotDirectoryError: SRC ends in a separator but is not a
            directory.
        DestinationParentNotExistError: DST does not exist and neither
            does its parent directory.
        DestinationNotDirectoryError: DST ends in a separator and is an
            existing non-directory.
        CopyIntoSelfError: DST is SRC itself or lies inside the SRC tree.
    """
    src_fs = _default_fs(src_fs)
    dst_fs = _default_fs(dst_fs)
    src_spec = classify(src, Side.SOURCE)
    dst_spec = classify(dst, Side.DESTINATION)

    read_path, src_stat = _stat_source(src_fs, src_spec, follow_symlinks)
    dst_stat = _stat_destination(dst_fs, dst_spec)

    plan = replace(resolve(src_spec, src_stat, dst_spec, dst_stat), source=read_path)
    _check_not_into_self(plan, src_fs, dst_fs)
    log.debug(
        "copy planned",
        src=src_fs.display(src_spec.path),
        dst=dst_fs.display(dst_spec.path),
        operation=str(plan.operation),
        destination=plan.destination,
        error=str(plan.error_kind) if plan.error_kind else None,
    )
    return plan


def copy(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    *,
    src_fs: LocalFS | None = None,
    dst_fs: LocalFS | None = None,
    follow_symlinks: bool = True,
    ignore_errors: bool = False,
) -> CopyReport:
    """Copy SRC to DST the way ``cp SRC DST`` would.

    Returns a :class:`CopyReport` listing what was written.

    Raises:
        CopyError: a precondition failed, or the plan is an error
            (:class:`DirNotExistsError`, :class:`CannotCopyDirError`).
        OSError: a write failed (unless *ignore_errors*).
    """
    src_fs = _default_fs(src_fs)
    dst_fs = _default_fs(dst_fs)
    plan = plan_copy(src, dst, src_fs=src_fs, dst_fs=dst_fs,
                     follow_symlinks=follow_symlinks)
    plan.raise_for_error()
    report = execute_plan(plan, src_fs, dst_fs, ignore_errors=ignore_errors)
    log.debug("copy finished", operation=str(plan.operation),
              added=len(report.add), updated=len(report.update),
              errors=len(report.errors))
    return report


def copy_dry_run(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    *,
    src_fs: LocalFS | None = None,
    dst_fs: LocalFS | None = None,
    follow_symlinks: bool = True,
) -> CopyReport:
    """Report what :func:`copy` would write, without writing it."""
    src_fs = _default_fs(src_fs)
    dst_fs = _default_fs(dst_fs)
    plan = plan_copy(src, dst, src_fs=src_fs, dst_fs=dst_fs,
                     follow_symlinks=follow_symlinks)
    plan.raise_for_error()
    return execute_plan(plan, src_fs, dst_fs, dry_run=True)
