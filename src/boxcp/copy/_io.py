"""Plan execution: stream entries from the source tree into the destination."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

import structlog

from ._classify import join
from ._types import CopyOperation, CopyPlan, CopyReport, EntryError, FileEntry, TreeEntry

if TYPE_CHECKING:
    from ..fs import LocalFS

log = structlog.get_logger(__name__)


def _enum_entries(plan: CopyPlan, src_fs: LocalFS) -> Iterator[tuple[TreeEntry, str]]:
    """Yield ``(entry, destination_path)`` pairs for *plan*.

    A contents copy into an existing directory leaves that directory
    itself alone; every other operation writes the source root at the
    plan's destination first.
    """
    for entry in src_fs.read_tree(plan.source):
        if not entry.rel_path:
            if plan.operation is CopyOperation.COPY_CONTENTS_INTO_DIR:
                continue
            yield entry, plan.destination
        else:
            yield entry, join(plan.destination, entry.rel_path)


def _write(dst_fs: LocalFS, path: str, entry: TreeEntry) -> None:
    if entry.open is None:
        dst_fs.write_entry(path, entry.meta)
        return
    with entry.open() as stream:
        dst_fs.write_entry(path, entry.meta, stream)


def execute_plan(
    plan: CopyPlan,
    src_fs: LocalFS,
    dst_fs: LocalFS,
    *,
    dry_run: bool = False,
    ignore_errors: bool = False,
) -> CopyReport:
    """Carry out *plan*, reading from *src_fs* and writing to *dst_fs*.

    With ``dry_run=True`` the source is enumerated and the report filled
    in, but nothing is written.

    Write failures propagate as :class:`OSError`.  With
    ``ignore_errors=True`` they are collected in ``report.errors``
    instead, and :class:`RuntimeError` is raised if nothing at all could
    be written.  Entries written before a failure stay on disk.

    Raises:
        CopyError: *plan* is an ``ERROR`` plan.
    """
    plan.raise_for_error()
    report = CopyReport(plan=plan)

    for entry, dst_path in _enum_entries(plan, src_fs):
        existed = dst_fs.exists(dst_path)
        src_path = join(plan.source, entry.rel_path)
        if not dry_run:
            try:
                _write(dst_fs, dst_path, entry)
            except OSError as exc:
                if not ignore_errors:
                    raise
                log.warning("entry failed", path=dst_path, error=str(exc))
                report.errors.append(EntryError(path=dst_path, error=str(exc)))
                continue
            log.debug("entry written", path=dst_path, type=str(entry.meta.file_type))
        fe = FileEntry(dst_path, entry.meta.file_type, src=src_path)
        if existed:
            report.update.append(fe)
        else:
            report.add.append(fe)

    if ignore_errors and report.errors and not report.total:
        raise RuntimeError(f"All files failed to copy: {report.errors}")
    return report
