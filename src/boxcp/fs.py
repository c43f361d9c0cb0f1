"""Filesystem namespaces a copy reads from and writes to.

:class:`LocalFS` is the host filesystem.  :class:`ContainerFS` is a
container's filesystem exposed as a rootfs directory on the host; its
paths are container paths and symlinks inside it never resolve to a
location outside the rootfs.

Both provide the three primitives the copy engine needs:
:meth:`~LocalFS.stat_path`, :meth:`~LocalFS.read_tree` and
:meth:`~LocalFS.write_entry`.
"""

from __future__ import annotations

import errno
import os
import posixpath
import shutil
import stat
from collections import deque
from functools import partial
from pathlib import Path
from typing import BinaryIO, Iterator

from .copy._types import MISSING, EntryMeta, FileType, PathSpec, StatInfo, TreeEntry

__all__ = ["LocalFS", "ContainerFS"]

# Same limit as Linux (MAXSYMLINKS).
_MAX_SYMLINKS = 40


def _too_many_links(path: str) -> OSError:
    return OSError(errno.ELOOP, "Too many levels of symbolic links", path)


class LocalFS:
    """The host filesystem.

    Paths are plain host paths; relative paths are relative to the
    current working directory.

    Source symlinks: :meth:`stat_path` never dereferences the path it is
    given.  A symlink's stat carries its final target in
    ``resolved_target``/``target``; whether a copy follows a symlinked
    source is the caller's choice (``follow_symlinks`` on
    :func:`boxcp.copy.plan_copy`, on by default).
    """

    name = "local"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -- path mapping ------------------------------------------------------

    def display(self, path: str) -> str:
        """Return *path* as a user would type it."""
        return path

    def _host(self, path: str) -> str:
        """Host path for *path*, final component not dereferenced."""
        return path

    def _link_join(self, link_path: str, target: str) -> str:
        """Path a link at *link_path* pointing to *target* refers to."""
        return posixpath.normpath(posixpath.join(posixpath.dirname(link_path), target))

    def _resolve_link(self, path: str) -> str:
        """Follow the symlink chain at *path* and return the final path.

        The final path may not exist (broken link).
        """
        current = path
        for _ in range(_MAX_SYMLINKS):
            host = self._host(current)
            if not os.path.islink(host):
                return current
            current = self._link_join(current, os.readlink(host))
        raise _too_many_links(path)

    # -- stat ----------------------------------------------------------------

    def _lstat(self, path: str) -> os.stat_result | None:
        try:
            return os.lstat(self._host(path))
        except (FileNotFoundError, NotADirectoryError):
            return None

    def stat_path(self, path: str) -> StatInfo:
        """Return a :class:`StatInfo` for *path* without following it.

        A missing path gives ``StatInfo(exists=False)``.  A symlink
        (broken or not) exists; its ``resolved_target`` is the final
        target of the chain and ``target`` is that target's stat.

        Raises:
            OSError: ``ELOOP`` for a symlink cycle, or any other error
                reading the path.
        """
        st = self._lstat(path)
        if st is None:
            return MISSING
        if not stat.S_ISLNK(st.st_mode):
            return StatInfo(exists=True, is_dir=stat.S_ISDIR(st.st_mode))

        final = self._resolve_link(path)
        target_st = self._lstat(final)
        if target_st is None:
            target = MISSING
        else:
            target = StatInfo(exists=True, is_dir=stat.S_ISDIR(target_st.st_mode))
        return StatInfo(
            exists=True,
            is_dir=False,
            is_symlink=True,
            resolved_target=PathSpec(final),
            target=target,
        )

    def exists(self, path: str) -> bool:
        return self._lstat(path) is not None

    def is_dir(self, path: str) -> bool:
        """``True`` if *path* is a directory (following symlinks)."""
        st = self.stat_path(path)
        if st.is_symlink:
            st = st.target or MISSING
        return st.exists and st.is_dir

    def readlink(self, path: str) -> str:
        return os.readlink(self._host(path))

    def real_path(self, path: str) -> str:
        """Canonical host path for *path*, final component not dereferenced.

        Two paths with the same real path name the same host file, even
        across filesystems.
        """
        host = os.path.normpath(self._host(path))
        parent, name = os.path.split(host)
        return os.path.join(os.path.realpath(parent), name)

    # -- reading -------------------------------------------------------------

    def _meta(self, host: str, st: os.stat_result) -> EntryMeta:
        ft = FileType.from_mode(st.st_mode)
        return EntryMeta(
            file_type=ft,
            mode=stat.S_IMODE(st.st_mode),
            size=st.st_size if ft is FileType.FILE else 0,
            mtime=st.st_mtime,
            link_target=os.readlink(host) if ft is FileType.LINK else None,
        )

    def _entry(self, rel: str, host: str) -> TreeEntry:
        meta = self._meta(host, os.lstat(host))
        opener = partial(open, host, "rb") if meta.file_type is FileType.FILE else None
        return TreeEntry(rel, meta, opener)

    def read_tree(self, root: str) -> Iterator[TreeEntry]:
        """Yield a :class:`TreeEntry` for *root* and everything under it.

        The root comes first with ``rel_path == ""``.  Directories are
        walked top-down in sorted order, so a directory always precedes
        its children.  Symlinks are yielded as ``LINK`` entries and never
        descended into.  Lazy: nothing is read until iterated.
        """
        host_root = self._host(root)
        root_entry = self._entry("", host_root)
        yield root_entry
        if root_entry.meta.file_type is not FileType.DIR:
            return

        base = Path(host_root)
        for dirpath, dirnames, filenames in os.walk(host_root):
            dirnames.sort()
            dp = Path(dirpath)
            for name in sorted(dirnames + filenames):
                full = dp / name
                rel = str(full.relative_to(base)).replace(os.sep, "/")
                yield self._entry(rel, str(full))

    # -- writing -------------------------------------------------------------

    def write_entry(self, path: str, meta: EntryMeta, stream: BinaryIO | None = None) -> None:
        """Write one entry at *path*, replacing whatever is there.

        Directories are created (or kept, if one already exists), files
        are overwritten in place, and symlinks are recreated.  A symlink
        already at *path* is replaced, never written through.  Writing
        the same entry twice leaves the same result.

        Raises:
            IsADirectoryError: a file or link would replace a directory.
            NotADirectoryError: a directory would replace a file.
        """
        out = Path(self._host(path))
        is_link = out.is_symlink()
        is_dir = not is_link and out.is_dir()

        if meta.file_type is FileType.DIR:
            if is_link:
                out.unlink()
            elif out.exists() and not is_dir:
                raise NotADirectoryError(
                    errno.ENOTDIR, "cannot overwrite non-directory with directory", path)
            out.mkdir(parents=True, exist_ok=True)
            os.chmod(out, meta.mode)
        else:
            if is_dir:
                raise IsADirectoryError(
                    errno.EISDIR, "cannot overwrite directory with non-directory", path)
            if meta.file_type is FileType.LINK:
                if is_link or out.exists():
                    out.unlink()
                os.symlink(meta.link_target, out)
            else:
                if is_link:
                    out.unlink()
                with open(out, "wb") as f:
                    if stream is not None:
                        shutil.copyfileobj(stream, f)
                os.chmod(out, meta.mode)

        if meta.mtime is not None:
            if meta.file_type is not FileType.LINK:
                os.utime(out, (meta.mtime, meta.mtime))
            elif os.utime in os.supports_follow_symlinks:
                os.utime(out, (meta.mtime, meta.mtime), follow_symlinks=False)


class ContainerFS(LocalFS):
    """A container's filesystem, backed by its rootfs directory on the host.

    Paths are container paths.  Relative paths are relative to
    *workdir*.  Symlinks are resolved in scope: an absolute link target
    is taken relative to the container root, and ``..`` never climbs
    above it.

    Args:
        root: Host path of the container's root filesystem.
        workdir: Container working directory for relative paths.
    """

    name = "container"

    def __init__(self, root: str | os.PathLike[str], workdir: str = "/"):
        self.root = os.fspath(root)
        self.workdir = posixpath.normpath("/" + workdir.lstrip("/"))

    def __repr__(self) -> str:
        return f"ContainerFS({self.root!r}, workdir={self.workdir!r})"

    def display(self, path: str) -> str:
        return f":{self._abs(path)}"

    def _abs(self, path: str) -> str:
        """Absolute, lexically normalized container path."""
        if not path.startswith("/"):
            path = posixpath.join(self.workdir, path)
        norm = posixpath.normpath(path)
        return "/" + norm.lstrip("/")

    def _host_unchecked(self, cpath: str) -> str:
        return os.path.join(self.root, cpath.lstrip("/"))

    def _scoped(self, path: str, *, follow_final: bool) -> str:
        """Resolve symlinks in *path* without leaving the root.

        Every directory component is resolved; the final component only
        when *follow_final* is set.  Returns a container path.
        """
        parts = deque(p for p in self._abs(path).split("/") if p)
        resolved = "/"
        hops = 0
        while parts:
            name = parts.popleft()
            if name == ".":
                continue
            if name == "..":
                resolved = posixpath.dirname(resolved)
                continue
            candidate = posixpath.join(resolved, name)
            if not parts and not follow_final:
                return candidate
            host = self._host_unchecked(candidate)
            if not os.path.islink(host):
                resolved = candidate
                continue
            hops += 1
            if hops > _MAX_SYMLINKS:
                raise _too_many_links(self._abs(path))
            target = os.readlink(host)
            if target.startswith("/"):
                resolved = "/"
            parts.extendleft(reversed([p for p in target.split("/") if p]))
        return resolved

    def _host(self, path: str) -> str:
        return self._host_unchecked(self._scoped(path, follow_final=False))

    def _resolve_link(self, path: str) -> str:
        return self._scoped(path, follow_final=True)
