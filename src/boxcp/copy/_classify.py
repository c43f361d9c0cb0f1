"""Classify raw ``cp`` arguments into :class:`PathSpec` values."""

from __future__ import annotations

import os
import posixpath

from ._types import PathSpec, Side


def _normalize(path: str) -> str:
    """Lexically normalize *path*; ``""`` becomes ``"."``."""
    if not path:
        return "."
    norm = posixpath.normpath(path)
    # normpath keeps a leading "//" (POSIX allows it to be special)
    if norm.startswith("//"):
        norm = "/" + norm.lstrip("/")
    return norm


def classify(raw: str | os.PathLike[str], side: Side) -> PathSpec:
    """Classify *raw* as given on the *side* of a copy.

    Pure string handling; never touches the filesystem and never raises
    for a string argument.

    - A trailing ``/`` (or a trailing ``/.``) sets ``trailing_separator``.
    - A final ``.`` segment on a source (``dir/.``, ``.``) sets
      ``contents_only``.  So does the root ``/``, which has no name of
      its own to preserve.
    - On the destination side the ``.`` marker only means "directory".
    """
    path = os.fspath(raw)
    if os.name == "nt":
        path = path.replace("\\", "/")

    base = path.rstrip("/")
    marker = base == "." or base.endswith("/.")
    trailing = path.endswith("/") or marker
    norm = _normalize(path)

    contents = side is Side.SOURCE and (marker or norm == "/")
    return PathSpec(path=norm, trailing_separator=trailing, contents_only=contents)


def basename(spec: PathSpec) -> str:
    """Return the final name component of *spec* (``""`` for ``/`` or ``.``)."""
    if spec.path in ("/", "."):
        return ""
    return posixpath.basename(spec.path)


def join(parent: str, name: str) -> str:
    """Join *name* under *parent*; an empty *name* returns *parent*."""
    if not name:
        return parent
    return posixpath.join(parent, name)
