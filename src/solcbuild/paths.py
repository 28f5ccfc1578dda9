"""Lexical path normalization and resolution.

Nothing here touches the filesystem. The working directory and the home
directory come from injected providers so that resolution can be exercised
offline with fixed values.
"""

from __future__ import annotations

import os
import posixpath
from collections.abc import Callable
from pathlib import Path

PathInput = str | os.PathLike[str]
CwdProvider = Callable[[], PathInput]
HomeProvider = Callable[[], PathInput]

SEP = "/"
CURDIR = "."
PARDIR = ".."
HOME_MARKER = "~"


def normalize_path(path: PathInput) -> str:
    """Collapse ``.``, ``..`` and repeated separators without touching the disk.

    Any run of leading separators is treated as a single root separator.
    ``..`` components are kept when there is nothing left to pop in a
    relative path, or when the previous kept component is itself ``..``.
    At the root of an absolute path they are dropped.
    """
    raw = os.fspath(path)
    if not raw:
        return CURDIR

    absolute = raw.startswith(SEP)
    kept: list[str] = []
    for component in raw.split(SEP):
        if component in ("", CURDIR):
            continue
        if (
            component != PARDIR
            or (not absolute and not kept)
            or (kept and kept[-1] == PARDIR)
        ):
            kept.append(component)
        elif kept:
            kept.pop()

    body = SEP.join(kept)
    if absolute:
        return SEP + body
    return body or CURDIR


def resolve_path(
    path: PathInput,
    *,
    cwd: CwdProvider = Path.cwd,
    home: HomeProvider = Path.home,
) -> str:
    """Return the absolute, normalized form of ``path``.

    A leading ``~`` component is replaced by ``home()``. A path that is still
    relative afterwards is anchored at ``cwd()``.
    """
    raw = os.fspath(path)
    if raw == HOME_MARKER or raw.startswith(HOME_MARKER + SEP):
        raw = posixpath.join(os.fspath(home()), raw[len(HOME_MARKER) + 1 :])
    if not raw.startswith(SEP):
        raw = posixpath.join(os.fspath(cwd()), raw)
    return normalize_path(raw)


def join_path(base: PathInput, *parts: PathInput) -> str:
    """Join path segments and normalize the result.

    An absolute segment discards everything joined before it.
    """
    return normalize_path(posixpath.join(os.fspath(base), *(os.fspath(p) for p in parts)))


__all__ = [
    "CwdProvider",
    "HomeProvider",
    "PathInput",
    "join_path",
    "normalize_path",
    "resolve_path",
]
