"""
code-checker — filesystem utilities

File: src/code_checker/utils/fs.py
Last updated: 2026-10-18

Purpose
- Rewrite checked files in place without ever leaving a half-written file behind.

Functional requirements
- Symbolic links are written through: the link stays, its target gets the content.
- A file with several hard links is overwritten in its own inode so every name
  sees the new content; anything else is replaced atomically from a sibling
  temp file.
- The replacement keeps the original file's permission bits and, where the
  process is allowed to, its owner and group.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from pathlib import Path

PathLike = str | os.PathLike[str]

__all__ = ["atomic_write"]


def atomic_write(path: PathLike, data: bytes, *, preserve_metadata: bool = True) -> None:
    """Replace the content of ``path`` (following symlinks) with ``data``."""

    target = Path(path).resolve()
    try:
        existing: os.stat_result | None = target.stat()
    except FileNotFoundError:
        existing = None

    if existing is not None and existing.st_nlink > 1:
        _overwrite_in_place(target, data)
        return
    _replace_from_sibling(target, data, existing if preserve_metadata else None)


def _overwrite_in_place(target: Path, data: bytes) -> None:
    with target.open("r+b") as handle:
        handle.write(data)
        handle.truncate()
        handle.flush()
        os.fsync(handle.fileno())


def _replace_from_sibling(target: Path, data: bytes, existing: os.stat_result | None) -> None:
    fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if existing is not None:
            os.chmod(temp_path, stat.S_IMODE(existing.st_mode))
            _adopt_owner(temp_path, existing)
        os.replace(temp_path, target)
    except BaseException:
        with contextlib.suppress(OSError):
            temp_path.unlink()
        raise
    _sync_directory(target.parent)


def _adopt_owner(path: Path, existing: os.stat_result) -> None:
    if not hasattr(os, "chown"):
        return
    if (existing.st_uid, existing.st_gid) == (os.getuid(), os.getgid()):
        return
    # Only root, or the owner for the group, may hand a file to another account.
    with contextlib.suppress(PermissionError):
        os.chown(path, existing.st_uid, existing.st_gid)


def _sync_directory(directory: Path) -> None:
    if os.name == "nt":
        return
    try:
        dir_fd = os.open(directory, os.O_RDONLY | getattr(os, "O_DIRECTORY", 0))
    except OSError:
        return
    # Not every filesystem supports fsync on directories.
    with contextlib.suppress(OSError):
        os.fsync(dir_fd)
    os.close(dir_fd)
