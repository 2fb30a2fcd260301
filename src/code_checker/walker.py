"""
code-checker — source tree walker

File: src/code_checker/walker.py
Last updated: 2026-10-18

Purpose
- Enumerate candidate files under a root in a stable order.

Functional requirements
- Directory and file names are visited in sorted order, files of a directory
  before its subdirectories.
- Include patterns match file names; exclude patterns match directory names
  below the root and prune the whole subtree. Matching ignores case.
"""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import TYPE_CHECKING

from code_checker.constants import DEFAULT_EXCLUDE, DEFAULT_INCLUDE

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


def iter_files(
    root: str | Path,
    include: Sequence[str] = DEFAULT_INCLUDE,
    exclude: Sequence[str] = DEFAULT_EXCLUDE,
) -> Iterator[Path]:
    base = Path(root)
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = [name for name in sorted(dirnames) if not _matches_any(name, exclude)]
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if not _matches_any(filename, include):
                continue
            candidate = current_dir / filename
            if candidate.is_file():
                yield candidate


def relative_path(path: str | Path, root: str | Path) -> str:
    """Return ``path`` relative to ``root`` with forward slashes."""

    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()


def _matches_any(name: str, patterns: Sequence[str]) -> bool:
    folded = name.lower()
    return any(fnmatch.fnmatchcase(folded, pattern.lower()) for pattern in patterns)


__all__ = ["iter_files", "relative_path"]
