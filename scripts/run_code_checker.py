"""
code-checker — no-install wrapper

File: scripts/run_code_checker.py
Last updated: 2026-10-18

Purpose
- Run the checker straight from a source checkout, without ``pip install``.

Functional requirements
- Same arguments and exit codes as the ``code-checker`` console script:
  ``0`` clean, ``1`` failed files or fixes found in read-only mode, ``2`` fatal.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, cast

if TYPE_CHECKING:
    from collections.abc import Sequence


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"


class _MainModule(Protocol):
    def cli_entrypoint(self, argv: Sequence[str] | None = None) -> int: ...


def _load_module() -> _MainModule:
    try:
        from code_checker import main as loaded_module

        return cast("_MainModule", loaded_module)
    except ModuleNotFoundError:
        if str(SRC_PATH) not in sys.path:
            sys.path.insert(0, str(SRC_PATH))
        from code_checker import main as loaded_module

        return cast("_MainModule", loaded_module)


def main(argv: Sequence[str] | None = None) -> int:
    return _load_module().cli_entrypoint(argv)


if __name__ == "__main__":
    raise SystemExit(main())
