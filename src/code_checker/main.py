"""
code-checker — process entrypoint

File: src/code_checker/main.py
Last updated: 2026-10-18

Purpose
- Turn whatever a run ends with into one of three exit codes.

Exit codes
- ``0``: every scanned file passed.
- ``1``: a file failed, or read-only mode found something to fix.
- ``2``: the run could not start (bad root, bad config, missing collaborator),
  bad usage, or an internal error. Startup problems print ``Error: ...``;
  anything unexpected prints its traceback.
"""

from __future__ import annotations

import sys
import traceback
from enum import IntEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

# A collaborator that vanished between the startup check and its import.
_COLLABORATOR_MODULES: Final[frozenset[str]] = frozenset({"jinja2", "yaml"})


class ExitCode(IntEnum):
    SUCCESS = 0
    CHECK_FAILED = 1
    FATAL = 2


def cli_entrypoint(argv: Sequence[str] | None = None) -> int:
    """Entrypoint of the ``code-checker`` script and ``python -m code_checker``."""

    try:
        from code_checker.ui.cli import run_cli

        outcome: object = run_cli(argv)
    except SystemExit as exc:
        # argparse exits for --help, --version and usage errors.
        outcome = exc.code
    except KeyboardInterrupt:
        _write_stderr("Interrupted.")
        return ExitCode.FATAL
    except Exception as exc:  # noqa: BLE001
        if _is_startup_failure(exc):
            _write_stderr(f"Error: {str(exc).strip() or type(exc).__name__}")
        else:
            traceback.print_exception(exc, file=sys.stderr)
        return ExitCode.FATAL
    return _as_exit_code(outcome)


def _as_exit_code(outcome: object) -> int:
    if outcome is None:
        return ExitCode.SUCCESS
    if isinstance(outcome, int) and outcome in set(ExitCode):
        return int(outcome)
    if isinstance(outcome, str) and outcome.strip():
        _write_stderr(outcome.strip())
    return ExitCode.FATAL


def _is_startup_failure(exc: BaseException) -> bool:
    from code_checker.config import ConfigLoadError, ConfigValidationError
    from code_checker.ui.cli import StartupError

    for link in _causes(exc):
        if isinstance(link, (StartupError, ConfigLoadError, ConfigValidationError)):
            return True
        if isinstance(link, ModuleNotFoundError) and link.name in _COLLABORATOR_MODULES:
            return True
    return False


def _causes(exc: BaseException) -> Iterator[BaseException]:
    """Yield ``exc`` and the exceptions it was raised from, without looping."""

    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if current.__cause__ is not None or current.__suppress_context__:
            current = current.__cause__
        else:
            current = current.__context__


def _write_stderr(message: str) -> None:
    print(message, file=sys.stderr)


__all__ = ["ExitCode", "cli_entrypoint"]
