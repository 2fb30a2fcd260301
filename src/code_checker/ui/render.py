"""Output rendering for the code-checker CLI.

File: src/code_checker/ui/render.py
Last updated: 2026-10-18

Purpose
- Provide a thin rendering layer for the banner, diagnostics, and progress.

What should be included in this file
- CLIRenderer class with methods for each output pattern of a run.
- Factory function to create a renderer with appropriate settings.

Functional requirements
- Diagnostic lines are ``[LABEL] path   message`` where LABEL is FOUND for a
  fix found in read-only mode and FIX, WARNING or ERROR otherwise.
- The progress indicator is only drawn on a terminal and is overwritten in place.

Non-functional requirements
- No dependencies beyond the standard library.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Final, TextIO

from code_checker.constants import VERSION
from code_checker.domain.models import Severity

if TYPE_CHECKING:
    from code_checker.domain.models import Diagnostic, RunResult

PROGRESS_WIDTH: Final[int] = 40

_LABELS: Final[dict[Severity, str]] = {
    Severity.FIX: "FIX",
    Severity.WARNING: "WARNING",
    Severity.ERROR: "ERROR",
}


def format_diagnostic(path: str, diagnostic: Diagnostic, *, read_only: bool) -> str:
    """Render one diagnostic line without a trailing newline."""

    if diagnostic.severity is Severity.FIX and read_only:
        label = "FOUND"
    else:
        label = _LABELS[diagnostic.severity]
    return f"[{label}] {path}   {diagnostic.message}"


def format_progress(counter: int) -> str:
    return ("." * (counter % PROGRESS_WIDTH)).ljust(PROGRESS_WIDTH) + "\r"


def _is_tty(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


class CLIRenderer:
    """Plain-text renderer for one checker run."""

    def __init__(
        self,
        *,
        read_only: bool,
        progress: bool = True,
        stream: TextIO | None = None,
    ) -> None:
        self.read_only = read_only
        self._stream = stream if stream is not None else sys.stdout
        self._progress = progress and _is_tty(self._stream)

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def banner(self) -> None:
        title = f"CodeChecker version {VERSION}"
        self._write(f"\n{title}\n{'-' * len(title)}\n")

    def run_started(self, root: str) -> None:
        if self.read_only:
            self._write("Running in read-only mode\n")
        self._write(f"Scanning folder {root}\n")

    def diagnostic(self, path: str, diagnostic: Diagnostic) -> None:
        self._write(format_diagnostic(path, diagnostic, read_only=self.read_only) + "\n")

    def progress(self, counter: int, path: str) -> None:
        """Redraw the progress line; ``path`` is accepted for sink compatibility."""

        if self._progress:
            self._write(format_progress(counter))

    def run_finished(self, result: RunResult) -> None:
        if self._progress:
            self._write(" " * PROGRESS_WIDTH + "\r")
        self._write("\nDone.\n")


def create_renderer(
    *, read_only: bool, progress: bool = True, stream: TextIO | None = None
) -> CLIRenderer:
    """Create a CLI renderer with the given settings."""

    return CLIRenderer(read_only=read_only, progress=progress, stream=stream)


__all__ = [
    "PROGRESS_WIDTH",
    "CLIRenderer",
    "create_renderer",
    "format_diagnostic",
    "format_progress",
]
