"""
code-checker — domain models

File: src/code_checker/domain/models.py
Last updated: 2026-10-18

Purpose
- Define the immutable values exchanged between tasks, the pipeline, and the reporter.

What should be included in this file
- Diagnostic severities and the per-task ``Outcome`` envelope.
- Per-file identity (``FileContext``) and terminal per-file report.
- Run-level aggregation with the overall pass/fail rule.

Functional requirements
- A fix outcome always carries a ``fix`` diagnostic.
- ``RunResult.success`` is the AND over files of "no error, and no fix finding in read-only mode".

Non-functional requirements
- No filesystem access, no logging; values only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class Severity(StrEnum):
    """Diagnostic severities, ordered from least to most disruptive."""

    FIX = "fix"
    WARNING = "warning"
    ERROR = "error"


class FileState(StrEnum):
    """Terminal states of the per-file pipeline."""

    PENDING = "pending"
    FAILED = "failed"
    WRITTEN = "written"
    UNCHANGED = "unchanged"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str
    line: int | None = None
    task: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.severity, Severity):
            object.__setattr__(self, "severity", Severity(self.severity))
        if self.line is not None and self.line < 1:
            raise ValueError(f"Diagnostic.line must be >= 1, got {self.line}")

    def to_dict(self) -> dict[str, object]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "line": self.line,
            "task": self.task,
        }


@dataclass(frozen=True, slots=True)
class Outcome:
    """Result of one task invocation.

    ``content`` is the replacement content, or ``None`` when the task leaves the
    content untouched. ``diagnostics`` may be non-empty in either case.
    """

    content: bytes | None = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def unchanged(cls) -> Outcome:
        return cls()

    @classmethod
    def replace(cls, content: bytes, message: str, *, line: int | None = None) -> Outcome:
        return cls(content=content, diagnostics=(Diagnostic(Severity.FIX, message, line),))

    @classmethod
    def warning(cls, message: str, *, line: int | None = None) -> Outcome:
        return cls(diagnostics=(Diagnostic(Severity.WARNING, message, line),))

    @classmethod
    def error(cls, message: str, *, line: int | None = None) -> Outcome:
        return cls(diagnostics=(Diagnostic(Severity.ERROR, message, line),))

    @classmethod
    def merge(cls, outcomes: Iterable[Outcome]) -> Outcome:
        """Combine diagnostic-only outcomes; the last replacement wins."""

        content: bytes | None = None
        diagnostics: list[Diagnostic] = []
        for item in outcomes:
            if item.content is not None:
                content = item.content
            diagnostics.extend(item.diagnostics)
        return cls(content=content, diagnostics=tuple(diagnostics))

    @property
    def has_error(self) -> bool:
        return any(item.severity is Severity.ERROR for item in self.diagnostics)

    @property
    def has_fix(self) -> bool:
        return any(item.severity is Severity.FIX for item in self.diagnostics)

    @property
    def is_noop(self) -> bool:
        return self.content is None and not self.diagnostics

    def tagged(self, task: str) -> Outcome:
        """Return a copy whose diagnostics name ``task``."""

        return Outcome(
            content=self.content,
            diagnostics=tuple(
                Diagnostic(item.severity, item.message, item.line, task)
                for item in self.diagnostics
            ),
        )


@dataclass(frozen=True, slots=True)
class FileContext:
    """Read-only identity of the file a task is looking at."""

    path: str
    extension: str
    read_only: bool = True

    @classmethod
    def for_path(cls, rel_path: str, *, read_only: bool = True) -> FileContext:
        suffix = PurePosixPath(rel_path).suffix
        return cls(path=rel_path, extension=suffix[1:].lower(), read_only=read_only)

    def is_(self, *extensions: str) -> bool:
        return self.extension in extensions


@dataclass(frozen=True, slots=True)
class FileReport:
    path: str
    state: FileState
    diagnostics: tuple[Diagnostic, ...] = ()
    failed_task: str | None = None
    read_only: bool = True

    @property
    def failed(self) -> bool:
        if self.state is FileState.FAILED:
            return True
        return self.read_only and any(
            item.severity is Severity.FIX for item in self.diagnostics
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "state": self.state.value,
            "failed": self.failed,
            "failed_task": self.failed_task,
            "diagnostics": [item.to_dict() for item in self.diagnostics],
        }


@dataclass(frozen=True, slots=True)
class RunResult:
    files: tuple[FileReport, ...]
    read_only: bool = True

    @property
    def success(self) -> bool:
        return not any(item.failed for item in self.files)

    @property
    def scanned_count(self) -> int:
        return len(self.files)

    @property
    def failed_count(self) -> int:
        return sum(1 for item in self.files if item.failed)

    @property
    def written_count(self) -> int:
        return sum(1 for item in self.files if item.state is FileState.WRITTEN)

    def count(self, severity: Severity) -> int:
        return sum(
            1 for report in self.files for item in report.diagnostics if item.severity is severity
        )

    def summary(self) -> dict[str, object]:
        return {
            "success": self.success,
            "read_only": self.read_only,
            "scanned_files": self.scanned_count,
            "failed_files": self.failed_count,
            "written_files": self.written_count,
            "fix_count": self.count(Severity.FIX),
            "warning_count": self.count(Severity.WARNING),
            "error_count": self.count(Severity.ERROR),
        }


__all__ = [
    "Diagnostic",
    "FileContext",
    "FileReport",
    "FileState",
    "Outcome",
    "RunResult",
    "Severity",
]
