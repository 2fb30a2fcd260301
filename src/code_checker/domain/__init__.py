"""Domain values shared by tasks, the pipeline, and the reporter."""

from code_checker.domain.models import (
    Diagnostic,
    FileContext,
    FileReport,
    FileState,
    Outcome,
    RunResult,
    Severity,
)

__all__ = [
    "Diagnostic",
    "FileContext",
    "FileReport",
    "FileState",
    "Outcome",
    "RunResult",
    "Severity",
]
