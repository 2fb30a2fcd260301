"""
code-checker — per-file task pipeline

File: src/code_checker/pipeline.py
Last updated: 2026-10-18

Purpose
- Run the ordered task list over each file and decide whether to write it back.

Normative behavior
- Tasks run strictly in registration order against the current content.
- Every diagnostic is emitted as soon as its task returns.
- The first outcome carrying an error stops the file; that outcome's
  replacement content is discarded and nothing is written.
- Replacement content is adopted in read-only mode too, so later tasks report
  what fixing mode would report; only the write-back is suppressed.
- A task that raises is reported as an error for that file; it never aborts
  the run.
- Content is written only when it differs from the original bytes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from code_checker.domain.models import (
    Diagnostic,
    FileContext,
    FileReport,
    FileState,
    Outcome,
    RunResult,
    Severity,
)
from code_checker.observability import correlation_scope
from code_checker.tasks.base import Task
from code_checker.utils.fs import atomic_write
from code_checker.walker import relative_path

DiagnosticSink = Callable[[str, Diagnostic], None]
ProgressSink = Callable[[int, str], None]

_logger = logging.getLogger(__name__)


def check_content(
    context: FileContext,
    content: bytes,
    tasks: Sequence[Task],
    emit: DiagnosticSink | None = None,
) -> tuple[bytes, tuple[Diagnostic, ...], str | None]:
    """Run ``tasks`` over ``content`` without touching the filesystem.

    Returns the final content, every diagnostic in emission order, and the
    name of the task that stopped the pipeline (``None`` when all tasks ran).
    """

    current = content
    diagnostics: list[Diagnostic] = []
    for task in tasks:
        outcome = _invoke(task, context, current).tagged(task.name)
        for diagnostic in outcome.diagnostics:
            diagnostics.append(diagnostic)
            if emit is not None:
                emit(context.path, diagnostic)
        if outcome.has_error:
            return current, tuple(diagnostics), task.name
        if outcome.content is not None:
            current = outcome.content
    return current, tuple(diagnostics), None


def run_file(
    path: Path,
    rel_path: str,
    tasks: Sequence[Task],
    *,
    read_only: bool,
    emit: DiagnosticSink | None = None,
) -> FileReport:
    context = FileContext.for_path(rel_path, read_only=read_only)
    with correlation_scope(path=rel_path):
        try:
            original = path.read_bytes()
        except OSError as exc:
            return _io_failure(context, f"cannot be read: {exc.strerror or exc}", emit)

        content, diagnostics, failed_task = check_content(context, original, tasks, emit)
        if failed_task is not None:
            _logger.debug("file failed", extra={"task": failed_task})
            return FileReport(
                path=rel_path,
                state=FileState.FAILED,
                diagnostics=diagnostics,
                failed_task=failed_task,
                read_only=read_only,
            )

        if content == original or read_only:
            return FileReport(
                path=rel_path,
                state=FileState.UNCHANGED,
                diagnostics=diagnostics,
                read_only=read_only,
            )

        try:
            atomic_write(path, content)
        except OSError as exc:
            failure = _io_failure(context, f"cannot be written: {exc.strerror or exc}", emit)
            return FileReport(
                path=rel_path,
                state=FileState.FAILED,
                diagnostics=diagnostics + failure.diagnostics,
                failed_task=failure.failed_task,
                read_only=read_only,
            )
        _logger.info("file rewritten", extra={"bytes": len(content)})
        return FileReport(
            path=rel_path,
            state=FileState.WRITTEN,
            diagnostics=diagnostics,
            read_only=read_only,
        )


def run_pipeline(
    files: Iterable[Path],
    tasks: Sequence[Task],
    *,
    root: Path,
    read_only: bool,
    emit: DiagnosticSink | None = None,
    on_progress: ProgressSink | None = None,
) -> RunResult:
    reports: list[FileReport] = []
    for counter, path in enumerate(files, start=1):
        rel_path = relative_path(path, root)
        if on_progress is not None:
            on_progress(counter, rel_path)
        reports.append(run_file(path, rel_path, tasks, read_only=read_only, emit=emit))

    result = RunResult(files=tuple(reports), read_only=read_only)
    _logger.info("run finished", extra=result.summary())
    return result


def _invoke(task: Task, context: FileContext, content: bytes) -> Outcome:
    try:
        return task.check(context, content)
    except Exception as exc:  # noqa: BLE001
        _logger.exception("task raised", extra={"task": task.name})
        return Outcome.error(f"task {task.name} failed: {type(exc).__name__}: {exc}")


def _io_failure(context: FileContext, message: str, emit: DiagnosticSink | None) -> FileReport:
    diagnostic = Diagnostic(Severity.ERROR, message, task="io")
    if emit is not None:
        emit(context.path, diagnostic)
    return FileReport(
        path=context.path,
        state=FileState.FAILED,
        diagnostics=(diagnostic,),
        failed_task="io",
        read_only=context.read_only,
    )


__all__ = ["DiagnosticSink", "ProgressSink", "check_content", "run_file", "run_pipeline"]
