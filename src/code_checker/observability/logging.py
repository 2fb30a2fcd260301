"""
code-checker — structured run logging

File: src/code_checker/observability/logging.py
Last updated: 2026-10-18

Purpose
- Emit one JSON object per line for each log record of a checker run.

Functional requirements
- Records are handed to a bounded queue and written by a background listener,
  so scanning never waits on a slow sink.
- Fields bound with ``correlation_scope`` (the file being checked) appear as
  top-level keys; ``extra=`` attributes are collected under ``fields``.
- Sinks are stderr (or a given stream) and an optional log file.
"""

from __future__ import annotations

import contextvars
import json
import logging
import logging.handlers
import queue
import sys
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Final, TextIO

_RESERVED_ATTRIBUTES: Final[frozenset[str]] = frozenset(
    logging.makeLogRecord({}).__dict__
) | {"message", "asctime", "correlation", "taskName"}

_correlation: contextvars.ContextVar[Mapping[str, str]] = contextvars.ContextVar(
    "code_checker_correlation", default={}
)

_active_lock = threading.Lock()
_active: StructuredLoggingHandle | None = None


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: int | str = "WARNING"
    logger_name: str = "code_checker"
    log_file: Path | str | None = None
    log_to_stderr: bool = True
    stream: TextIO | None = None
    queue_size: int = 4096


class _CorrelationQueueHandler(logging.handlers.QueueHandler):
    """Stamps the caller's correlation fields before the record changes threads."""

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        record.correlation = dict(_correlation.get())
        return super().prepare(record)

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            sys.stderr.write("code-checker: log queue full, record dropped\n")


class _JsonLinesFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        event: dict[str, object] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        event.update(getattr(record, "correlation", {}))
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRIBUTES and not key.startswith("_")
        }
        if extras:
            event["fields"] = extras
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        return json.dumps(event, sort_keys=True, ensure_ascii=False, default=_json_fallback)


@dataclass(slots=True)
class StructuredLoggingHandle:
    """Owns the queue listener and sinks installed by ``setup_structured_logging``."""

    logger: logging.Logger
    queue_handler: logging.Handler
    listener: logging.handlers.QueueListener
    sinks: tuple[logging.Handler, ...]
    is_shutdown: bool = field(default=False, init=False)

    def shutdown(self) -> None:
        if self.is_shutdown:
            return
        self.is_shutdown = True
        # stop() drains what is still queued.
        self.listener.stop()
        self.logger.removeHandler(self.queue_handler)
        self.queue_handler.close()
        for sink in self.sinks:
            sink.close()


def setup_structured_logging(config: LoggingConfig) -> StructuredLoggingHandle:
    """Install queue-backed JSON logging on ``config.logger_name`` for one run."""

    global _active
    if config.queue_size <= 0:
        raise ValueError(f"queue_size must be positive, got {config.queue_size}")
    shutdown_logging()

    level = config.level
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unsupported logging level {config.level!r}")

    sinks = _build_sinks(config)
    for sink in sinks:
        sink.setLevel(level)
        sink.setFormatter(_JsonLinesFormatter())

    records: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=config.queue_size)
    queue_handler = _CorrelationQueueHandler(records)
    listener = logging.handlers.QueueListener(records, *sinks, respect_handler_level=True)

    logger = logging.getLogger(config.logger_name)
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(queue_handler)
    listener.start()

    handle = StructuredLoggingHandle(logger, queue_handler, listener, tuple(sinks))
    with _active_lock:
        _active = handle
    return handle


def shutdown_logging(handle: StructuredLoggingHandle | None = None) -> None:
    """Flush and detach ``handle``, or the most recently installed one."""

    global _active
    with _active_lock:
        target = handle or _active
        if target is _active:
            _active = None
    if target is not None:
        target.shutdown()


def get_correlation_context() -> dict[str, str]:
    return dict(_correlation.get())


@contextmanager
def correlation_scope(**fields: str | None) -> Iterator[None]:
    """Bind ``fields`` (``path=...``) to every record logged inside the block.

    A ``None`` value unbinds a field inherited from an outer scope.
    """

    bound = {**_correlation.get(), **fields}
    token = _correlation.set({key: value for key, value in bound.items() if value is not None})
    try:
        yield
    finally:
        _correlation.reset(token)


def _build_sinks(config: LoggingConfig) -> list[logging.Handler]:
    sinks: list[logging.Handler] = []
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        sinks.append(logging.FileHandler(log_path, encoding="utf-8"))
    if config.log_to_stderr:
        sinks.append(logging.StreamHandler(config.stream or sys.stderr))
    return sinks


def _json_fallback(value: object) -> object:
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return repr(value)


__all__ = [
    "LoggingConfig",
    "StructuredLoggingHandle",
    "correlation_scope",
    "get_correlation_context",
    "setup_structured_logging",
    "shutdown_logging",
]
