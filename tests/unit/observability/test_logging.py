"""
code-checker — unit tests for observability logging

File: tests/unit/observability/test_logging.py
Last updated: 2026-10-18

Purpose
- Validate structured JSON logging with correlation metadata and queue-backed reliability.

What this test file should cover
- JSON line validity and extra-field capture.
- Correlation field propagation and scope restoration.
- Multi-threaded logging stability.
- Queue drain/shutdown behavior.
"""

from __future__ import annotations

import io
import json
import logging
import logging.handlers
import threading
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from code_checker.observability.logging import (
    LoggingConfig,
    correlation_scope,
    get_correlation_context,
    setup_structured_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _logger_name() -> str:
    return f"code_checker.tests.logging.{uuid4().hex}"


def _read_json_lines(path: Path) -> list[dict[str, object]]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


def test_json_logging_preserves_correlation_and_extra_fields(tmp_path: Path) -> None:
    logger_name = _logger_name()
    log_path = tmp_path / "logs" / "checker.jsonl"
    handle = setup_structured_logging(
        LoggingConfig(
            level="INFO",
            logger_name=logger_name,
            log_file=log_path,
            log_to_stderr=False,
        )
    )
    logger = logging.getLogger(logger_name)

    with correlation_scope(path="src/app.php"):
        logger.info("file rewritten", extra={"bytes": 12, "task": "trailing_whitespace"})

    shutdown_logging(handle)

    parsed = _read_json_lines(log_path)
    assert len(parsed) == 1
    first = parsed[0]
    assert first["message"] == "file rewritten"
    assert first["level"] == "INFO"
    assert first["path"] == "src/app.php"
    assert first["fields"] == {"bytes": 12, "task": "trailing_whitespace"}
    assert str(first["timestamp"]).endswith("Z")


def test_level_filters_records_and_stream_sink_is_used() -> None:
    logger_name = _logger_name()
    stream = io.StringIO()
    handle = setup_structured_logging(
        LoggingConfig(level="WARNING", logger_name=logger_name, stream=stream)
    )
    logger = logging.getLogger(logger_name)

    logger.info("hidden")
    logger.warning("shown")
    shutdown_logging(handle)

    lines = stream.getvalue().splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["shown"]


def test_correlation_scope_restores_previous_context() -> None:
    with correlation_scope(path="a.php"):
        with correlation_scope(path="b.php", task="indentation"):
            assert get_correlation_context() == {"path": "b.php", "task": "indentation"}
        assert get_correlation_context() == {"path": "a.php"}
    assert get_correlation_context() == {}


def test_multithreaded_logging_produces_valid_json_lines(tmp_path: Path) -> None:
    logger_name = _logger_name()
    log_path = tmp_path / "threaded.jsonl"
    handle = setup_structured_logging(
        LoggingConfig(
            level="INFO",
            logger_name=logger_name,
            log_file=log_path,
            log_to_stderr=False,
            queue_size=4096,
        )
    )
    logger = logging.getLogger(logger_name)

    total_threads = 8
    per_thread = 40

    def worker(thread_idx: int) -> None:
        for i in range(per_thread):
            with correlation_scope(path=f"file-{thread_idx}-{i}.php"):
                logger.info("thread=%s index=%s", thread_idx, i)

    threads = [threading.Thread(target=worker, args=(idx,)) for idx in range(total_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    shutdown_logging(handle)

    parsed = _read_json_lines(log_path)
    assert len(parsed) == total_threads * per_thread
    for event in parsed:
        thread_idx, index = (
            part.split("=")[1] for part in str(event["message"]).split(" ")
        )
        assert event["path"] == f"file-{thread_idx}-{index}.php"


def test_queue_handler_non_blocking_and_shutdown_flushes(tmp_path: Path) -> None:
    logger_name = _logger_name()
    log_path = tmp_path / "flush.jsonl"
    handle = setup_structured_logging(
        LoggingConfig(
            level="INFO",
            logger_name=logger_name,
            log_file=log_path,
            log_to_stderr=False,
            queue_size=10_000,
        )
    )
    logger = logging.getLogger(logger_name)

    queue_handlers = [h for h in logger.handlers if isinstance(h, logging.handlers.QueueHandler)]
    assert queue_handlers, "expected queue-backed non-blocking logging"

    expected = 300
    for i in range(expected):
        logger.info("message %s", i)

    shutdown_logging(handle)

    assert handle.is_shutdown
    shutdown_logging(handle)
    assert len(log_path.read_text(encoding="utf-8").splitlines()) == expected


def test_invalid_queue_size_is_rejected() -> None:
    with pytest.raises(ValueError, match="queue_size"):
        setup_structured_logging(LoggingConfig(logger_name=_logger_name(), queue_size=0))
