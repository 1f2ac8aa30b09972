# tests/test_logger.py

from __future__ import annotations

import io
import json
import logging

import taskboard.main  # noqa: F401  attaches the application logger
from taskboard.services import task_client
from taskboard.utils.logger import JsonLineFormatter, get_logger


def json_handlers_along(logger: logging.Logger) -> list[logging.Handler]:
    """Every JSON handler a record from `logger` passes through."""
    found: list[logging.Handler] = []
    current: logging.Logger | None = logger
    while current is not None:
        found.extend(h for h in current.handlers if isinstance(h.formatter, JsonLineFormatter))
        if not current.propagate:
            break
        current = current.parent
    return found


def test_client_log_line_is_written_once() -> None:
    handlers = json_handlers_along(task_client.logger.logger)
    assert len(handlers) == 1

    buffer = io.StringIO()
    previous = handlers[0].setStream(buffer)
    try:
        task_client.logger.warning("Task API request failed", method="GET", path="/tasks", status=503)
    finally:
        if previous is not None:
            handlers[0].setStream(previous)

    lines = buffer.getvalue().splitlines()
    assert len(lines) == 1
    document = json.loads(lines[0])
    assert document["message"] == "Task API request failed"
    assert document["logger"] == "taskboard.services.task_client"
    assert document["status"] == 503


def test_repeated_get_logger_adds_no_handlers() -> None:
    before = len(json_handlers_along(logging.getLogger("taskboard.services.task_board")))

    get_logger("taskboard.services.task_board")
    get_logger("taskboard")

    assert len(json_handlers_along(logging.getLogger("taskboard.services.task_board"))) == before == 1


def test_structured_fields_reach_log_records(caplog) -> None:
    logger = get_logger("taskboard.tests")

    with caplog.at_level(logging.INFO, logger="taskboard.tests"):
        logger.info("Board loaded", count=4)

    assert len(caplog.records) == 1
    assert caplog.records[0].fields == {"count": 4}
