"""
JSON line logging for the task board.

A single stdout handler lives on the "taskboard" logger; module loggers below
it propagate there, so each record is written exactly once.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from taskboard.config import LOG_LEVEL

ROOT_LOGGER_NAME = "taskboard"


class JsonLineFormatter(logging.Formatter):
    """Render a record and its structured fields as one JSON document."""

    def format(self, record: logging.LogRecord) -> str:
        document = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        document.update(getattr(record, "fields", {}))
        if record.exc_info:
            document["exception"] = self.formatException(record.exc_info)
        return json.dumps(document, default=str)


def _root_logger() -> logging.Logger:
    """The "taskboard" logger, given its stdout handler on first use."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h.formatter, JsonLineFormatter) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLineFormatter())
        root.addHandler(handler)
        root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return root


class StructuredLogger:
    """
    Logger taking structured fields as keyword arguments.

    Example:
        logger.info("Task API request", method="GET", path="/tasks", status=200)
    """

    def __init__(self, name: str, level: Optional[int] = None):
        _root_logger()
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)

    def _log(self, level: int, message: str, **fields):
        if self.logger.isEnabledFor(level):
            self.logger.log(level, message, extra={"fields": fields})

    def debug(self, message: str, **fields):
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields):
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields):
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields):
        self._log(logging.ERROR, message, **fields)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name, normally under "taskboard"

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
