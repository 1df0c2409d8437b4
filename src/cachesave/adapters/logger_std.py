"""Standard logging adapter."""

import logging
import sys
from typing import Any, TextIO


def escape_data(value: str) -> str:
    """Escape a message for use inside a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """Render records the way the runner expects on stdout.

    Warnings and errors become ``::warning::``/``::error::`` annotations,
    debug lines become ``::debug::`` so they only show with step debugging.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            return f"::error::{escape_data(message)}"
        if record.levelno >= logging.WARNING:
            return f"::warning::{escape_data(message)}"
        if record.levelno <= logging.DEBUG:
            return f"::debug::{escape_data(message)}"
        return message


class StdLoggerAdapter:
    """Logger backed by the ``logging`` module."""

    def __init__(self, name: str = "cachesave", level: str = "INFO", stream: TextIO | None = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False
        if not self.logger.handlers:
            handler = logging.StreamHandler(stream or sys.stdout)
            handler.setFormatter(WorkflowCommandFormatter())
            self.logger.addHandler(handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, fields: dict[str, Any]) -> None:
        # Structured fields only add noise to annotations, keep them for debug
        if fields and self.logger.isEnabledFor(logging.DEBUG):
            extras = " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)
            if extras:
                message = f"{message} ({extras})"
        self.logger.log(level, message)
