"""Structured logging utilities.

Log lines are single JSON objects written to stderr, so stdout stays free for
command output. The default threshold comes from ``WICALC_LOG_LEVEL``.
"""

from __future__ import annotations

import json
import os
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TextIO

LEVELS: dict[str, int] = {"DEBUG": 0, "INFO": 1, "WARN": 2, "ERROR": 3}
DEFAULT_LEVEL = os.environ.get("WICALC_LOG_LEVEL", "WARN").upper()


def _level_value(level: str) -> int:
    try:
        return LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level {level!r}; expected one of {sorted(LEVELS)}") from None


@dataclass
class LogRecord:
    """Structured log record."""

    level: str
    logger: str
    message: str
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "logger": self.logger,
            "message": self.message,
            "timestamp": self.timestamp,
            **self.data,
        }

    def to_json(self) -> str:
        # Paths and quantities are logged via str().
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)


class StructuredLogger:
    """Minimal JSON-lines logger."""

    def __init__(
        self,
        name: str,
        output: TextIO | None = None,
        min_level: str = DEFAULT_LEVEL,
    ) -> None:
        self.name = name
        self.output = output
        self._min_level = LEVELS.get(min_level.upper(), LEVELS["WARN"])

    @property
    def level(self) -> str:
        return next(k for k, v in LEVELS.items() if v == self._min_level)

    def set_level(self, level: str) -> None:
        self._min_level = _level_value(level)

    def is_enabled_for(self, level: str) -> bool:
        return _level_value(level) >= self._min_level

    def _log(self, level: str, message: str, **data: Any) -> None:
        if LEVELS[level] < self._min_level:
            return
        record = LogRecord(level=level, logger=self.name, message=message, data=data)
        # Resolve stderr at write time so redirected streams are honoured.
        print(record.to_json(), file=self.output or sys.stderr)

    def debug(self, message: str, **data: Any) -> None:
        self._log("DEBUG", message, **data)

    def info(self, message: str, **data: Any) -> None:
        self._log("INFO", message, **data)

    def warn(self, message: str, **data: Any) -> None:
        self._log("WARN", message, **data)

    def error(self, message: str, **data: Any) -> None:
        self._log("ERROR", message, **data)

    @contextmanager
    def timer(self, operation: str):
        """Log the wall time of the enclosed block at DEBUG.

        Usage:
            with logger.timer("load_config"):
                config = load_config(path)
        """
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.debug(f"{operation} completed", elapsed_ms=elapsed * 1000)


_loggers: dict[str, StructuredLogger] = {}
_current_level = DEFAULT_LEVEL if DEFAULT_LEVEL in LEVELS else "WARN"


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, min_level=_current_level)
    return _loggers[name]


def set_log_level(level: str) -> None:
    """Set minimum log level for all existing and future loggers.

    Args:
        level: One of DEBUG, INFO, WARN, ERROR.
    """
    global _current_level
    _level_value(level)
    _current_level = level.upper()
    for logger in _loggers.values():
        logger.set_level(level)
