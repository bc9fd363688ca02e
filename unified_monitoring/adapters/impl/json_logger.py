"""
Structured JSON logger backed by the standard logging module.
"""

import copy
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional
from opentelemetry.trace import SpanContext, format_span_id, format_trace_id
from unified_monitoring.adapters.logger import Fields, Logger


class InvalidLogLevel(ValueError):
    """Raised when a log level name cannot be parsed."""


LEVELS: Dict[str, int] = {
    "": logging.INFO,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

LEVEL_NAMES: Dict[int, str] = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}


def parse_level(level: Optional[str]) -> int:
    """
    Parse a level name into a logging level.

    Args:
        level: Case-insensitive level name; empty or None means info

    Returns:
        The logging module level

    Raises:
        InvalidLogLevel: If the name is not a known level
    """
    try:
        return LEVELS[(level or "").strip().lower()]
    except KeyError:
        raise InvalidLogLevel(f"invalid log level: {level!r}") from None


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        timestamp = datetime.fromtimestamp(record.created).astimezone()
        log_entry = {
            "timestamp": timestamp.isoformat(timespec="milliseconds"),
            "level": LEVEL_NAMES.get(record.levelno, record.levelname.lower()),
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # Structured fields never replace the entry's own keys
        for key, value in (getattr(record, "fields", None) or {}).items():
            log_entry.setdefault(key, value)

        return json.dumps(log_entry, default=str)


class JSONLogger(Logger):
    """
    Logger that writes one JSON object per line to stdout or a file.

    The underlying ``logging.Logger`` is private to this handle and is not
    registered with the logging module, so several handles can coexist with
    different outputs and levels.
    """

    _logger: Optional[logging.Logger] = None

    def __init__(
        self,
        level: str = "info",
        output_path: Optional[str] = "",
        name: str = "unified_monitoring.app",
        fields: Optional[Dict[str, Any]] = None
    ):
        log_level = parse_level(level)

        if output_path:
            handler: logging.Handler = logging.FileHandler(output_path)
        else:
            handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())

        self._logger = logging.Logger(name, log_level)
        self._logger.addHandler(handler)
        self._fields: Dict[str, Any] = dict(fields or {})

    @property
    def level(self) -> int:
        return self._logger.level

    def set_log_level(self, level: str) -> None:
        try:
            log_level = parse_level(level)
        except InvalidLogLevel:
            self._log(logging.INFO, f"Invalid log level: {level}, defaulting to INFO")
            log_level = logging.INFO
        self._logger.setLevel(log_level)

    def _log(self, level: int, message: str, fields: Fields = None) -> None:
        merged = {**self._fields, **(fields or {})}
        # stacklevel points the record at the caller of debug()/info()/...
        self._logger.log(level, message, extra={"fields": merged}, stacklevel=3)

    def debug(self, message: str, fields: Fields = None) -> None:
        self._log(logging.DEBUG, message, fields)

    def info(self, message: str, fields: Fields = None) -> None:
        self._log(logging.INFO, message, fields)

    def warn(self, message: str, fields: Fields = None) -> None:
        self._log(logging.WARNING, message, fields)

    def error(self, message: str, fields: Fields = None) -> None:
        self._log(logging.ERROR, message, fields)

    def fatal(self, message: str, fields: Fields = None) -> None:
        self._log(logging.CRITICAL, message, fields)
        self.flush()
        raise SystemExit(1)

    def with_span_context(self, span_context: SpanContext) -> "JSONLogger":
        derived = copy.copy(self)
        derived._fields = {
            **self._fields,
            "trace_id": format_trace_id(span_context.trace_id),
            "span_id": format_span_id(span_context.span_id),
        }
        return derived

    def flush(self) -> None:
        if self._logger is None:
            return
        for handler in self._logger.handlers:
            handler.flush()

    def close(self) -> None:
        if self._logger is None:
            return
        for handler in self._logger.handlers:
            handler.flush()
            handler.close()
