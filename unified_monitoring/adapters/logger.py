"""
Logger capability interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from opentelemetry.trace import SpanContext

Fields = Optional[Dict[str, Any]]


class Logger(ABC):
    """Abstract base class for structured loggers."""

    @abstractmethod
    def set_log_level(self, level: str) -> None:
        """
        Change the minimum level at runtime.

        Args:
            level: debug, info, warn, error or fatal. Invalid values fall
                back to info.
        """
        pass

    @abstractmethod
    def debug(self, message: str, fields: Fields = None) -> None:
        pass

    @abstractmethod
    def info(self, message: str, fields: Fields = None) -> None:
        pass

    @abstractmethod
    def warn(self, message: str, fields: Fields = None) -> None:
        pass

    @abstractmethod
    def error(self, message: str, fields: Fields = None) -> None:
        pass

    @abstractmethod
    def fatal(self, message: str, fields: Fields = None) -> None:
        """Log at fatal level, then exit the process with status 1."""
        pass

    @abstractmethod
    def with_span_context(self, span_context: SpanContext) -> "Logger":
        """
        Derive a logger that stamps trace and span ids on every entry.

        Args:
            span_context: The span context to correlate with

        Returns:
            A new Logger sharing this logger's output and level
        """
        pass

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered log entries. Safe to call on an unset logger."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush and release the log output. Safe to call more than once."""
        pass
