"""
Metric capability interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from opentelemetry.metrics import Counter, Histogram
from opentelemetry.util.types import Attributes


class Metric(ABC):
    """Abstract base class for metric collectors."""

    @abstractmethod
    def create_counter(self, name: str, unit: str = "", description: str = "") -> Counter:
        """
        Create a monotonically increasing counter.

        Args:
            name: Instrument name, e.g. "http_requests_total"
            unit: Unit of measurement, e.g. "1" or "bytes"
            description: Human-readable description

        Returns:
            The counter instrument

        Raises:
            ValueError: If the instrument cannot be created
        """
        pass

    @abstractmethod
    def record_counter(self, counter: Counter, value: int, attributes: Attributes = None) -> None:
        pass

    @abstractmethod
    def create_histogram(self, name: str, unit: str = "", description: str = "") -> Histogram:
        """Create a histogram for value distributions such as latencies."""
        pass

    @abstractmethod
    def record_histogram(self, histogram: Histogram, value: float, attributes: Attributes = None) -> None:
        pass

    @abstractmethod
    def shutdown(self, timeout: Optional[float] = None) -> None:
        """
        Export pending metrics and release exporter resources.

        Args:
            timeout: Seconds to wait for the final export (backend default if None)
        """
        pass
