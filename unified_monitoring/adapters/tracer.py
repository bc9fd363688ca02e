"""
Tracer capability interface.
"""

from abc import ABC, abstractmethod
from typing import ContextManager, Dict, List, Mapping, Optional, Sequence, Tuple
from opentelemetry.context import Context
from opentelemetry.trace import Span, SpanKind
from opentelemetry.util.types import Attributes


class Tracer(ABC):
    """Abstract base class for distributed tracers."""

    @abstractmethod
    def start_span(
        self,
        name: str,
        context: Optional[Context] = None,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Attributes = None
    ) -> Tuple[Context, Span]:
        """
        Start a span.

        Args:
            name: Span name, e.g. "handle-request"
            context: Parent context (current context if None)
            kind: Span kind
            attributes: Initial span attributes

        Returns:
            A context holding the new span, and the span itself
        """
        pass

    @abstractmethod
    def start_as_current_span(
        self,
        name: str,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Attributes = None
    ) -> ContextManager[Span]:
        """Start a span and make it current for the duration of a ``with`` block."""
        pass

    @abstractmethod
    def end_span(self, span: Span) -> None:
        pass

    @abstractmethod
    def start_child_span(
        self,
        context: Optional[Context],
        name: str,
        parent: Span
    ) -> Tuple[Context, Span]:
        """Start a span whose parent is ``parent`` regardless of the current span."""
        pass

    @abstractmethod
    def span_from_context(self, context: Optional[Context] = None) -> Span:
        """Return the span held by a context (an invalid span if there is none)."""
        pass

    @abstractmethod
    def inject_context(self, context: Optional[Context] = None) -> Dict[str, List[str]]:
        """Serialize the trace context into a carrier with lowercase keys."""
        pass

    @abstractmethod
    def extract_context(
        self,
        carrier: Optional[Mapping[str, Sequence[str]]],
        context: Optional[Context] = None
    ) -> Context:
        """Rebuild a trace context from a carrier."""
        pass

    @abstractmethod
    def shutdown(self, timeout: Optional[float] = None) -> None:
        """
        Flush pending spans and release exporter resources.

        Args:
            timeout: Seconds to wait for the flush (backend default if None)

        Raises:
            TimeoutError: If pending spans could not be flushed in time
        """
        pass
