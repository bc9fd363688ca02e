"""
Trace context propagation through flat string-keyed carriers.

A carrier maps a header name to a list of values, the shape of gRPC metadata
or multi-valued HTTP headers. Injected keys are always lowercase because some
transports canonicalize header case. On extraction only the first value of
each key is consulted.
"""

from typing import Dict, List, Mapping, Optional, Sequence
from opentelemetry.context import Context
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

Carrier = Dict[str, List[str]]


class TraceContextCarrier:
    """Adapter between an OpenTelemetry context and a multi-valued carrier."""

    def __init__(self, propagator: Optional[TextMapPropagator] = None):
        self.propagator = propagator or TraceContextTextMapPropagator()

    def inject(self, context: Optional[Context] = None) -> Carrier:
        """
        Write the propagation headers for a context.

        Args:
            context: Context holding the span to propagate (current context if None)

        Returns:
            Carrier with lowercase keys; empty if the context holds no valid span
        """
        headers: Dict[str, str] = {}
        self.propagator.inject(headers, context=context)

        carrier: Carrier = {}
        for key, value in headers.items():
            carrier.setdefault(key.lower(), []).append(value)
        return carrier

    def extract(
        self,
        carrier: Optional[Mapping[str, Sequence[str]]],
        context: Optional[Context] = None
    ) -> Context:
        """
        Build a context from a carrier.

        Args:
            carrier: Header name to values; extra values per key are ignored
            context: Base context to extend (current context if None)

        Returns:
            A new context; it carries no valid span if nothing was found
        """
        headers: Dict[str, str] = {}
        for key, values in (carrier or {}).items():
            if values:
                headers.setdefault(key.lower(), values[0])
        return self.propagator.extract(headers, context=context)
