"""
OpenTelemetry SDK tracer with console and OTLP span exporters.
"""

import logging
from typing import ContextManager, Mapping, Optional, Sequence, Tuple
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON, Sampler
from opentelemetry.trace import Span, SpanKind
from opentelemetry.util.types import Attributes
from unified_monitoring.adapters.tracer import Tracer
from unified_monitoring.adapters.impl.resource import build_resource
from unified_monitoring.core.propagation import Carrier, TraceContextCarrier

logger = logging.getLogger(__name__)

PROVIDERS = ("stdout", "otlp")

DEFAULT_SHUTDOWN_TIMEOUT = 30.0


class TracerBackendError(Exception):
    """Base class for tracer backend errors."""


class InvalidProvider(TracerBackendError):
    pass


class ProviderHostRequired(TracerBackendError):
    pass


class ProviderPortRequired(TracerBackendError):
    pass


class ProviderPortInvalid(TracerBackendError):
    pass


class BatchTimeoutInvalid(TracerBackendError):
    pass


def validate_options(provider: str, host: str, port: int, batch_timeout: float) -> None:
    """
    Check tracer options before any exporter is built.

    Raises:
        TracerBackendError: The subclass naming the offending option
    """
    if provider not in PROVIDERS:
        raise InvalidProvider(f"unsupported tracer provider: {provider!r}")

    if provider == "otlp":
        if not host:
            raise ProviderHostRequired("otlp tracer provider requires a host")
        if port == 0:
            raise ProviderPortRequired("otlp tracer provider requires a port")
        if port < 0:
            raise ProviderPortInvalid(f"invalid tracer provider port: {port}")

    if not batch_timeout > 0:
        raise BatchTimeoutInvalid(f"invalid tracer batch timeout: {batch_timeout}")


class OTelTracer(Tracer):
    """
    Tracer backed by its own SDK ``TracerProvider``.

    The provider is private to this handle; the global tracer provider is
    left untouched.
    """

    def __init__(
        self,
        service_name: str,
        environment: str = "",
        instance_name: str = "",
        instance_host: str = "",
        provider: str = "stdout",
        provider_host: str = "",
        provider_port: int = 0,
        sampler: Sampler = ALWAYS_ON,
        batch_timeout: float = 5.0,
        insecure: bool = False
    ):
        validate_options(provider, provider_host, provider_port, batch_timeout)

        exporter: SpanExporter
        if provider == "otlp":
            exporter = OTLPSpanExporter(
                endpoint=f"{provider_host}:{provider_port}",
                insecure=insecure
            )
        else:
            exporter = ConsoleSpanExporter(service_name=service_name)

        self._provider = TracerProvider(
            resource=build_resource(service_name, environment, instance_name, instance_host),
            sampler=sampler
        )
        self._provider.add_span_processor(
            BatchSpanProcessor(exporter, schedule_delay_millis=batch_timeout * 1000)
        )
        self._tracer = self._provider.get_tracer(service_name)
        self._carrier = TraceContextCarrier()
        self._is_shutdown = False

        logger.debug(
            "Tracer provider created",
            extra={"provider": provider, "service_name": service_name}
        )

    @property
    def provider(self) -> TracerProvider:
        return self._provider

    def start_span(
        self,
        name: str,
        context: Optional[Context] = None,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Attributes = None
    ) -> Tuple[Context, Span]:
        span = self._tracer.start_span(name, context=context, kind=kind, attributes=attributes)
        return trace.set_span_in_context(span, context), span

    def start_as_current_span(
        self,
        name: str,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Attributes = None
    ) -> ContextManager[Span]:
        return self._tracer.start_as_current_span(name, kind=kind, attributes=attributes)

    def end_span(self, span: Span) -> None:
        span.end()

    def start_child_span(
        self,
        context: Optional[Context],
        name: str,
        parent: Span
    ) -> Tuple[Context, Span]:
        return self.start_span(name, context=trace.set_span_in_context(parent, context))

    def span_from_context(self, context: Optional[Context] = None) -> Span:
        return trace.get_current_span(context)

    def inject_context(self, context: Optional[Context] = None) -> Carrier:
        return self._carrier.inject(context)

    def extract_context(
        self,
        carrier: Optional[Mapping[str, Sequence[str]]],
        context: Optional[Context] = None
    ) -> Context:
        return self._carrier.extract(carrier, context)

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """
        Flush pending spans and shut the provider down.

        Calling it again after a successful shutdown does nothing.

        Raises:
            TimeoutError: If the flush did not finish within ``timeout`` seconds
        """
        if self._is_shutdown:
            return

        if timeout is None:
            timeout = DEFAULT_SHUTDOWN_TIMEOUT
        if not self._provider.force_flush(int(timeout * 1000)):
            raise TimeoutError(f"tracer flush did not finish within {timeout}s")

        self._provider.shutdown()
        self._is_shutdown = True
