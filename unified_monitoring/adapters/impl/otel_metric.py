"""
OpenTelemetry SDK meter with console, OTLP and Prometheus exporters.
"""

import logging
from typing import Optional
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.metrics import Counter, Histogram
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.util.types import Attributes
from prometheus_client import start_http_server
from unified_monitoring.adapters.metric import Metric
from unified_monitoring.adapters.impl.resource import build_resource

logger = logging.getLogger(__name__)

PROVIDERS = ("stdout", "otlp", "prometheus")

DEFAULT_PROMETHEUS_HOST = "0.0.0.0"

DEFAULT_SHUTDOWN_TIMEOUT = 30.0


class MetricBackendError(Exception):
    """Base class for metric backend errors."""


class InvalidProvider(MetricBackendError):
    pass


class ProviderHostRequired(MetricBackendError):
    pass


class ProviderPortRequired(MetricBackendError):
    pass


class ProviderPortInvalid(MetricBackendError):
    pass


class IntervalInvalid(MetricBackendError):
    pass


def validate_options(provider: str, host: str, port: int, interval: float) -> None:
    """
    Check metric options before any exporter is built.

    ``otlp`` needs a host and a port. ``prometheus`` only needs the port the
    scrape endpoint listens on.

    Raises:
        MetricBackendError: The subclass naming the offending option
    """
    if provider not in PROVIDERS:
        raise InvalidProvider(f"unsupported metric provider: {provider!r}")

    if provider == "otlp" and not host:
        raise ProviderHostRequired("otlp metric provider requires a host")

    if provider in ("otlp", "prometheus"):
        if port == 0:
            raise ProviderPortRequired(f"{provider} metric provider requires a port")
        if port < 0:
            raise ProviderPortInvalid(f"invalid metric provider port: {port}")

    if not interval > 0:
        raise IntervalInvalid(f"invalid metric interval: {interval}")


class OTelMetric(Metric):
    """Metric collector backed by its own SDK ``MeterProvider``."""

    def __init__(
        self,
        service_name: str,
        environment: str = "",
        instance_name: str = "",
        instance_host: str = "",
        provider: str = "stdout",
        provider_host: str = "",
        provider_port: int = 0,
        interval: float = 60.0,
        insecure: bool = False
    ):
        validate_options(provider, provider_host, provider_port, interval)

        self._server = None
        reader: MetricReader
        if provider == "prometheus":
            reader = PrometheusMetricReader()
        else:
            exporter: MetricExporter
            if provider == "otlp":
                exporter = OTLPMetricExporter(
                    endpoint=f"{provider_host}:{provider_port}",
                    insecure=insecure
                )
            else:
                exporter = ConsoleMetricExporter()
            reader = PeriodicExportingMetricReader(
                exporter,
                export_interval_millis=interval * 1000
            )

        self._provider = MeterProvider(
            resource=build_resource(service_name, environment, instance_name, instance_host),
            metric_readers=[reader]
        )

        if provider == "prometheus":
            try:
                self._server, _ = start_http_server(
                    provider_port,
                    addr=provider_host or DEFAULT_PROMETHEUS_HOST
                )
            except Exception:
                self._provider.shutdown()
                raise
            logger.info(
                "Prometheus metrics endpoint started",
                extra={"host": provider_host or DEFAULT_PROMETHEUS_HOST, "port": provider_port}
            )

        self._meter = self._provider.get_meter(service_name)
        self._is_shutdown = False

    @property
    def provider(self) -> MeterProvider:
        return self._provider

    def create_counter(self, name: str, unit: str = "", description: str = "") -> Counter:
        try:
            return self._meter.create_counter(name, unit=unit, description=description)
        except Exception as e:
            raise ValueError(f"failed to create counter: {e}") from e

    def record_counter(self, counter: Counter, value: int, attributes: Attributes = None) -> None:
        counter.add(value, attributes=attributes)

    def create_histogram(self, name: str, unit: str = "", description: str = "") -> Histogram:
        try:
            return self._meter.create_histogram(name, unit=unit, description=description)
        except Exception as e:
            raise ValueError(f"failed to create histogram: {e}") from e

    def record_histogram(self, histogram: Histogram, value: float, attributes: Attributes = None) -> None:
        histogram.record(value, attributes=attributes)

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Export what is pending, stop the readers and close the scrape endpoint."""
        if self._is_shutdown:
            return

        if timeout is None:
            timeout = DEFAULT_SHUTDOWN_TIMEOUT
        self._provider.shutdown(timeout_millis=timeout * 1000)

        if self._server is not None:
            self._server.shutdown()
            self._server.server_close()
            self._server = None

        self._is_shutdown = True
