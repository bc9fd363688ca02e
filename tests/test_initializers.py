"""
Tests for component initializers.
"""

import pytest
from unittest.mock import patch
from opentelemetry.sdk.trace.sampling import ALWAYS_OFF, TraceIdRatioBased

from unified_monitoring.adapters import Logger, Metric, Tracer
from unified_monitoring.adapters.impl import json_logger
from unified_monitoring.core.config import (
    resolve,
    with_fields,
    with_logger_level,
    with_logger_output_path,
    with_metric_interval,
    with_metric_provider,
    with_service_name,
    with_tracer_batch_timeout,
    with_tracer_provider,
    with_tracer_sample_ratio,
)
from unified_monitoring.core.errors import (
    BackendError,
    LoggerInvalidLogLevelError,
    MetricIntervalInvalidError,
    MetricInvalidProviderError,
    MetricProviderHostRequiredError,
    MetricProviderPortRequiredError,
    TracerBatchTimeoutInvalidError,
    TracerInvalidProviderError,
    TracerProviderHostRequiredError,
    TracerProviderPortInvalidError,
    TracerProviderPortRequiredError,
)
from unified_monitoring.core.initializers import init_logger, init_metric, init_tracer


def config_with(*mutators):
    return resolve([with_service_name("svc")] + list(mutators))


class TestInitLogger:
    """Test logger initialization."""

    def test_default_logger(self):
        assert isinstance(init_logger(config_with()), Logger)

    def test_invalid_level(self):
        with pytest.raises(LoggerInvalidLogLevelError) as exc_info:
            init_logger(config_with(with_logger_level("loud")))

        assert isinstance(exc_info.value.__cause__, json_logger.InvalidLogLevel)

    def test_unwritable_output_path(self, tmp_path):
        path = str(tmp_path / "missing" / "service.log")

        with pytest.raises(BackendError) as exc_info:
            init_logger(config_with(with_logger_output_path(path)))

        assert str(exc_info.value).startswith("failed to initialize logger: ")
        assert isinstance(exc_info.value.__cause__, OSError)


class TestInitTracer:
    """Test tracer initialization."""

    def test_default_tracer(self):
        tracer = init_tracer(config_with())

        assert isinstance(tracer, Tracer)
        tracer.shutdown()

    @pytest.mark.parametrize("mutator,error", [
        (with_tracer_provider("bogus"), TracerInvalidProviderError),
        (with_tracer_provider("otlp", port=4317), TracerProviderHostRequiredError),
        (with_tracer_provider("otlp", "collector"), TracerProviderPortRequiredError),
        (with_tracer_provider("otlp", "collector", -1), TracerProviderPortInvalidError),
        (with_tracer_batch_timeout(0), TracerBatchTimeoutInvalidError),
    ])
    def test_invalid_options(self, mutator, error):
        with pytest.raises(error):
            init_tracer(config_with(mutator))

    def test_sampler_from_ratio(self):
        with patch("unified_monitoring.core.initializers.OTelTracer") as mock_tracer:
            init_tracer(config_with(with_tracer_sample_ratio(0.0)))
            assert mock_tracer.call_args.kwargs["sampler"] is ALWAYS_OFF

            init_tracer(config_with(with_tracer_sample_ratio(0.25)))
            assert isinstance(mock_tracer.call_args.kwargs["sampler"], TraceIdRatioBased)

    def test_unexpected_backend_failure(self):
        with patch(
            "unified_monitoring.core.initializers.OTelTracer",
            side_effect=RuntimeError("exporter unavailable")
        ):
            with pytest.raises(BackendError) as exc_info:
                init_tracer(config_with())

        assert str(exc_info.value) == "failed to initialize tracer: exporter unavailable"
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestInitMetric:
    """Test metric initialization."""

    def test_default_metric(self):
        metric = init_metric(config_with())

        assert isinstance(metric, Metric)
        metric.shutdown()

    @pytest.mark.parametrize("mutator,error", [
        (with_metric_provider("bogus"), MetricInvalidProviderError),
        (with_metric_provider("otlp", port=4317), MetricProviderHostRequiredError),
        (with_metric_provider("prometheus"), MetricProviderPortRequiredError),
        (with_metric_interval(0), MetricIntervalInvalidError),
    ])
    def test_invalid_options(self, mutator, error):
        with pytest.raises(error):
            init_metric(config_with(mutator))

    def test_server_start_failure_is_wrapped(self):
        with patch(
            "unified_monitoring.adapters.impl.otel_metric.start_http_server",
            side_effect=OSError("address already in use")
        ):
            with pytest.raises(BackendError) as exc_info:
                init_metric(config_with(with_fields(metric_provider="prometheus", metric_provider_port=9464)))

        assert "address already in use" in str(exc_info.value)
