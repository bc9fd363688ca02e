"""
Component initializers.

Each initializer builds one backend from a configuration snapshot and maps
any failure into the public error taxonomy. No handle is returned when an
error is raised.
"""

from unified_monitoring.adapters import Logger, Metric, Tracer
from unified_monitoring.adapters.impl import JSONLogger, OTelMetric, OTelTracer
from unified_monitoring.core.errors import map_error
from unified_monitoring.core.sampling import select_sampler
from unified_monitoring.models.schemas import MonitoringConfig


def init_logger(config: MonitoringConfig) -> Logger:
    """
    Build the structured logger.

    Raises:
        LoggerInvalidLogLevelError: If the level cannot be parsed
        BackendError: If the output cannot be opened
    """
    try:
        return JSONLogger(
            level=config.logger_level,
            output_path=config.logger_output_path,
            name=config.service_name or "unified_monitoring.app"
        )
    except Exception as e:
        raise map_error(e, "failed to initialize logger")


def init_tracer(config: MonitoringConfig) -> Tracer:
    """
    Build the tracer with the sampler derived from the sample ratio.

    Raises:
        InvalidProviderError: For an unsupported provider
        InvalidFieldError: For a missing or invalid host, port or batch timeout
        BackendError: If the exporter cannot be built
    """
    try:
        return OTelTracer(
            service_name=config.service_name,
            environment=config.environment,
            instance_name=config.instance_name,
            instance_host=config.instance_host,
            provider=config.tracer_provider,
            provider_host=config.tracer_provider_host,
            provider_port=config.tracer_provider_port,
            sampler=select_sampler(config.tracer_sample_ratio),
            batch_timeout=config.tracer_batch_timeout,
            insecure=config.tracer_insecure
        )
    except Exception as e:
        raise map_error(e, "failed to initialize tracer")


def init_metric(config: MonitoringConfig) -> Metric:
    """
    Build the metric collector.

    Raises:
        InvalidProviderError: For an unsupported provider
        InvalidFieldError: For a missing or invalid host, port or interval
        BackendError: If the exporter or scrape endpoint cannot be started
    """
    try:
        return OTelMetric(
            service_name=config.service_name,
            environment=config.environment,
            instance_name=config.instance_name,
            instance_host=config.instance_host,
            provider=config.metric_provider,
            provider_host=config.metric_provider_host,
            provider_port=config.metric_provider_port,
            interval=config.metric_interval,
            insecure=config.metric_insecure
        )
    except Exception as e:
        raise map_error(e, "failed to initialize metric")
