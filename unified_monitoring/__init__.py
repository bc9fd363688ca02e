"""
unified-monitoring: one configuration surface and one lifecycle for
structured logging, distributed tracing and metrics.
"""

from unified_monitoring.core.config import (
    ConfigMutator,
    Settings,
    default_config,
    load_settings,
    resolve,
    with_environment,
    with_instance,
    with_logger_level,
    with_logger_output_path,
    with_metric_insecure,
    with_metric_interval,
    with_metric_provider,
    with_service_name,
    with_tracer_batch_timeout,
    with_tracer_insecure,
    with_tracer_provider,
    with_tracer_sample_ratio,
)
from unified_monitoring.core.errors import (
    BackendError,
    ConfigFileError,
    ConfigurationMissingError,
    InvalidFieldError,
    InvalidProviderError,
    LoggerInvalidLogLevelError,
    MetricIntervalInvalidError,
    MetricInvalidProviderError,
    MetricProviderHostRequiredError,
    MetricProviderPortInvalidError,
    MetricProviderPortRequiredError,
    MonitoringError,
    ServiceNameRequiredError,
    ShutdownError,
    TracerBatchTimeoutInvalidError,
    TracerInvalidProviderError,
    TracerProviderHostRequiredError,
    TracerProviderPortInvalidError,
    TracerProviderPortRequiredError,
    map_error,
)
from unified_monitoring.core.monitoring import (
    Monitoring,
    new_logger,
    new_metric,
    new_monitoring,
    new_tracer,
)
from unified_monitoring.core.propagation import Carrier, TraceContextCarrier
from unified_monitoring.core.sampling import select_sampler
from unified_monitoring.models.schemas import MonitoringConfig

__version__ = "1.0.0"

__all__ = [
    "BackendError",
    "Carrier",
    "ConfigFileError",
    "ConfigMutator",
    "ConfigurationMissingError",
    "InvalidFieldError",
    "InvalidProviderError",
    "LoggerInvalidLogLevelError",
    "MetricIntervalInvalidError",
    "MetricInvalidProviderError",
    "MetricProviderHostRequiredError",
    "MetricProviderPortInvalidError",
    "MetricProviderPortRequiredError",
    "Monitoring",
    "MonitoringConfig",
    "MonitoringError",
    "ServiceNameRequiredError",
    "Settings",
    "ShutdownError",
    "TraceContextCarrier",
    "TracerBatchTimeoutInvalidError",
    "TracerInvalidProviderError",
    "TracerProviderHostRequiredError",
    "TracerProviderPortInvalidError",
    "TracerProviderPortRequiredError",
    "default_config",
    "load_settings",
    "map_error",
    "new_logger",
    "new_metric",
    "new_monitoring",
    "new_tracer",
    "resolve",
    "select_sampler",
    "with_environment",
    "with_instance",
    "with_logger_level",
    "with_logger_output_path",
    "with_metric_insecure",
    "with_metric_interval",
    "with_metric_provider",
    "with_service_name",
    "with_tracer_batch_timeout",
    "with_tracer_insecure",
    "with_tracer_provider",
    "with_tracer_sample_ratio",
]
