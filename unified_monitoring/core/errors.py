"""
Public error taxonomy for unified-monitoring.

Every error the library raises is a ``MonitoringError``. Callers match on the
class (``except TracerInvalidProviderError``), never on the message text.
Errors coming from a backend are translated by ``map_error``: known backend
errors become the matching public class, anything else is wrapped in a
``BackendError`` whose ``__cause__`` is the original exception.
"""

from typing import Dict, Optional, Type
from unified_monitoring.adapters.impl import json_logger, otel_metric, otel_tracer


class MonitoringError(Exception):
    """Base class for all unified-monitoring errors."""

    default_message = "monitoring error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class ConfigurationMissingError(MonitoringError):
    """A required configuration field is absent."""

    default_message = "required configuration is missing"


class ServiceNameRequiredError(ConfigurationMissingError):
    default_message = "service name is required"


class InvalidProviderError(MonitoringError):
    """Unsupported provider kind for a subsystem."""

    default_message = "invalid provider"


class TracerInvalidProviderError(InvalidProviderError):
    default_message = "tracer: invalid provider"


class MetricInvalidProviderError(InvalidProviderError):
    default_message = "metric: invalid provider"


class InvalidFieldError(MonitoringError):
    """A configuration field is outside its contract."""

    default_message = "invalid configuration field"


class LoggerInvalidLogLevelError(InvalidFieldError):
    default_message = "logger: invalid log level"


class TracerProviderHostRequiredError(InvalidFieldError):
    default_message = "tracer: provider host is required"


class TracerProviderPortRequiredError(InvalidFieldError):
    default_message = "tracer: provider port is required"


class TracerProviderPortInvalidError(InvalidFieldError):
    default_message = "tracer: provider port must be greater than 0"


class TracerBatchTimeoutInvalidError(InvalidFieldError):
    default_message = "tracer: batch timeout must be greater than 0"


class MetricProviderHostRequiredError(InvalidFieldError):
    default_message = "metric: provider host is required"


class MetricProviderPortRequiredError(InvalidFieldError):
    default_message = "metric: provider port is required"


class MetricProviderPortInvalidError(InvalidFieldError):
    default_message = "metric: provider port must be greater than 0"


class MetricIntervalInvalidError(InvalidFieldError):
    default_message = "metric: interval must be greater than 0"


class ConfigFileError(InvalidFieldError):
    """Settings file or environment values could not be loaded."""

    default_message = "invalid monitoring settings"


class BackendError(MonitoringError):
    """Opaque failure from a backend while building its resources."""

    default_message = "backend error"


class ShutdownError(MonitoringError):
    """A component failed to shut down."""

    default_message = "shutdown failed"


# Backend error -> public error
_KNOWN_ERRORS: Dict[Type[BaseException], Type[MonitoringError]] = {
    json_logger.InvalidLogLevel: LoggerInvalidLogLevelError,
    otel_tracer.InvalidProvider: TracerInvalidProviderError,
    otel_tracer.ProviderHostRequired: TracerProviderHostRequiredError,
    otel_tracer.ProviderPortRequired: TracerProviderPortRequiredError,
    otel_tracer.ProviderPortInvalid: TracerProviderPortInvalidError,
    otel_tracer.BatchTimeoutInvalid: TracerBatchTimeoutInvalidError,
    otel_metric.InvalidProvider: MetricInvalidProviderError,
    otel_metric.ProviderHostRequired: MetricProviderHostRequiredError,
    otel_metric.ProviderPortRequired: MetricProviderPortRequiredError,
    otel_metric.ProviderPortInvalid: MetricProviderPortInvalidError,
    otel_metric.IntervalInvalid: MetricIntervalInvalidError,
}


def map_error(err: Optional[BaseException], message: str) -> MonitoringError:
    """
    Map a backend error to the public error taxonomy.

    Args:
        err: The error raised by a backend (may be None)
        message: Context prefix for errors that are not recognized

    Returns:
        The matching public error for known backend errors, otherwise a
        BackendError reading ``"<message>: <err>"`` with ``err`` as its cause
    """
    if err is None:
        return MonitoringError(f"{message}: unknown error")

    if isinstance(err, MonitoringError):
        return err

    for backend_error, public_error in _KNOWN_ERRORS.items():
        if isinstance(err, backend_error):
            mapped = public_error()
            mapped.__cause__ = err
            return mapped

    wrapped = BackendError(f"{message}: {err}")
    wrapped.__cause__ = err
    return wrapped
