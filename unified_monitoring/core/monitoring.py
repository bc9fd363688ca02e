"""
Lifecycle orchestration for the logger, tracer and metric components.

Components are initialized in a fixed order (logger, tracer, metric). If a
later component fails, the ones already built are torn down in reverse order
before the error is raised, so either a complete ``Monitoring`` handle exists
or nothing does.
"""

import logging
from typing import Optional
from unified_monitoring.adapters import Logger, Metric, Tracer
from unified_monitoring.core.config import ConfigMutator, resolve
from unified_monitoring.core.errors import ServiceNameRequiredError, ShutdownError
from unified_monitoring.core.initializers import init_logger, init_metric, init_tracer
from unified_monitoring.models.schemas import MonitoringConfig

logger = logging.getLogger(__name__)


class Monitoring:
    """Aggregate handle owning one logger, one tracer and one metric collector."""

    def __init__(self, logger: Logger, tracer: Tracer, metric: Metric):
        self.logger = logger
        self.tracer = tracer
        self.metric = metric

    @classmethod
    def create(cls, *mutators: ConfigMutator) -> "Monitoring":
        """Resolve configuration from mutators and initialize all components."""
        return cls.from_config(resolve(mutators))

    @classmethod
    def from_config(cls, config: MonitoringConfig) -> "Monitoring":
        """
        Initialize all components from a resolved snapshot.

        Args:
            config: The resolved configuration

        Returns:
            A fully initialized Monitoring handle

        Raises:
            ServiceNameRequiredError: If no service name is configured
            MonitoringError: The mapped error of the first component that failed
        """
        if not config.service_name:
            raise ServiceNameRequiredError()

        log = init_logger(config)

        try:
            tracer = init_tracer(config)
        except Exception:
            _best_effort("flush logger", log.flush)
            _best_effort("close logger", log.close)
            raise

        try:
            metric = init_metric(config)
        except Exception:
            _best_effort("shutdown tracer", tracer.shutdown)
            _best_effort("flush logger", log.flush)
            _best_effort("close logger", log.close)
            raise

        logger.info(
            "Monitoring initialized",
            extra={
                "service_name": config.service_name,
                "tracer_provider": config.tracer_provider,
                "metric_provider": config.metric_provider,
            }
        )
        return cls(log, tracer, metric)

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """
        Shut down the tracer, then the metric collector, then close the log output.

        Stops at the first failure; the metric collector is not touched when
        the tracer fails and the logger stays open when either fails.

        Args:
            timeout: Seconds each component may spend flushing (backend default if None)

        Raises:
            ShutdownError: Naming the component that failed, with its error as cause
        """
        try:
            self.tracer.shutdown(timeout)
        except Exception as e:
            raise ShutdownError(f"failed to shutdown tracer: {e}") from e

        try:
            self.metric.shutdown(timeout)
        except Exception as e:
            raise ShutdownError(f"failed to shutdown metric: {e}") from e

        try:
            self.logger.close()
        except Exception as e:
            raise ShutdownError(f"failed to close logger: {e}") from e

        logger.debug("Monitoring shut down")

    def flush(self) -> None:
        """Flush buffered log entries."""
        self.logger.flush()

    def __enter__(self) -> "Monitoring":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


def _best_effort(action: str, cleanup) -> None:
    """Run a rollback step; its failure is recorded and discarded."""
    try:
        cleanup()
    except Exception as e:
        logger.debug(f"Rollback step failed: {action}", extra={"error": str(e)})


def new_monitoring(*mutators: ConfigMutator) -> Monitoring:
    """Create a Monitoring handle from configuration mutators."""
    return Monitoring.create(*mutators)


def new_logger(*mutators: ConfigMutator) -> Logger:
    """Create a standalone logger."""
    return init_logger(resolve(mutators))


def new_tracer(*mutators: ConfigMutator) -> Tracer:
    """Create a standalone tracer."""
    return init_tracer(resolve(mutators))


def new_metric(*mutators: ConfigMutator) -> Metric:
    """Create a standalone metric collector."""
    return init_metric(resolve(mutators))
