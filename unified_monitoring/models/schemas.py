"""
Pydantic models for unified-monitoring.
"""

from typing import Optional
from pydantic import BaseModel, Field


class MonitoringConfig(BaseModel):
    """
    Immutable configuration snapshot consumed by the component initializers.

    Instances are never modified in place: configuration mutators produce a
    new snapshot with ``model_copy(update=...)``. Numeric fields are not
    range-checked here; each initializer validates the fields it owns so the
    failure surfaces as the matching public error.
    """

    # Service identity
    service_name: str = ""
    environment: str = "development"
    instance_name: str = ""
    instance_host: str = ""

    # Logger
    logger_level: str = "info"
    logger_output_path: Optional[str] = ""

    # Tracer
    tracer_provider: str = "stdout"
    tracer_provider_host: str = ""
    tracer_provider_port: int = 0
    tracer_sample_ratio: float = 1.0
    tracer_batch_timeout: float = Field(default=5.0, description="Batch export timeout in seconds")
    tracer_insecure: bool = False

    # Metric
    metric_provider: str = "stdout"
    metric_provider_host: str = ""
    metric_provider_port: int = 0
    metric_interval: float = Field(default=60.0, description="Export interval in seconds")
    metric_insecure: bool = False

    class Config:
        frozen = True
