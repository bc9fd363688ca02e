"""
Default backend implementations for unified-monitoring.
"""

from .json_logger import JSONLogger
from .otel_tracer import OTelTracer
from .otel_metric import OTelMetric

__all__ = [
    "JSONLogger",
    "OTelTracer",
    "OTelMetric",
]
