"""
Capability interfaces for unified-monitoring backends.
"""

from .logger import Logger
from .tracer import Tracer
from .metric import Metric

__all__ = [
    "Logger",
    "Tracer",
    "Metric",
]
