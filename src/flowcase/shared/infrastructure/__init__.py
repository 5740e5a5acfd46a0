"""
Shared infrastructure components for flowcase.

Currently limited to monitoring: logging setup and metrics collection.
"""

from .monitoring.logger import get_logger, setup_logging
from .monitoring.metrics import MetricsCollector, get_metrics, timed_operation

__all__ = [
    "get_logger",
    "setup_logging",
    "MetricsCollector",
    "get_metrics",
    "timed_operation",
]
