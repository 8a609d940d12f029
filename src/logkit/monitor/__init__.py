"""
Process health monitoring and Prometheus exposition.
"""

from .health import HealthMonitor, HealthSample, take_sample
from .prometheus_metrics import LogkitMetrics, initialize_metrics

__all__ = [
    "HealthMonitor",
    "HealthSample",
    "take_sample",
    "LogkitMetrics",
    "initialize_metrics",
]
