"""
logkit settings.

Environment-driven configuration of sinks and the health monitor.
"""

from .models import (
    ConsoleSinkSettings,
    FileSinkSettings,
    LogkitSettings,
    MetricsSettings,
    RotationSettings,
)

__all__ = [
    "LogkitSettings",
    "ConsoleSinkSettings",
    "FileSinkSettings",
    "RotationSettings",
    "MetricsSettings",
]
