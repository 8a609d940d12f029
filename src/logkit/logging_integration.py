"""
Integration between logkit settings and the logger slot.

Turns LogkitSettings (usually read from ``LOGKIT_*`` environment
variables) into an installed LoggerHandle, and starts the health monitor
when metrics are enabled.
"""

import logging
from typing import Optional

from .config import LogkitSettings
from .exceptions import NoValidSinksError
from .logging import LoggerHandle, LoggingManager, logging_manager
from .monitor import HealthMonitor, initialize_metrics

logger = logging.getLogger(__name__)

# Global state
_logging_configured = False
_current_settings: Optional[LogkitSettings] = None
_health_monitor: Optional[HealthMonitor] = None


def configure_logging_from_settings(
    settings: Optional[LogkitSettings] = None,
    manager: Optional[LoggingManager] = None,
) -> LoggerHandle:
    """Build and install a logger from settings.

    Raises:
        NoValidSinksError: the settings enable neither the console nor
            the file sink
        ConfigurationError: the enabled sinks cannot be built
    """
    global _logging_configured, _current_settings

    settings = settings if settings is not None else LogkitSettings()
    manager = manager if manager is not None else logging_manager

    builders = settings.sink_builders()
    if not builders:
        raise NoValidSinksError(0)

    handle = manager.build_logger(*builders)
    _logging_configured = True
    _current_settings = settings

    _restart_health_monitor(settings, handle)
    return handle


def _stop_health_monitor() -> None:
    global _health_monitor

    if _health_monitor is not None:
        _health_monitor.stop()
        if _health_monitor.metrics is not None:
            _health_monitor.metrics.stop_metrics_server()
        _health_monitor = None


def _restart_health_monitor(settings: LogkitSettings, handle: LoggerHandle) -> None:
    global _health_monitor

    _stop_health_monitor()

    if not settings.metrics.enabled:
        return

    metrics = initialize_metrics(settings.metrics.port, settings.metrics.addr)
    _health_monitor = HealthMonitor(handle, metrics, settings.metrics.sample_interval)
    _health_monitor.start()


def ensure_logging_configured(manager: Optional[LoggingManager] = None) -> LoggerHandle:
    """Configure from the environment unless a logger is already installed."""
    manager = manager if manager is not None else logging_manager

    if manager.handle is not None:
        return manager.handle
    return configure_logging_from_settings(manager=manager)


def get_logger(name: Optional[str] = None) -> LoggerHandle:
    """Installed handle (configured on first use), optionally named."""
    handle = ensure_logging_configured()
    return handle.named(name) if name else handle


def reconfigure_if_changed(settings: LogkitSettings) -> LoggerHandle:
    """Reinstall the logger only when the settings differ from the last ones."""
    if not _logging_configured or _current_settings is None:
        return configure_logging_from_settings(settings)

    if settings == _current_settings and logging_manager.handle is not None:
        logger.debug("Logging settings unchanged; keeping current logger")
        return logging_manager.handle

    return configure_logging_from_settings(settings)


def shutdown() -> None:
    """Stop the health monitor and flush the installed logger."""
    _stop_health_monitor()
    logging_manager.flush()
