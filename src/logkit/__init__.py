"""
logkit: structured multi-sink logging

Composes independent sinks (a rotating JSON-lines file, a colorized
console) behind one leveled logger handle, and keeps a replaceable
process-wide handle that is flushed whenever it is replaced.

Architecture Overview:
- logging: levels, encoders, sinks, tee and the logger slot
- config: environment-driven pydantic settings
- monitor: periodic health sampling and Prometheus exposition
- exceptions: the logkit error hierarchy
"""

__version__ = "0.1.0"

from .exceptions import ConfigurationError, FlushError, LogkitError, PanicError
from .logging import (
    Level,
    LoggerHandle,
    build_logger,
    flush,
    get_logger,
    install,
    logging_manager,
    new_logger,
    with_console_core,
    with_file_core,
    with_log_file_path,
    with_log_level,
    with_max_backups,
    with_rotate_settings,
)

__all__ = [
    "__version__",
    "Level",
    "LoggerHandle",
    "build_logger",
    "install",
    "get_logger",
    "flush",
    "new_logger",
    "logging_manager",
    "with_file_core",
    "with_console_core",
    "with_log_level",
    "with_log_file_path",
    "with_rotate_settings",
    "with_max_backups",
    "LogkitError",
    "ConfigurationError",
    "FlushError",
    "PanicError",
]
