"""
logkit Exception Hierarchy

Exception Hierarchy:
    LogkitError (base)
    ├── ConfigurationError
    │   ├── NoValidSinksError
    │   ├── InvalidConfigurationError
    │   └── LogDirectoryError
    ├── SinkError
    │   └── FlushError
    └── PanicError

Only configuration errors are raised while building a logger. Write
failures are absorbed by the sinks themselves.
"""

from .base import ExceptionContext, LogkitError
from .config import (
    ConfigurationError,
    InvalidConfigurationError,
    LogDirectoryError,
    NoValidSinksError,
)
from .sinks import FlushError, PanicError, SinkError

__all__ = [
    # Base
    "LogkitError",
    "ExceptionContext",
    # Configuration
    "ConfigurationError",
    "NoValidSinksError",
    "InvalidConfigurationError",
    "LogDirectoryError",
    # Sinks
    "SinkError",
    "FlushError",
    "PanicError",
]
