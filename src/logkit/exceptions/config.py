"""
Configuration-related exceptions.

Raised synchronously while building a logger; the only errors the
logging core ever hands back to its caller.
"""

from typing import Any, Optional

from .base import ExceptionContext, LogkitError


class ConfigurationError(LogkitError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        if context is None:
            context = ExceptionContext(error_code="CONFIG_ERROR")
        super().__init__(message, context)


class NoValidSinksError(ConfigurationError):
    """Raised when none of the supplied sink builders produced a sink."""

    def __init__(self, builder_count: int):
        self.builder_count = builder_count
        context = ExceptionContext(
            help_text="Pass at least one file or console sink builder that yields a sink",
            error_code="CONFIG_NO_SINKS",
            context={"builders": builder_count},
        )
        super().__init__("no valid log sinks were configured", context)


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = f"Invalid configuration for '{field}': got {repr(value)}, expected {expected}"
        context = ExceptionContext(
            help_text=f"Check the value for '{field}' and use one of: {expected}",
            error_code="CONFIG_INVALID",
        )
        super().__init__(message, context)


class LogDirectoryError(ConfigurationError):
    """Raised when the log directory cannot be created."""

    def __init__(self, directory: str, reason: str):
        self.directory = directory
        context = ExceptionContext(
            help_text="Make sure the parent directory exists and is writable",
            error_code="CONFIG_LOG_DIR",
            context={"directory": directory},
            technical_details=reason,
        )
        super().__init__(f"failed to create log directory: {reason}", context)
