"""
Sink and write-path exceptions.
"""

from typing import List

from .base import ExceptionContext, LogkitError


class SinkError(LogkitError):
    """Base class for errors raised by sinks."""
    pass


class FlushError(SinkError):
    """Raised when one or more sinks fail to flush."""

    def __init__(self, errors: List[BaseException]):
        self.errors = list(errors)
        message = f"failed to flush {len(self.errors)} sink(s):"
        for error in self.errors:
            message += f"\n  - {type(error).__name__}: {error}"
        context = ExceptionContext(error_code="SINK_FLUSH")
        super().__init__(message, context)


class PanicError(LogkitError):
    """Raised by LoggerHandle.panic() after the record has been written."""

    def __init__(self, message: str):
        super().__init__(message, ExceptionContext(error_code="LOG_PANIC"))
