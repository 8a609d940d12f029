"""
Base exception classes for logkit.

Provides the foundational LogkitError class that all other exceptions inherit from.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ExceptionContext:
    """Context information for logkit exceptions."""

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)
    technical_details: Optional[str] = None


class LogkitError(Exception):
    """Base exception for all logkit errors.

    Attributes:
        message: The error message
        help_text: Optional actionable guidance for the caller
        error_code: Optional error code for programmatic handling
        context: Additional context information
        technical_details: Technical information for debugging
    """

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        self.message = message

        if context is not None:
            self.help_text = context.help_text
            self.error_code = context.error_code
            self.context = context.context
            self.technical_details = context.technical_details
        else:
            self.help_text = None
            self.error_code = None
            self.context = {}
            self.technical_details = None

        self.timestamp = datetime.now()
        super().__init__(message)

    def __str__(self) -> str:
        result = self.message

        if self.help_text:
            result += f"\n\n💡 Help: {self.help_text}"

        if self.context:
            context_items = [
                f"{k}: {v}" for k, v in self.context.items() if v is not None
            ]
            if context_items:
                result += f"\n\n📋 Context: {', '.join(context_items)}"

        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "help_text": self.help_text,
            "technical_details": self.technical_details,
        }

    def add_context(self, **kwargs) -> "LogkitError":
        """Add additional context to the exception."""
        self.context.update(kwargs)
        return self
