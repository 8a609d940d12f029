"""
LoggerHandle: the leveled write API callers log through.

Wraps a TeeLogger with bound fields, an optional name and the caller /
stack-trace policy. Handles are cheap: with_fields() and named() return
new handles sharing the same sinks.
"""

import logging
import sys
from typing import Any, Callable, Dict, Optional

from ..constants import FATAL_EXIT_CODE
from ..exceptions import PanicError
from .levels import Level, LevelLike, parse_level
from .tee import TeeLogger

logger = logging.getLogger(__name__)

# Frames between the application's call site and logging.Logger.log:
# the public method (info(), log(), ...) and _log().
CALLER_SKIP = 2


def _exit(code: int) -> None:
    sys.exit(code)


class LoggerHandle:
    """Structured, leveled logger over a set of sinks."""

    def __init__(
        self,
        tee: TeeLogger,
        fields: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        caller_skip: int = 0,
        stacktrace_level: LevelLike = Level.ERROR,
        fatal_hook: Optional[Callable[[int], None]] = None,
    ):
        self.tee = tee
        self.fields = dict(fields or {})
        self.name = name
        self.caller_skip = caller_skip
        self.stacktrace_level = parse_level(stacktrace_level)
        self.fatal_hook = fatal_hook or _exit

    def _clone(self, **changes) -> "LoggerHandle":
        params = {
            "fields": self.fields,
            "name": self.name,
            "caller_skip": self.caller_skip,
            "stacktrace_level": self.stacktrace_level,
            "fatal_hook": self.fatal_hook,
        }
        params.update(changes)
        return LoggerHandle(self.tee, **params)

    def _log(self, level: int, msg: Any, args: tuple, fields: Dict[str, Any]) -> None:
        if not self.tee.isEnabledFor(level):
            return

        exc_info = fields.pop("exc_info", None)
        extra = {"fields": {**self.fields, **fields}}
        if self.name:
            extra["logger_name"] = self.name

        self.tee.log(
            level,
            msg,
            *args,
            exc_info=exc_info,
            extra=extra,
            stack_info=level >= self.stacktrace_level,
            stacklevel=CALLER_SKIP + 1 + self.caller_skip,
        )

    def log(self, level: LevelLike, msg: Any, /, *args, **fields) -> None:
        """Write ``msg`` at ``level`` with optional key-value fields."""
        self._log(parse_level(level), msg, args, fields)

    def debug(self, msg: Any, /, *args, **fields) -> None:
        self._log(Level.DEBUG, msg, args, fields)

    def info(self, msg: Any, /, *args, **fields) -> None:
        self._log(Level.INFO, msg, args, fields)

    def warn(self, msg: Any, /, *args, **fields) -> None:
        self._log(Level.WARN, msg, args, fields)

    def warning(self, msg: Any, /, *args, **fields) -> None:
        self._log(Level.WARN, msg, args, fields)

    def error(self, msg: Any, /, *args, **fields) -> None:
        self._log(Level.ERROR, msg, args, fields)

    def exception(self, msg: Any, /, *args, **fields) -> None:
        """Log at error level with the exception currently being handled."""
        fields.setdefault("exc_info", True)
        self._log(Level.ERROR, msg, args, fields)

    def dpanic(self, msg: Any, /, *args, **fields) -> None:
        self._log(Level.DPANIC, msg, args, fields)

    def panic(self, msg: Any, /, *args, **fields) -> None:
        """Log at panic level, then raise PanicError."""
        self._log(Level.PANIC, msg, args, fields)
        raise PanicError(str(msg) % args if args else str(msg))

    def fatal(self, msg: Any, /, *args, **fields) -> None:
        """Log at fatal level, flush every sink, then call the fatal hook."""
        self._log(Level.FATAL, msg, args, fields)
        try:
            self.tee.flush()
        except Exception as e:
            logger.debug(f"Ignoring flush failure before fatal exit: {e}")
        self.fatal_hook(FATAL_EXIT_CODE)

    def enabled(self, level: LevelLike) -> bool:
        """True when at least one sink would accept ``level``."""
        return self.tee.enabled(parse_level(level))

    def with_fields(self, /, **fields) -> "LoggerHandle":
        """Handle that adds ``fields`` to every record."""
        return self._clone(fields={**self.fields, **fields})

    def named(self, name: str) -> "LoggerHandle":
        """Handle whose records carry a dotted logger name."""
        full_name = f"{self.name}.{name}" if self.name else name
        return self._clone(name=full_name)

    def with_caller_skip(self, skip: int) -> "LoggerHandle":
        """Handle for use behind ``skip`` additional wrapper frames."""
        return self._clone(caller_skip=self.caller_skip + skip)

    def flush(self) -> None:
        """Flush all sinks; raises FlushError if any of them fails."""
        self.tee.flush()

    def sync(self) -> None:
        self.flush()

    def close(self) -> None:
        self.tee.close()
