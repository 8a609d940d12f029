"""
Log encoders for the different sink formats.

Provides JSON encoding for file sinks, colorized tab-separated rendering
for the console, and the small level/time/caller encoder functions an
EncoderConfig is assembled from.
"""

import json
import logging
import os
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..constants import ANSI_CYAN, ANSI_RESET, MILLIS_TIME_FORMAT
from .levels import Level, level_name

if TYPE_CHECKING:
    from .config import EncoderConfig


# Fixed console palette; unknown levels render without color
LEVEL_COLORS = {
    Level.DEBUG: "\x1b[37m",
    Level.INFO: "\x1b[32m",
    Level.WARN: "\x1b[33m",
    Level.ERROR: "\x1b[31m",
    Level.DPANIC: "\x1b[35m",
    Level.PANIC: "\x1b[35m",
    Level.FATAL: "\x1b[35m",
}

CAPITAL_LEVEL_COLORS = {
    Level.DEBUG: "\x1b[35m",
    Level.INFO: "\x1b[34m",
    Level.WARN: "\x1b[33m",
    Level.ERROR: "\x1b[31m",
    Level.DPANIC: "\x1b[31m",
    Level.PANIC: "\x1b[31m",
    Level.FATAL: "\x1b[31m",
}


# ------------------------------------------------------------------
# Level encoders
# ------------------------------------------------------------------


def lowercase_level_encoder(levelno: int) -> str:
    return level_name(levelno)


def capital_level_encoder(levelno: int) -> str:
    return level_name(levelno).upper()


def capital_color_level_encoder(levelno: int) -> str:
    label = level_name(levelno).upper()
    color = CAPITAL_LEVEL_COLORS.get(levelno)
    if color is None:
        return label
    return f"{color}{label}{ANSI_RESET}"


def color_level_encoder(levelno: int) -> str:
    """Console level encoder with the fixed logkit palette."""
    label = level_name(levelno).upper()
    color = LEVEL_COLORS.get(levelno)
    if color is None:
        return label
    return f"{color}{label}{ANSI_RESET}"


# ------------------------------------------------------------------
# Time encoders
# ------------------------------------------------------------------


def millis_time_encoder(moment: datetime) -> str:
    """Render ``YYYY-MM-DD HH:MM:SS.mmm``."""
    return f"{moment.strftime(MILLIS_TIME_FORMAT)}.{moment.microsecond // 1000:03d}"


def iso8601_time_encoder(moment: datetime) -> str:
    """Render ``YYYY-MM-DDTHH:MM:SS.mmm+hhmm``."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return (
        f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}"
        f".{moment.microsecond // 1000:03d}{moment.strftime('%z')}"
    )


def color_time_encoder(moment: datetime) -> str:
    return f"{ANSI_CYAN}{millis_time_encoder(moment)}{ANSI_RESET}"


# ------------------------------------------------------------------
# Caller encoders
# ------------------------------------------------------------------


def short_caller_encoder(pathname: str, lineno: int) -> str:
    """Render ``package/file.py:line`` (last directory plus file name)."""
    directory, filename = os.path.split(pathname)
    parent = os.path.basename(directory)
    if parent:
        return f"{parent}/{filename}:{lineno}"
    return f"{filename}:{lineno}"


def full_caller_encoder(pathname: str, lineno: int) -> str:
    return f"{pathname}:{lineno}"


# ------------------------------------------------------------------
# Encoders
# ------------------------------------------------------------------


def record_time(record: logging.LogRecord) -> datetime:
    """Local wall-clock time of a record."""
    return datetime.fromtimestamp(record.created)


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Structured key-value fields attached by LoggerHandle."""
    return getattr(record, "fields", None) or {}


class BaseEncoder(logging.Formatter):
    """Common plumbing for encoders driven by an EncoderConfig."""

    def __init__(self, encoder_config: "EncoderConfig"):
        super().__init__()
        self.config = encoder_config

    def stacktrace(self, record: logging.LogRecord) -> Optional[str]:
        """Exception traceback and/or captured call-site stack, if any."""
        parts = []
        if record.exc_info:
            parts.append(self.formatException(record.exc_info))
        if record.stack_info:
            parts.append(self.formatStack(record.stack_info))
        if not parts:
            return None
        return "\n".join(parts)

    def extra_fields(self, record: logging.LogRecord) -> Dict[str, Any]:
        fields = dict(record_fields(record))
        if record.exc_info and record.exc_info[1] is not None:
            fields.setdefault("error", str(record.exc_info[1]))
        return fields


class JSONEncoder(BaseEncoder):
    """Encode each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        cfg = self.config
        entry: Dict[str, Any] = {}

        if cfg.level_key:
            entry[cfg.level_key] = cfg.encode_level(record.levelno)
        if cfg.time_key:
            entry[cfg.time_key] = cfg.encode_time(record_time(record))

        logger_name = getattr(record, "logger_name", None)
        if cfg.name_key and logger_name:
            entry[cfg.name_key] = logger_name

        if cfg.caller_key:
            entry[cfg.caller_key] = cfg.encode_caller(record.pathname, record.lineno)
        if cfg.message_key:
            entry[cfg.message_key] = record.getMessage()

        # Reserved keys win over colliding fields
        for key, value in self.extra_fields(record).items():
            entry.setdefault(key, value)

        stack = self.stacktrace(record)
        if cfg.stacktrace_key and stack:
            entry[cfg.stacktrace_key] = stack

        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleEncoder(BaseEncoder):
    """Render a tab-separated, human-readable line.

    Layout: ``time  LEVEL  [name]  caller  message  {fields}`` with the
    stack trace, when present, on the following lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        cfg = self.config
        columns = []

        if cfg.time_key:
            columns.append(cfg.encode_time(record_time(record)))
        if cfg.level_key:
            columns.append(cfg.encode_level(record.levelno))

        logger_name = getattr(record, "logger_name", None)
        if cfg.name_key and logger_name:
            columns.append(logger_name)

        if cfg.caller_key:
            columns.append(cfg.encode_caller(record.pathname, record.lineno))
        if cfg.message_key:
            columns.append(record.getMessage())

        line = "\t".join(columns)

        fields = self.extra_fields(record)
        if fields:
            line += "\t" + json.dumps(fields, default=str, ensure_ascii=False)

        stack = self.stacktrace(record)
        if cfg.stacktrace_key and stack:
            line += "\n" + stack

        return line
