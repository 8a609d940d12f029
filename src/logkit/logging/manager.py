"""
Logger slot management.

A LoggingManager holds the currently installed LoggerHandle. Installing
a new handle flushes the previous one first; flush failures at that
point are ignored so a replacement is never blocked. The module-level
``logging_manager`` is the process-wide default slot; components that
need a logger should still be handed a LoggerHandle explicitly.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Optional

from ..constants import (
    DEFAULT_LOG_DIR,
    DEFAULT_LOGGER_NAME,
    QUICKSTART_COMPRESS,
    QUICKSTART_MAX_AGE_DAYS,
    QUICKSTART_MAX_SIZE_MB,
)
from ..exceptions import LogDirectoryError
from .config import with_log_file_path, with_log_level, with_rotate_settings
from .levels import LevelLike
from .loggers import LoggerHandle
from .sinks import SinkBuilder, with_console_core, with_file_core
from .tee import assemble

logger = logging.getLogger(__name__)


class LoggingManager:
    """Owner of one replaceable logger slot."""

    def __init__(self):
        self._handle: Optional[LoggerHandle] = None
        self._lock = threading.RLock()

    @property
    def handle(self) -> Optional[LoggerHandle]:
        return self._handle

    def install(self, handle: LoggerHandle) -> LoggerHandle:
        """Make ``handle`` current, flushing the one it replaces."""
        with self._lock:
            previous = self._handle
            if previous is not None and previous is not handle:
                try:
                    previous.flush()
                except Exception as e:
                    logger.debug(f"Ignoring flush failure of replaced logger: {e}")
            self._handle = handle
        return handle

    def build_logger(
        self,
        *builders: Optional[SinkBuilder],
        name: str = DEFAULT_LOGGER_NAME,
        **handle_options: Any,
    ) -> LoggerHandle:
        """Assemble sinks from ``builders`` and install the resulting handle.

        Keyword options are passed through to LoggerHandle
        (``stacktrace_level``, ``fatal_hook``, ``fields``...).

        Raises:
            ConfigurationError: when no sink could be built
        """
        tee = assemble(builders, name=name)
        return self.install(LoggerHandle(tee, **handle_options))

    def flush(self) -> None:
        """Flush the current handle, if any."""
        handle = self._handle
        if handle is not None:
            handle.flush()

    def reset(self) -> None:
        """Empty the slot without flushing."""
        with self._lock:
            self._handle = None


# Global logging manager instance
logging_manager = LoggingManager()


def build_logger(*builders: Optional[SinkBuilder], **options: Any) -> LoggerHandle:
    """Build and install a logger into the default slot."""
    return logging_manager.build_logger(*builders, **options)


def install(handle: LoggerHandle) -> LoggerHandle:
    return logging_manager.install(handle)


def get_logger() -> Optional[LoggerHandle]:
    """Currently installed handle of the default slot."""
    return logging_manager.handle


def flush() -> None:
    logging_manager.flush()


def new_logger(
    level: LevelLike,
    log_dir: str = DEFAULT_LOG_DIR,
    manager: Optional[LoggingManager] = None,
) -> LoggerHandle:
    """Quick-start logger: compressed rotating file plus console, both at ``level``."""
    manager = manager or logging_manager

    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LogDirectoryError(log_dir, str(e)) from e

    file_core = with_file_core(
        with_log_file_path(str(Path(log_dir) / f"{DEFAULT_LOGGER_NAME}.log")),
        with_rotate_settings(QUICKSTART_MAX_SIZE_MB, QUICKSTART_MAX_AGE_DAYS, QUICKSTART_COMPRESS),
        with_log_level(level),
    )
    console_core = with_console_core(with_log_level(level))

    handle = manager.build_logger(file_core, console_core)
    handle.info("Logger initialized with file and console sinks")
    return handle
