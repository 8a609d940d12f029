"""
Logger configuration values and option functions.

A LoggerConfig is always produced by derive(), which applies an ordered
list of options to a fresh copy of DEFAULT_CONFIG. Options are plain
callables that overwrite the fields they control; the last one wins.
"""

import copy
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from ..constants import (
    BYTES_PER_MB,
    DEFAULT_LOG_COMPRESS,
    DEFAULT_LOG_FILE_PATH,
    DEFAULT_LOG_MAX_AGE_DAYS,
    DEFAULT_LOG_MAX_BACKUPS,
    DEFAULT_LOG_MAX_SIZE_MB,
)
from ..exceptions import InvalidConfigurationError
from .formatters import (
    iso8601_time_encoder,
    lowercase_level_encoder,
    short_caller_encoder,
)
from .levels import Level, LevelLike, parse_level


@dataclass
class RotationPolicy:
    """Size/age/count thresholds for a rotating file writer."""

    max_size: int = DEFAULT_LOG_MAX_SIZE_MB  # megabytes
    max_age: int = DEFAULT_LOG_MAX_AGE_DAYS  # days, 0 keeps backups forever
    max_backups: int = DEFAULT_LOG_MAX_BACKUPS  # 0 keeps every backup
    compress: bool = DEFAULT_LOG_COMPRESS
    local_time: bool = False

    @property
    def max_bytes(self) -> int:
        return self.max_size * BYTES_PER_MB


@dataclass
class EncoderConfig:
    """Field names and value encoders shared by JSON and console encoders.

    An empty key drops that entry from the output.
    """

    level_key: str = "level"
    time_key: str = "time"
    name_key: str = "logger"
    caller_key: str = "caller"
    message_key: str = "msg"
    stacktrace_key: str = "stacktrace"
    line_ending: str = "\n"
    encode_level: Callable[[int], str] = lowercase_level_encoder
    encode_time: Callable = iso8601_time_encoder
    encode_caller: Callable[[str, int], str] = short_caller_encoder


@dataclass
class LoggerConfig:
    """Everything a sink builder needs to construct one sink."""

    level: Level = Level.INFO
    file_path: str = DEFAULT_LOG_FILE_PATH
    rotation: RotationPolicy = field(default_factory=RotationPolicy)
    encoder: EncoderConfig = field(default_factory=EncoderConfig)


DEFAULT_CONFIG = LoggerConfig()

Option = Callable[[LoggerConfig], None]


def derive(
    defaults: LoggerConfig, options: Optional[Iterable[Option]] = None
) -> LoggerConfig:
    """Apply options, in order, to a deep copy of ``defaults``."""
    cfg = copy.deepcopy(defaults)
    for option in options or ():
        option(cfg)
    return cfg


# ------------------------------------------------------------------
# Options
# ------------------------------------------------------------------


def with_log_level(level: LevelLike) -> Option:
    """Set the sink's minimum level."""
    resolved = parse_level(level)

    def option(cfg: LoggerConfig) -> None:
        cfg.level = resolved

    return option


def with_log_file_path(file_path: str) -> Option:
    """Set the file sink's destination; an empty path disables the sink."""

    def option(cfg: LoggerConfig) -> None:
        cfg.file_path = str(file_path)

    return option


def with_log_format(encoder_config: EncoderConfig) -> Option:
    """Replace the whole encoder configuration."""

    def option(cfg: LoggerConfig) -> None:
        cfg.encoder = copy.deepcopy(encoder_config)

    return option


def with_rotate_settings(max_size: int, max_age: int, compress: bool) -> Option:
    """Set max size (MB), max age (days) and compression of rotated files."""
    if max_size < 1:
        raise InvalidConfigurationError("max_size", max_size, "at least 1 (megabytes)")
    if max_age < 0:
        raise InvalidConfigurationError("max_age", max_age, "a non-negative integer")

    def option(cfg: LoggerConfig) -> None:
        cfg.rotation.max_size = max_size
        cfg.rotation.max_age = max_age
        cfg.rotation.compress = compress

    return option


def with_max_backups(max_backups: int) -> Option:
    """Set how many rotated files to keep (0 keeps all)."""
    if max_backups < 0:
        raise InvalidConfigurationError("max_backups", max_backups, "a non-negative integer")

    def option(cfg: LoggerConfig) -> None:
        cfg.rotation.max_backups = max_backups

    return option


def with_local_time(enabled: bool = True) -> Option:
    """Timestamp rotated backups in local time instead of UTC."""

    def option(cfg: LoggerConfig) -> None:
        cfg.rotation.local_time = enabled

    return option


_ENCODER_KEYS = (
    "level_key",
    "time_key",
    "name_key",
    "caller_key",
    "message_key",
    "stacktrace_key",
)


def with_encoder_keys(**keys: str) -> Option:
    """Rename output keys, e.g. ``with_encoder_keys(message_key="message")``."""
    unknown = sorted(set(keys) - set(_ENCODER_KEYS))
    if unknown:
        raise InvalidConfigurationError(
            "encoder key", unknown[0], ", ".join(_ENCODER_KEYS)
        )

    def option(cfg: LoggerConfig) -> None:
        for key, value in keys.items():
            setattr(cfg.encoder, key, value)

    return option
