"""
logkit Logging Package

Multi-sink logger composition on top of the standard library:
- levels: ordered severities and level parsing
- formatters: JSON and colorized console encoders
- config: LoggerConfig, defaults and option functions
- handlers: rotating file writer and the sink variants
- sinks: file and console sink builders
- tee: fan-out of records to every admitting sink
- loggers: LoggerHandle, the leveled write API
- manager: the replaceable process-wide logger slot
"""

from .config import (
    DEFAULT_CONFIG,
    EncoderConfig,
    LoggerConfig,
    Option,
    RotationPolicy,
    derive,
    with_encoder_keys,
    with_local_time,
    with_log_file_path,
    with_log_format,
    with_log_level,
    with_max_backups,
    with_rotate_settings,
)
from .formatters import ConsoleEncoder, JSONEncoder
from .handlers import ConsoleSink, FileSink, RotatingFileWriter, Sink
from .levels import Level, level_name, parse_level
from .loggers import CALLER_SKIP, LoggerHandle
from .manager import (
    LoggingManager,
    build_logger,
    flush,
    get_logger,
    install,
    logging_manager,
    new_logger,
)
from .sinks import (
    ConsoleSinkBuilder,
    FileSinkBuilder,
    SinkBuilder,
    with_console_core,
    with_file_core,
)
from .tee import TeeLogger, assemble

__all__ = [
    # Levels
    "Level",
    "level_name",
    "parse_level",
    # Configuration
    "LoggerConfig",
    "EncoderConfig",
    "RotationPolicy",
    "DEFAULT_CONFIG",
    "Option",
    "derive",
    "with_log_level",
    "with_log_file_path",
    "with_log_format",
    "with_rotate_settings",
    "with_max_backups",
    "with_local_time",
    "with_encoder_keys",
    # Encoders
    "JSONEncoder",
    "ConsoleEncoder",
    # Sinks
    "Sink",
    "ConsoleSink",
    "FileSink",
    "RotatingFileWriter",
    "SinkBuilder",
    "FileSinkBuilder",
    "ConsoleSinkBuilder",
    "with_file_core",
    "with_console_core",
    # Composition and lifecycle
    "TeeLogger",
    "assemble",
    "LoggerHandle",
    "CALLER_SKIP",
    "LoggingManager",
    "logging_manager",
    "build_logger",
    "install",
    "get_logger",
    "flush",
    "new_logger",
]
