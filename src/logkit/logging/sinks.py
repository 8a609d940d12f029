"""
Sink builders.

A builder owns nothing but its option list. Each build() re-derives a
LoggerConfig from DEFAULT_CONFIG, applies the builder's forced encoder
overrides on top of the caller's options, and returns one new sink (or
None when the configuration leaves nothing to build).

Options cannot undo the forced overrides: file sinks always
write JSON with millisecond timestamps, console sinks always colorize
the level and the timestamp.
"""

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from .config import DEFAULT_CONFIG, LoggerConfig, Option, derive
from .formatters import (
    ConsoleEncoder,
    JSONEncoder,
    color_level_encoder,
    color_time_encoder,
    millis_time_encoder,
)
from .handlers import ConsoleSink, FileSink, Sink


class SinkBuilder(ABC):
    """Base class for the closed set of sink builders."""

    def __init__(self, *options: Option):
        self.options = tuple(options)

    def config(self) -> LoggerConfig:
        """Defaults, then caller options, then forced overrides."""
        cfg = derive(DEFAULT_CONFIG, self.options)
        self.apply_overrides(cfg)
        return cfg

    @abstractmethod
    def apply_overrides(self, cfg: LoggerConfig) -> None:
        ...

    @abstractmethod
    def build(self) -> Optional[Sink]:
        ...


class FileSinkBuilder(SinkBuilder):
    """Builds a JSON-lines sink backed by a rotating file."""

    def apply_overrides(self, cfg: LoggerConfig) -> None:
        cfg.encoder.encode_time = millis_time_encoder

    def build(self) -> Optional[FileSink]:
        cfg = self.config()
        if not cfg.file_path:
            return None

        return FileSink(
            cfg.file_path,
            encoder=JSONEncoder(cfg.encoder),
            level=cfg.level,
            rotation=cfg.rotation,
            terminator=cfg.encoder.line_ending,
        )


class ConsoleSinkBuilder(SinkBuilder):
    """Builds a colorized sink on standard output.

    ``stream`` replaces stdout (tests, embedding); stdout is looked up at
    build time so redirection done before building is honoured.
    """

    def __init__(self, *options: Option, stream: Optional[TextIO] = None):
        super().__init__(*options)
        self.stream = stream

    def apply_overrides(self, cfg: LoggerConfig) -> None:
        cfg.encoder.encode_level = color_level_encoder
        cfg.encoder.encode_time = color_time_encoder

    def build(self) -> Optional[ConsoleSink]:
        cfg = self.config()
        stream = self.stream if self.stream is not None else sys.stdout
        if stream is None:
            return None

        return ConsoleSink(
            stream,
            encoder=ConsoleEncoder(cfg.encoder),
            level=cfg.level,
            terminator=cfg.encoder.line_ending,
        )


def with_file_core(*options: Option) -> FileSinkBuilder:
    """Builder for a rotating JSON file sink."""
    return FileSinkBuilder(*options)


def with_console_core(*options: Option, stream: Optional[TextIO] = None) -> ConsoleSinkBuilder:
    """Builder for a colorized console sink."""
    return ConsoleSinkBuilder(*options, stream=stream)
