"""
Composite (tee) logger.

Fans every record out to each sink whose threshold admits it. Delivery
is synchronous: write() returns once every sink has accepted or
skipped the record.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..constants import DEFAULT_LOGGER_NAME
from ..exceptions import ConfigurationError, FlushError, NoValidSinksError
from .handlers import FileSink, Sink
from .sinks import SinkBuilder


class TeeLogger(logging.Logger):
    """A standalone logging.Logger whose handlers are the sinks it owns.

    It is not registered with logging.getLogger() and never propagates,
    so records only ever reach the sinks it was built from.
    """

    def __init__(self, sinks: Sequence[Sink], name: str = DEFAULT_LOGGER_NAME):
        if not sinks:
            raise NoValidSinksError(0)
        super().__init__(name)
        self.propagate = False
        for sink in sinks:
            self.addHandler(sink)
        # Skip record creation when no sink could accept it
        self.setLevel(min(sink.level for sink in sinks))

    @property
    def sinks(self) -> Tuple[Sink, ...]:
        return tuple(self.handlers)

    def callHandlers(self, record: logging.LogRecord) -> None:
        for sink in self.handlers:
            if sink.accepts(record.levelno):
                sink.handle(record)

    def write(self, record: logging.LogRecord) -> None:
        """Deliver an already-built record to every admitting sink."""
        self.handle(record)

    def enabled(self, levelno: int) -> bool:
        return any(sink.accepts(levelno) for sink in self.handlers)

    def flush(self) -> None:
        """Flush every sink, then report all failures at once."""
        errors: List[BaseException] = []
        for sink in self.handlers:
            try:
                sink.flush()
            except Exception as e:
                errors.append(e)
        if errors:
            raise FlushError(errors)

    def close(self) -> None:
        for sink in self.handlers:
            sink.close()


def assemble(
    builders: Iterable[Optional[SinkBuilder]], name: str = DEFAULT_LOGGER_NAME
) -> TeeLogger:
    """Build every builder and combine the resulting sinks.

    ``None`` builders, and builders that yield no sink, are skipped.

    Raises:
        ConfigurationError: no builders were passed, or two file sinks
            share a destination
        NoValidSinksError: nothing was left to build
    """
    builders = list(builders)
    if not builders:
        raise ConfigurationError("at least one sink builder is required")

    sinks: List[Sink] = []
    for builder in builders:
        if builder is None:
            continue
        sink = builder.build()
        if sink is None:
            continue
        sinks.append(sink)

    if not sinks:
        raise NoValidSinksError(len(builders))

    _check_destinations(sinks)
    return TeeLogger(sinks, name)


def _check_destinations(sinks: Sequence[Sink]) -> None:
    seen = set()
    for sink in sinks:
        if not isinstance(sink, FileSink):
            continue
        if sink.baseFilename in seen:
            raise ConfigurationError(
                f"two file sinks share the destination {sink.baseFilename}"
            )
        seen.add(sink.baseFilename)
