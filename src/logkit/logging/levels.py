"""
Log severity levels.

Levels share numeric values with the standard library so that records
produced by logkit interoperate with ordinary logging.Handler filtering.
"""

import logging
from enum import IntEnum
from typing import Union

from ..exceptions import InvalidConfigurationError


class Level(IntEnum):
    """Ordered log severity."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR
    DPANIC = 42
    PANIC = 46
    FATAL = logging.CRITICAL

    @property
    def label(self) -> str:
        """Lowercase label used by the encoders, e.g. ``"warn"``."""
        return self.name.lower()


LevelLike = Union[Level, int, str]

_ALIASES = {
    "warning": Level.WARN,
    "critical": Level.FATAL,
}

# Register names so stdlib formatting of foreign records stays readable
logging.addLevelName(Level.DPANIC, "DPANIC")
logging.addLevelName(Level.PANIC, "PANIC")


def parse_level(value: LevelLike) -> Level:
    """Coerce a level name, number or Level into a Level."""
    if isinstance(value, Level):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Level(value)
        except ValueError:
            raise InvalidConfigurationError(
                "level", value, ", ".join(str(int(lvl)) for lvl in Level)
            ) from None

    if isinstance(value, str):
        name = value.strip().lower()
        if name in _ALIASES:
            return _ALIASES[name]
        for level in Level:
            if level.label == name:
                return level

    raise InvalidConfigurationError(
        "level", value, ", ".join(lvl.label for lvl in Level)
    )


def level_name(levelno: int) -> str:
    """Return the lowercase label for a numeric level.

    Numbers outside the Level enum fall back to the standard library's
    name for them (``"level 25"`` for an unregistered 25).
    """
    try:
        return Level(levelno).label
    except ValueError:
        return logging.getLevelName(levelno).lower()
