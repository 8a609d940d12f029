"""
Writers and sinks.

A sink is a logging.Handler bound to exactly one encoder, one writer and
one minimum level. The handler lock serializes encode + append (and file
rotation), so concurrent records never interleave within a sink. Write
failures are counted and dropped: logging must never crash the caller.
"""

import gzip
import logging
import logging.handlers
import os
import re
import shutil
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Pattern, TextIO

from ..constants import BACKUP_TIME_FORMAT, COMPRESSED_SUFFIX, SECONDS_IN_DAY
from .config import RotationPolicy


class RotatingFileWriter(logging.handlers.RotatingFileHandler):
    """Size-bounded file writer with timestamped, prunable backups.

    When the next record would push the active file past ``max_bytes`` it
    is renamed to ``<stem>-<timestamp><suffix>`` (gzip-compressed when the
    policy asks for it). Backups older than ``max_age`` days, and those
    beyond the newest ``max_backups``, are then deleted. The file and its
    directory are created on the first write.
    """

    def __init__(
        self,
        filename: str,
        rotation: Optional[RotationPolicy] = None,
        max_bytes: Optional[int] = None,
        encoding: str = "utf-8",
    ):
        self.rotation = rotation or RotationPolicy()
        if max_bytes is None:
            max_bytes = self.rotation.max_bytes
        super().__init__(
            filename,
            mode="a",
            maxBytes=max_bytes,
            backupCount=self.rotation.max_backups,
            encoding=encoding,
            delay=True,
        )
        if self.rotation.compress:
            self.namer = _gzip_namer
            self.rotator = _gzip_rotator
        self._backup_re = _backup_pattern(Path(self.baseFilename))

    def _open(self):
        Path(self.baseFilename).parent.mkdir(parents=True, exist_ok=True)
        return super()._open()

    def doRollover(self):
        if self.stream:
            self.stream.close()
            self.stream = None

        if os.path.exists(self.baseFilename):
            self.rotate(self.baseFilename, self._next_backup_name())

        self.prune_backups()

        if not self.delay:
            self.stream = self._open()

    def _next_backup_name(self) -> str:
        now = datetime.now() if self.rotation.local_time else datetime.now(timezone.utc)
        stamp = f"{now.strftime(BACKUP_TIME_FORMAT)}.{now.microsecond // 1000:03d}"
        root, ext = os.path.splitext(self.baseFilename)

        candidate = self.rotation_filename(f"{root}-{stamp}{ext}")
        counter = 1
        # Two rotations within the same millisecond must not clobber each other
        while os.path.exists(candidate):
            candidate = self.rotation_filename(f"{root}-{stamp}-{counter}{ext}")
            counter += 1
        return candidate

    def is_backup_name(self, name: str) -> bool:
        """True only for names this writer produces when rotating."""
        match = self._backup_re.fullmatch(name)
        if match is None:
            return False
        try:
            datetime.strptime(match.group("stamp"), BACKUP_TIME_FORMAT)
        except ValueError:
            return False
        return True

    def backups(self) -> List[Path]:
        """Rotated files for this writer, newest first."""
        base = Path(self.baseFilename)
        if not base.parent.is_dir():
            return []

        found = [
            path
            for path in base.parent.iterdir()
            if path.is_file() and self.is_backup_name(path.name)
        ]
        found.sort(key=lambda p: (p.stat().st_mtime, p.name), reverse=True)
        return found

    def prune_backups(self) -> None:
        """Delete backups beyond the age and count limits."""
        backups = self.backups()
        doomed = []

        if self.rotation.max_backups > 0:
            doomed.extend(backups[self.rotation.max_backups:])
            backups = backups[:self.rotation.max_backups]

        if self.rotation.max_age > 0:
            cutoff = time.time() - self.rotation.max_age * SECONDS_IN_DAY
            doomed.extend(p for p in backups if p.stat().st_mtime < cutoff)

        for path in doomed:
            path.unlink(missing_ok=True)


def _backup_pattern(base: Path) -> Pattern[str]:
    # <stem>-YYYY-MM-DDTHH-MM-SS.mmm[-N]<suffix>[.gz]
    return re.compile(
        rf"{re.escape(base.stem)}-(?P<stamp>\d{{4}}-\d{{2}}-\d{{2}}T\d{{2}}-\d{{2}}-\d{{2}})"
        rf"\.\d{{3}}(?:-\d+)?{re.escape(base.suffix)}(?:{re.escape(COMPRESSED_SUFFIX)})?"
    )


def _gzip_namer(name: str) -> str:
    return name + COMPRESSED_SUFFIX


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


class Sink:
    """Capability shared by every sink variant.

    Mixed into a concrete logging.Handler; ``level`` is the minimum
    severity the sink admits.
    """

    dropped_records = 0

    def accepts(self, levelno: int) -> bool:
        return levelno >= self.level

    def handleError(self, record: logging.LogRecord) -> None:
        # Called from emit() with the handler lock held
        self.dropped_records += 1


class ConsoleSink(Sink, logging.StreamHandler):
    """Sink writing human-readable lines to a text stream (stdout)."""

    def __init__(self, stream: TextIO, encoder: logging.Formatter, level: int, terminator: str = "\n"):
        logging.StreamHandler.__init__(self, stream)
        self.setFormatter(encoder)
        self.setLevel(level)
        self.terminator = terminator


class FileSink(Sink, RotatingFileWriter):
    """Sink appending JSON lines to a rotating file."""

    def __init__(
        self,
        filename: str,
        encoder: logging.Formatter,
        level: int,
        rotation: Optional[RotationPolicy] = None,
        terminator: str = "\n",
    ):
        RotatingFileWriter.__init__(self, filename, rotation)
        self.setFormatter(encoder)
        self.setLevel(level)
        self.terminator = terminator
