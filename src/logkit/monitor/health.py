"""
Periodic process health sampling.

A HealthMonitor wakes up every ``interval`` seconds, records the live
thread count and interpreter memory usage, logs them through the
LoggerHandle it was given and publishes them to LogkitMetrics.
"""

import logging
import sys
import threading
import tracemalloc
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..constants import BYTES_PER_KB, DEFAULT_SAMPLE_INTERVAL_SECONDS
from ..exceptions import InvalidConfigurationError
from ..logging.loggers import LoggerHandle
from .prometheus_metrics import LogkitMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthSample:
    """One reading of process health."""

    threads: int
    allocated_blocks: int
    traced_memory_bytes: int = 0
    taken_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def take_sample() -> HealthSample:
    traced = tracemalloc.get_traced_memory()[0] if tracemalloc.is_tracing() else 0
    return HealthSample(
        threads=threading.active_count(),
        allocated_blocks=sys.getallocatedblocks(),
        traced_memory_bytes=traced,
    )


class HealthMonitor:
    """Background sampler of thread count and memory usage."""

    def __init__(
        self,
        handle: Optional[LoggerHandle] = None,
        metrics: Optional[LogkitMetrics] = None,
        interval: float = DEFAULT_SAMPLE_INTERVAL_SECONDS,
    ):
        if interval <= 0:
            raise InvalidConfigurationError("interval", interval, "a positive number of seconds")

        self.handle = handle.named("monitor") if handle is not None else None
        self.metrics = metrics
        self.interval = interval
        self.last_sample: Optional[HealthSample] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sample(self) -> HealthSample:
        """Take, log and publish one sample."""
        sample = take_sample()

        if self.handle is not None:
            self.handle.info("thread count: %d", sample.threads)
            if sample.traced_memory_bytes:
                self.handle.info(
                    "traced memory = %d kB", sample.traced_memory_bytes // BYTES_PER_KB
                )
            else:
                self.handle.info("allocated blocks = %d", sample.allocated_blocks)

        if self.metrics is not None:
            self.metrics.record_sample(sample)

        self.last_sample = sample
        return sample

    def start(self) -> None:
        if self.is_running:
            logger.warning("Health monitor already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="logkit-health-monitor", daemon=True
        )
        self._thread.start()
        logger.info(f"Health monitor started (interval {self.interval}s)")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.sample()
            except Exception as e:
                # A failed sample must not end the monitor thread
                logger.warning(f"Health sample failed: {e}")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the sampler thread and wait for it to exit."""
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout)
            logger.info("Health monitor stopped")
