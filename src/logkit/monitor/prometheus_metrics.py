"""
Prometheus metrics for the logkit health monitor.

Gauges for the latest health sample plus the standard process, platform
and GC collectors, all registered on a private CollectorRegistry so
that several LogkitMetrics instances (and the host application's own
default registry) never collide.
"""

import logging
import sys
import threading
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    GCCollector,
    Info,
    PlatformCollector,
    ProcessCollector,
    start_http_server,
)

from ..constants import DEFAULT_METRICS_ADDR, DEFAULT_METRICS_PORT

logger = logging.getLogger(__name__)


class LogkitMetrics:
    """Prometheus metrics collection for logkit"""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else CollectorRegistry()

        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.threads = Gauge(
            'logkit_threads',
            'Number of live Python threads',
            registry=self.registry
        )

        self.allocated_blocks = Gauge(
            'logkit_allocated_blocks',
            'Memory blocks currently allocated by the interpreter',
            registry=self.registry
        )

        self.traced_memory_bytes = Gauge(
            'logkit_traced_memory_bytes',
            'Memory traced by tracemalloc (0 when tracing is off)',
            registry=self.registry
        )

        self.health_samples_total = Counter(
            'logkit_health_samples_total',
            'Health samples taken',
            registry=self.registry
        )

        self.build_info = Info(
            'logkit_build',
            'logkit build information',
            registry=self.registry
        )

        self._http_server = None
        self._server_thread: Optional[threading.Thread] = None
        self._metrics_port = DEFAULT_METRICS_PORT

    def record_sample(self, sample) -> None:
        """Publish one HealthSample."""
        self.threads.set(sample.threads)
        self.allocated_blocks.set(sample.allocated_blocks)
        self.traced_memory_bytes.set(sample.traced_memory_bytes)
        self.health_samples_total.inc()

    def start_metrics_server(self, port: int = DEFAULT_METRICS_PORT, addr: str = DEFAULT_METRICS_ADDR):
        """Start the Prometheus exposition server for this registry."""
        if self._http_server is not None:
            logger.warning("Metrics server already running")
            return

        try:
            self._http_server, self._server_thread = start_http_server(
                port, addr=addr, registry=self.registry
            )
        except Exception as e:
            logger.error(f"Failed to start metrics server on {addr}:{port}: {e}")
            raise

        self._metrics_port = port
        logger.info(f"Prometheus metrics server started on {addr}:{port}")
        self._set_build_info()

    def _set_build_info(self):
        from .. import __version__

        self.build_info.info({
            'version': __version__,
            'python_version': sys.version.split()[0],
        })

    def is_server_running(self) -> bool:
        """Check if metrics server is running"""
        return self._http_server is not None

    def stop_metrics_server(self):
        """Shut the exposition server down and release its port."""
        if self._http_server is None:
            return

        self._http_server.shutdown()
        self._http_server.server_close()
        if self._server_thread is not None:
            self._server_thread.join()
        self._http_server = None
        self._server_thread = None
        logger.info("Metrics server stopped")


def initialize_metrics(
    port: int = DEFAULT_METRICS_PORT,
    addr: str = DEFAULT_METRICS_ADDR,
    enabled: bool = True,
) -> Optional[LogkitMetrics]:
    """Create metrics and start serving them; None when disabled or on failure."""
    if not enabled:
        return None

    metrics = LogkitMetrics()

    try:
        metrics.start_metrics_server(port, addr)
        return metrics
    except Exception as e:
        logger.error(f"Failed to initialize metrics: {e}")
        return None
