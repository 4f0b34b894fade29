"""Public entry points reporting free space and system health.

All three functions always return a structurally valid value. Failures are
reported through logging only.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from .config import GIB, MetricsConfig
from .system.disk import DiskUsageEstimator
from .system.filesystem import Filesystem
from .system.host import HostProbe, PsutilHostProbe
from .system.models import DiskUsage, SystemMetrics
from .system.telemetry import SystemMetricsCollector

LOGGER = logging.getLogger(__name__)

DEFAULT_UPLOADS_PATH = "./uploads"
DEFAULT_FREE_SPACE = 100 * GIB


class MetricsMonitor:
    """Wires the disk estimator and the metrics collector to shared collaborators."""

    def __init__(
        self,
        config: Optional[MetricsConfig] = None,
        host: Optional[HostProbe] = None,
        filesystem: Optional[Filesystem] = None,
    ) -> None:
        self.config = config or MetricsConfig()
        host = host or PsutilHostProbe()
        self.disk = DiskUsageEstimator(self.config.disk, host=host, filesystem=filesystem)
        self.telemetry = SystemMetricsCollector(host=host, disk_estimator=self.disk)

    def get_disk_usage(self, path: Optional[os.PathLike[str] | str] = None) -> DiskUsage:
        return self.disk.estimate(path)

    def get_free_space(self, path: Optional[os.PathLike[str] | str] = None) -> int:
        """Return the estimated free bytes, or 100 GiB when anything goes wrong."""
        try:
            return self.disk.estimate(path).free
        except Exception:
            LOGGER.exception("Error getting free space")
            return DEFAULT_FREE_SPACE

    def get_system_metrics(self) -> SystemMetrics:
        return self.telemetry.collect()


_default_monitor: Optional[MetricsMonitor] = None


def default_monitor() -> MetricsMonitor:
    global _default_monitor
    if _default_monitor is None:
        _default_monitor = MetricsMonitor()
    return _default_monitor


def get_disk_usage(path: os.PathLike[str] | str = DEFAULT_UPLOADS_PATH) -> DiskUsage:
    """Heuristic :class:`DiskUsage` for ``path``. ``total`` and ``free`` are estimates."""
    return default_monitor().get_disk_usage(path)


def get_free_space(path: os.PathLike[str] | str = DEFAULT_UPLOADS_PATH) -> int:
    """Estimated free bytes for ``path``. Never raises."""
    try:
        return default_monitor().get_free_space(path)
    except Exception:
        LOGGER.exception("Error getting free space")
        return DEFAULT_FREE_SPACE


def get_system_metrics() -> SystemMetrics:
    """CPU, memory and disk percentages with a millisecond timestamp. Never raises."""
    return default_monitor().get_system_metrics()
