"""Telemetry utilities."""
from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from .disk import DiskUsageEstimator
from .host import HostProbe, PsutilHostProbe
from .models import CoreTicks, SystemMetrics

LOGGER = logging.getLogger(__name__)


def cpu_busy_percent(cores: Iterable[CoreTicks]) -> float:
    """Busy share of all cores from cumulative counters since boot.

    A single sample is not a rate over an interval; two samples would have to
    be differenced for that.
    """

    total_idle = 0.0
    total_ticks = 0.0
    for core in cores:
        total_idle += core.idle
        total_ticks += core.total
    if total_ticks <= 0:
        return 0.0
    return 100 - (100 * total_idle / total_ticks)


def memory_used_percent(total_memory: int, free_memory: int) -> float:
    if total_memory <= 0:
        return 0.0
    return (total_memory - free_memory) / total_memory * 100


def now_millis(clock: Callable[[], float] = time.time) -> int:
    return int(clock() * 1000)


class SystemMetricsCollector:
    """Collects lightweight system metrics."""

    def __init__(
        self,
        host: Optional[HostProbe] = None,
        disk_estimator: Optional[DiskUsageEstimator] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._host = host or PsutilHostProbe()
        self._disk = disk_estimator or DiskUsageEstimator(host=self._host)
        self._clock = clock

    def collect(self) -> SystemMetrics:
        """Return a snapshot; all percentages fall back to zero on failure."""
        try:
            cpu_usage = cpu_busy_percent(self._host.cpu_ticks())
            memory_usage = memory_used_percent(self._host.total_memory(), self._host.free_memory())

            disk_usage = 0.0
            try:
                disk_usage = self._disk.estimate(self._disk.default_path).used_percentage
            except Exception as exc:
                LOGGER.warning("Could not get disk usage: %s", exc)

            metrics = SystemMetrics(
                cpu_usage=cpu_usage,
                memory_usage=memory_usage,
                disk_usage=disk_usage,
                timestamp=now_millis(self._clock),
            )
        except Exception:
            LOGGER.exception("Error getting system metrics")
            return SystemMetrics(cpu_usage=0.0, memory_usage=0.0, disk_usage=0.0, timestamp=now_millis(self._clock))

        LOGGER.debug("Telemetry snapshot: %s", metrics)
        return metrics
