"""Value records produced by the metrics estimators."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union


@dataclass(frozen=True)
class DiskUsage:
    """Heuristic disk usage for a directory.

    ``used`` is measured by walking the directory. ``total`` and ``free`` are
    derived from system memory and are approximations suitable for coarse
    health signalling only, not for capacity planning.
    """

    total: int
    used: int
    free: int
    used_percentage: float

    def as_dict(self) -> Dict[str, Union[int, float]]:
        return {
            "total": self.total,
            "used": self.used,
            "free": self.free,
            "usedPercentage": self.used_percentage,
        }


@dataclass(frozen=True)
class SystemMetrics:
    """Point-in-time CPU, memory and disk percentages."""

    cpu_usage: float
    memory_usage: float
    disk_usage: float
    timestamp: int

    def as_dict(self) -> Dict[str, Union[int, float]]:
        return {
            "cpuUsage": self.cpu_usage,
            "memoryUsage": self.memory_usage,
            "diskUsage": self.disk_usage,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class CoreTicks:
    """Cumulative time counters of one CPU core since boot."""

    idle: float
    user: float = 0.0
    nice: float = 0.0
    system: float = 0.0
    irq: float = 0.0

    @property
    def total(self) -> float:
        return self.idle + self.user + self.nice + self.system + self.irq


@dataclass(frozen=True)
class DirectoryScan:
    """Outcome of a directory walk.

    ``skipped`` pairs each entry that could not be listed or stat'ed with a
    description of the error. Those entries contribute nothing to ``used``.
    """

    used: int
    skipped: Tuple[Tuple[str, str], ...] = ()
