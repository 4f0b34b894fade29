"""Host introspection layer backed by psutil."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List

import psutil

from .models import CoreTicks

LOGGER = logging.getLogger(__name__)


class HostProbe(ABC):
    """Abstract source of memory and CPU counters."""

    @abstractmethod
    def total_memory(self) -> int:
        """Total physical memory in bytes."""
        pass

    @abstractmethod
    def free_memory(self) -> int:
        """Physical memory currently available to new processes, in bytes."""
        pass

    @abstractmethod
    def cpu_ticks(self) -> List[CoreTicks]:
        """Cumulative tick counters for every core."""
        pass


class PsutilHostProbe(HostProbe):
    """Reads counters of the local machine through psutil."""

    def total_memory(self) -> int:
        return int(psutil.virtual_memory().total)

    def free_memory(self) -> int:
        return int(psutil.virtual_memory().available)

    def cpu_ticks(self) -> List[CoreTicks]:
        cores = psutil.cpu_times(percpu=True)
        LOGGER.debug("Read tick counters for %d cores", len(cores))
        return [_to_core_ticks(times) for times in cores]


def _to_core_ticks(times) -> CoreTicks:  # type: ignore[no-untyped-def]
    # Field sets differ per platform: Windows has no ``nice`` and names irq ``interrupt``.
    irq = getattr(times, "irq", None)
    if irq is None:
        irq = getattr(times, "interrupt", 0.0)
    return CoreTicks(
        idle=float(times.idle),
        user=float(times.user),
        nice=float(getattr(times, "nice", 0.0)),
        system=float(times.system),
        irq=float(irq),
    )
