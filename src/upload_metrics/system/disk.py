"""Heuristic disk usage estimation for the uploads directory.

No filesystem capacity query is made. Used space is measured by walking the
directory; total and free capacity are extrapolated from physical memory, so
both figures are approximations meant for coarse health signalling.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from ..config import DiskEstimatorConfig
from .filesystem import Filesystem, LocalFilesystem, scan_directory
from .host import HostProbe, PsutilHostProbe
from .models import DiskUsage

LOGGER = logging.getLogger(__name__)


def estimate_capacity(
    used: int,
    total_memory: int,
    free_memory: int,
    disk_to_memory_ratio: int = 10,
    free_memory_multiplier: int = 5,
) -> Tuple[int, int]:
    """Return ``(total, free)`` estimated from memory figures.

    ``free`` never drops below ``free_memory_multiplier * free_memory``, even
    when ``used`` exceeds the estimated total.
    """

    total = total_memory * disk_to_memory_ratio
    free = max(total - used, free_memory * free_memory_multiplier)
    return total, free


def used_percentage(used: int, total: int) -> float:
    if total > 0:
        return used / total * 100
    return 0.0


def fallback_disk_usage(config: Optional[DiskEstimatorConfig] = None) -> DiskUsage:
    """Fixed safe default reported when estimation fails."""
    config = config or DiskEstimatorConfig()
    total = config.fallback_total_bytes
    free = config.fallback_free_bytes
    used = total - free
    return DiskUsage(total=total, used=used, free=free, used_percentage=used_percentage(used, total))


class DiskUsageEstimator:
    """Builds :class:`DiskUsage` snapshots for a directory."""

    def __init__(
        self,
        config: Optional[DiskEstimatorConfig] = None,
        host: Optional[HostProbe] = None,
        filesystem: Optional[Filesystem] = None,
    ) -> None:
        self._config = config or DiskEstimatorConfig()
        self._host = host or PsutilHostProbe()
        self._filesystem = filesystem or LocalFilesystem()

    @property
    def default_path(self) -> Path:
        return self._config.uploads_path

    def estimate(self, path: Optional[os.PathLike[str] | str] = None) -> DiskUsage:
        """Estimate usage for ``path``, creating the directory when missing.

        Never raises: any failure is logged and the configured fallback is
        returned instead.
        """

        target = path if path is not None else self._config.uploads_path
        try:
            return self._estimate(target)
        except Exception:
            LOGGER.exception("Error getting disk usage for %s", target)
            return fallback_disk_usage(self._config)

    def _estimate(self, path: os.PathLike[str] | str) -> DiskUsage:
        absolute_path = os.path.abspath(os.fspath(path))
        if not self._filesystem.exists(absolute_path):
            LOGGER.info("Creating missing directory %s", absolute_path)
            self._filesystem.make_dirs(absolute_path)

        used = scan_directory(absolute_path, self._filesystem).used

        total, free = estimate_capacity(
            used,
            self._host.total_memory(),
            self._host.free_memory(),
            disk_to_memory_ratio=self._config.disk_to_memory_ratio,
            free_memory_multiplier=self._config.free_memory_multiplier,
        )
        usage = DiskUsage(total=total, used=used, free=free, used_percentage=used_percentage(used, total))
        LOGGER.debug("Disk usage for %s: %s", absolute_path, usage)
        return usage
