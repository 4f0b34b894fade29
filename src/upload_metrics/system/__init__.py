"""System introspection for the upload metrics package."""
from .disk import DiskUsageEstimator, estimate_capacity, fallback_disk_usage
from .filesystem import Filesystem, LocalFilesystem, directory_size, scan_directory
from .host import HostProbe, PsutilHostProbe
from .models import CoreTicks, DirectoryScan, DiskUsage, SystemMetrics
from .telemetry import SystemMetricsCollector, cpu_busy_percent, memory_used_percent

__all__ = [
    "DiskUsageEstimator",
    "estimate_capacity",
    "fallback_disk_usage",
    "Filesystem",
    "LocalFilesystem",
    "directory_size",
    "scan_directory",
    "HostProbe",
    "PsutilHostProbe",
    "CoreTicks",
    "DirectoryScan",
    "DiskUsage",
    "SystemMetrics",
    "SystemMetricsCollector",
    "cpu_busy_percent",
    "memory_used_percent",
]
