"""
Upload Metrics Package
"""
from .monitor import MetricsMonitor, get_disk_usage, get_free_space, get_system_metrics
from .system.models import DiskUsage, SystemMetrics

__all__ = [
    "MetricsMonitor",
    "get_disk_usage",
    "get_free_space",
    "get_system_metrics",
    "DiskUsage",
    "SystemMetrics",
]
