"""Tests for the heuristic disk usage estimator."""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Union

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "src"))

from pydantic import ValidationError

from upload_metrics.config import GIB, DiskEstimatorConfig
from upload_metrics.system.disk import DiskUsageEstimator, estimate_capacity, fallback_disk_usage
from upload_metrics.system.filesystem import DIRECTORY, FILE, EntryStat, Filesystem
from upload_metrics.system.host import HostProbe
from upload_metrics.system.models import CoreTicks


class _FakeHost(HostProbe):
    def __init__(self, total: int = 16 * GIB, free: int = 2 * GIB, fail: bool = False) -> None:
        self.total = total
        self.free = free
        self.fail = fail

    def total_memory(self) -> int:
        if self.fail:
            raise OSError("memory introspection unavailable")
        return self.total

    def free_memory(self) -> int:
        if self.fail:
            raise OSError("memory introspection unavailable")
        return self.free

    def cpu_ticks(self) -> List[CoreTicks]:
        return [CoreTicks(idle=1.0)]


class _FakeFilesystem(Filesystem):
    def __init__(self, entries: Dict[str, Union[int, str]], fail_mkdir: bool = False) -> None:
        self.entries = dict(entries)
        self.fail_mkdir = fail_mkdir

    def exists(self, path: str) -> bool:
        return path in self.entries

    def make_dirs(self, path: str) -> None:
        if self.fail_mkdir:
            raise PermissionError(13, "Permission denied", path)
        self.entries[path] = DIRECTORY

    def list_dir(self, path: str) -> List[str]:
        return [
            os.path.basename(entry)
            for entry in self.entries
            if entry != path and os.path.dirname(entry) == path
        ]

    def stat(self, path: str) -> EntryStat:
        value = self.entries[path]
        if value == DIRECTORY:
            return EntryStat(DIRECTORY)
        return EntryStat(FILE, int(value))


def test_estimate_uses_memory_heuristics() -> None:
    fs = _FakeFilesystem({"/uploads": DIRECTORY, "/uploads/a.bin": 1 * GIB})
    estimator = DiskUsageEstimator(host=_FakeHost(), filesystem=fs)

    usage = estimator.estimate("/uploads")

    assert usage.used == 1 * GIB
    assert usage.total == 160 * GIB
    assert usage.free == 159 * GIB
    assert usage.used_percentage == pytest.approx(1 / 160 * 100)


def test_free_never_below_five_times_free_memory() -> None:
    fs = _FakeFilesystem({"/uploads": DIRECTORY, "/uploads/huge.bin": 200 * GIB})
    estimator = DiskUsageEstimator(host=_FakeHost(total=16 * GIB, free=2 * GIB), filesystem=fs)

    usage = estimator.estimate("/uploads")

    assert usage.total == 160 * GIB
    assert usage.used == 200 * GIB
    assert usage.free == 10 * GIB
    assert usage.used_percentage == pytest.approx(125.0)


@pytest.mark.parametrize(
    ("used", "total_memory", "free_memory", "expected"),
    [
        (0, 100, 1, (1000, 1000)),
        (999, 100, 1, (1000, 5)),
        (1000, 100, 1, (1000, 5)),
        (1001, 100, 0, (1000, 0)),
        (0, 0, 0, (0, 0)),
    ],
)
def test_estimate_capacity_boundaries(used, total_memory, free_memory, expected) -> None:  # type: ignore[no-untyped-def]
    assert estimate_capacity(used, total_memory, free_memory) == expected


def test_zero_total_memory_reports_zero_percent() -> None:
    fs = _FakeFilesystem({"/uploads": DIRECTORY, "/uploads/a.bin": 10})
    estimator = DiskUsageEstimator(host=_FakeHost(total=0, free=0), filesystem=fs)

    usage = estimator.estimate("/uploads")

    assert usage.total == 0
    assert usage.used == 10
    assert usage.used_percentage == 0


def test_missing_directory_is_created_and_empty(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "uploads"
    estimator = DiskUsageEstimator(host=_FakeHost())

    usage = estimator.estimate(target)

    assert target.is_dir()
    assert usage.used == 0
    assert usage.used_percentage == 0


def test_relative_path_resolved_against_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "uploads").mkdir()
    (tmp_path / "uploads" / "f.bin").write_bytes(b"x" * 300)
    estimator = DiskUsageEstimator(host=_FakeHost())

    assert estimator.estimate("./uploads").used == 300


def test_directory_creation_failure_returns_fallback(caplog: pytest.LogCaptureFixture) -> None:
    estimator = DiskUsageEstimator(host=_FakeHost(), filesystem=_FakeFilesystem({}, fail_mkdir=True))

    with caplog.at_level(logging.ERROR):
        usage = estimator.estimate("/uploads")

    assert usage.total == 500 * GIB
    assert usage.free == 100 * GIB
    assert usage.used == 400 * GIB
    assert usage.used_percentage == pytest.approx(80.0)
    assert "Error getting disk usage" in caplog.text


def test_host_failure_returns_fallback() -> None:
    fs = _FakeFilesystem({"/uploads": DIRECTORY})
    estimator = DiskUsageEstimator(host=_FakeHost(fail=True), filesystem=fs)

    assert estimator.estimate("/uploads") == fallback_disk_usage()


def test_configured_multipliers_are_applied() -> None:
    config = DiskEstimatorConfig(disk_to_memory_ratio=4, free_memory_multiplier=2)
    fs = _FakeFilesystem({"/uploads": DIRECTORY, "/uploads/a.bin": 50})
    estimator = DiskUsageEstimator(config, host=_FakeHost(total=100, free=40), filesystem=fs)

    usage = estimator.estimate("/uploads")

    assert usage.total == 400
    assert usage.free == 350


def test_default_path_comes_from_config(tmp_path: Path) -> None:
    config = DiskEstimatorConfig(uploads_path=tmp_path / "configured")
    estimator = DiskUsageEstimator(config, host=_FakeHost())

    estimator.estimate()

    assert (tmp_path / "configured").is_dir()


def test_fallback_free_cannot_exceed_total() -> None:
    with pytest.raises(ValidationError):
        DiskEstimatorConfig(fallback_total_bytes=10, fallback_free_bytes=20)
