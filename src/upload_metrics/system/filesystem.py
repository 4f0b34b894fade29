"""Filesystem access layer and the best-effort directory size walker."""
from __future__ import annotations

import logging
import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .models import DirectoryScan

LOGGER = logging.getLogger(__name__)

DIRECTORY = "directory"
FILE = "file"
SYMLINK = "symlink"
OTHER = "other"


@dataclass(frozen=True)
class EntryStat:
    """Kind and byte length of a single directory entry."""

    kind: str
    size: int = 0


class Filesystem(ABC):
    """Abstract filesystem used by the walker and the disk estimator."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def make_dirs(self, path: str) -> None:
        """Create ``path`` and any missing parents. Existing paths are left alone."""
        pass

    @abstractmethod
    def list_dir(self, path: str) -> List[str]:
        """Return entry names of a directory. Raises ``OSError`` when unreadable."""
        pass

    @abstractmethod
    def stat(self, path: str) -> EntryStat:
        """Describe an entry without following symlinks. Raises ``OSError`` on failure."""
        pass


class LocalFilesystem(Filesystem):
    """Filesystem of the running host."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def make_dirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def list_dir(self, path: str) -> List[str]:
        return os.listdir(path)

    def stat(self, path: str) -> EntryStat:
        result = os.lstat(path)
        mode = result.st_mode
        if stat.S_ISLNK(mode):
            return EntryStat(SYMLINK)
        if stat.S_ISDIR(mode):
            return EntryStat(DIRECTORY)
        if stat.S_ISREG(mode):
            return EntryStat(FILE, result.st_size)
        return EntryStat(OTHER)


def scan_directory(path: os.PathLike[str] | str, filesystem: Optional[Filesystem] = None) -> DirectoryScan:
    """Sum the sizes of all regular files below ``path``.

    Entries that cannot be listed or stat'ed are recorded in
    ``DirectoryScan.skipped`` and contribute zero bytes. Symlinks are never
    followed and count as zero. The walker does not create ``path``.
    """

    fs = filesystem or LocalFilesystem()
    used = 0
    skipped: List[Tuple[str, str]] = []
    for entry, size, error in _walk(fs, os.fspath(path)):
        if error is not None:
            LOGGER.debug("Skipping unreadable entry %s: %s", entry, error)
            skipped.append((entry, error))
            continue
        used += size

    LOGGER.debug("Scanned %s: %d bytes used, %d entries skipped", path, used, len(skipped))
    return DirectoryScan(used=used, skipped=tuple(skipped))


def directory_size(path: os.PathLike[str] | str, filesystem: Optional[Filesystem] = None) -> int:
    """Return the number of bytes used by regular files below ``path``."""
    return scan_directory(path, filesystem).used


def _walk(fs: Filesystem, root: str) -> Iterator[Tuple[str, int, Optional[str]]]:
    """Yield ``(entry, size, error)`` for every file or failure below ``root``."""
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            names = fs.list_dir(directory)
        except OSError as exc:
            yield directory, 0, _describe(exc)
            continue

        for name in names:
            entry = os.path.join(directory, name)
            try:
                info = fs.stat(entry)
            except OSError as exc:
                yield entry, 0, _describe(exc)
                continue

            if info.kind == DIRECTORY:
                pending.append(entry)
            elif info.kind == FILE:
                yield entry, info.size, None


def _describe(exc: OSError) -> str:
    return f"{type(exc).__name__}: {exc}"
