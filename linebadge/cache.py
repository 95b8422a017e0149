from __future__ import annotations

import logging
import threading
from pathlib import Path

from .file_utils import normalize_posix_path
from .models import CacheEntry, FileMetadata, LineCountResult

log = logging.getLogger(__name__)


class CountCache:
    """Path -> CacheEntry store with metadata-driven invalidation only.

    There is no TTL: an entry lives until a lookup sees different size or
    mtime, or until it is dropped explicitly. Each path is independent, and
    concurrent writers to one path resolve as last-writer-wins.
    """

    def __init__(self):
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(path: str | Path) -> str:
        return normalize_posix_path(path)

    def get(self, path: str | Path, meta: FileMetadata) -> LineCountResult | None:
        """Return the cached result only when it was computed for ``meta``."""
        with self._lock:
            entry = self._entries.get(self.key(path))
        if entry is None or not entry.matches(meta):
            return None
        return entry.result

    def peek(self, path: str | Path) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(self.key(path))

    def put(self, path: str | Path, meta: FileMetadata, result: LineCountResult) -> CacheEntry:
        entry = CacheEntry(result=result, mtime_ms=meta.mtime_ms, size_bytes=meta.size_bytes)
        with self._lock:
            self._entries[self.key(path)] = entry
        return entry

    def invalidate(self, path: str | Path) -> bool:
        with self._lock:
            removed = self._entries.pop(self.key(path), None)
        if removed is not None:
            log.debug("cache: dropped %s", path)
        return removed is not None

    def clear(self) -> int:
        with self._lock:
            n = len(self._entries)
            self._entries.clear()
        log.debug("cache: cleared %d entries", n)
        return n

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: str | Path) -> bool:
        with self._lock:
            return self.key(path) in self._entries
