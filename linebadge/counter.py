from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .cache import CountCache
from .classifier import classify, split_lines
from .config import LineCountConfig
from .errors import IOUnavailable, NotApplicable
from .file_utils import (
    ESTIMATE_SAMPLE_BYTES,
    LocalFileSystem,
    decode_text,
    estimate_line_count,
    line_count_from_bytes,
)
from .filters import PathFilter
from .models import CacheEntry, FileMetadata, LineCountResult
from .syntax import SyntaxRegistry

log = logging.getLogger(__name__)


class LineCounter:
    """Counting entry point: stat, consult the cache, classify on a miss.

    ``count`` is a coroutine. Blocking stat/read calls run in worker
    threads so the event loop is never held up, and concurrent requests for
    the same path and metadata share one computation.

    The filesystem is injectable (anything with ``stat``, ``read_bytes`` and
    ``read_sample``), which keeps tests deterministic.
    """

    def __init__(
        self,
        config: LineCountConfig | None = None,
        *,
        registry: SyntaxRegistry | None = None,
        fs=None,
        cache: CountCache | None = None,
        root: str | Path | None = None,
    ):
        self.fs = fs or LocalFileSystem()
        self.cache = cache if cache is not None else CountCache()
        self._base_registry = registry or SyntaxRegistry()
        self._root = root
        self._inflight: dict[tuple[str, float, int, int], asyncio.Future] = {}
        # Bumped whenever cached results stop being valid as a whole; results
        # computed under an older generation are returned but never stored.
        self._generation = 0
        self._apply_config(config or LineCountConfig())

    def _apply_config(self, config: LineCountConfig) -> None:
        self.config = config
        if config.include_extensions:
            self.registry = self._base_registry.with_extensions(list(config.include_extensions))
        else:
            self.registry = self._base_registry
        self.filter = PathFilter(config, root=self._root)

    def update_config(self, config: LineCountConfig) -> None:
        """Swap configuration; every cached entry is dropped."""
        self._apply_config(config)
        self.clear()

    async def count(self, path: str | Path) -> LineCountResult:
        """
        Return the line count for ``path``.

        Raises ``NotApplicable`` when no badge should be shown and
        ``IOUnavailable`` when the file cannot be stat-ed or read.
        """
        if not self.config.enabled:
            raise NotApplicable(path, "line counting is disabled")
        reason = self.filter.rejection_reason(path)
        if reason:
            raise NotApplicable(path, reason)

        meta = await self._stat(path)
        self._check_applicable(path, meta)

        cached = self.cache.get(path, meta)
        if cached is not None:
            log.debug("cache hit: %s", path)
            return cached

        key = (self.cache.key(path), meta.mtime_ms, meta.size_bytes, self._generation)
        fut = self._inflight.get(key)
        if fut is None:
            fut = asyncio.ensure_future(self._compute_and_store(path, meta, self._generation))
            self._inflight[key] = fut
            fut.add_done_callback(lambda done, k=key: self._forget(k, done))
        else:
            log.debug("joining in-flight count: %s", path)
        return await asyncio.shield(fut)

    async def count_many(self, paths) -> dict:
        """Count several paths concurrently; failures are returned, not raised."""
        paths = list(paths)
        results = await asyncio.gather(*(self.count(p) for p in paths), return_exceptions=True)
        return dict(zip(paths, results))

    def cached(self, path: str | Path) -> CacheEntry | None:
        return self.cache.peek(path)

    def invalidate(self, path: str | Path) -> bool:
        return self.cache.invalidate(path)

    def rename(self, old_path: str | Path, new_path: str | Path) -> None:
        self.cache.invalidate(old_path)
        self.cache.invalidate(new_path)

    def clear(self) -> int:
        self._generation += 1
        self._inflight.clear()
        return self.cache.clear()

    def _forget(self, key, done: asyncio.Future) -> None:
        if self._inflight.get(key) is done:
            del self._inflight[key]
        if not done.cancelled():
            # Every awaiter may have been cancelled; mark the outcome as retrieved.
            done.exception()

    async def _stat(self, path: str | Path) -> FileMetadata:
        try:
            return await asyncio.to_thread(self.fs.stat, path)
        except OSError as e:
            # The file is gone or unreadable; whatever was cached for it is stale.
            self.cache.invalidate(path)
            raise IOUnavailable(path, f"stat failed: {e.strerror or e}") from e

    def _check_applicable(self, path: str | Path, meta: FileMetadata) -> None:
        if meta.is_symlink and not self.config.follow_symlinks:
            raise NotApplicable(path, "symbolic link")
        if not meta.is_file:
            raise NotApplicable(path, "not a regular file")

    async def _compute_and_store(
        self, path: str | Path, meta: FileMetadata, generation: int
    ) -> LineCountResult:
        if meta.size_bytes > self.config.size_limit:
            result = await self._estimate(path, meta)
        else:
            result = await self._count_exact(path)
        if generation == self._generation:
            self.cache.put(path, meta, result)
        else:
            log.debug("dropping result computed before cache reset: %s", path)
        return result

    async def _estimate(self, path: str | Path, meta: FileMetadata) -> LineCountResult:
        sample = await self._read(path, self.fs.read_sample, ESTIMATE_SAMPLE_BYTES)
        total = estimate_line_count(meta.size_bytes, sample)
        log.debug(
            "estimated %s: %d lines from %d/%d bytes", path, total, len(sample), meta.size_bytes
        )
        return LineCountResult(total=total, estimated=True)

    async def _count_exact(self, path: str | Path) -> LineCountResult:
        blob = await self._read(path, self.fs.read_bytes)
        text = decode_text(blob)
        if text is None:
            log.debug("binary or undecodable content, falling back to byte count: %s", path)
            return LineCountResult(total=line_count_from_bytes(blob), estimated=True)

        syntax = self.registry.lookup_path(path)
        if syntax is None:
            return LineCountResult(total=sum(1 for _ in split_lines(text)), estimated=False)
        return LineCountResult.from_parse(classify(text, syntax))

    async def _read(self, path: str | Path, reader, *args) -> bytes:
        try:
            return await asyncio.to_thread(reader, path, *args)
        except OSError as e:
            raise IOUnavailable(path, f"read failed: {e.strerror or e}") from e
