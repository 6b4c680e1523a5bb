"""
Cached Line Source - Caching Wrapper for Line Sources.

Wraps any LineSource implementation and memoizes its complete output for
a fixed time-to-live.

Design Notes:
    - Decorator/Wrapper pattern over the LineSource protocol
    - Whole result sets are cached, so a hit costs the same whatever the
      size of the data; a miss materializes the full inner stream
    - Thread-safe (uses CacheStore's lock); concurrent misses on one key
      may each fetch, and the last install wins
    - Failures are never cached
"""

from __future__ import annotations

import logging
import threading
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from line_service.adapters.console_logger import ConsoleLogger
from line_service.caching.cache_store import (
    CacheEntry,
    CacheStore,
    CacheStoreProtocol,
)
from line_service.domain.errors import ConfigurationError
from line_service.domain.types import LineSequence
from line_service.interfaces.line_source import LineSource
from line_service.interfaces.message_sink import MessageSink
from line_service.interfaces.metrics_collector import MetricsCollector

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_INTERVAL = 50_000


def utcnow() -> datetime:
    """Default clock for cache timestamps."""
    return datetime.now(timezone.utc)


class CachedLineSource:
    """
    Caching wrapper for LineSource implementations.

    Serves the wrapped source's lines from a CacheStore while the stored
    entry is no older than the TTL, and refetches everything otherwise.

    Usage:
        source = FileLineSource("data/sample.txt")
        cached = CachedLineSource(source, timedelta(minutes=5))

        # First call: cache miss, drains the file
        lines = cached.produce_lines()

        # Within five minutes: cache hit, file untouched
        lines = cached.produce_lines()

    Memory: every miss buffers the full inner output, and the store keeps
    that buffer until it is replaced. Callers that need true streaming
    should read the inner source directly.
    """

    OPERATION = "produce_lines"

    def __init__(
        self,
        source: LineSource,
        ttl: Union[timedelta, float],
        logger: Optional[MessageSink] = None,
        store: Optional[CacheStoreProtocol] = None,
        clock: Optional[Callable[[], datetime]] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Initialize cached source.

        Args:
            source: Underlying line source to wrap
            ttl: Maximum entry age, as a timedelta or in seconds
            logger: Message sink for cache observations (console if None)
            store: Cache store (a private store is created if None)
            clock: Returns the current time (UTC now if None)
            progress_interval: Lines between progress messages on a miss
            metrics_collector: Optional metrics collector for tracking

        Raises:
            ConfigurationError: On a missing source, negative TTL, or
                non-positive progress interval
        """
        if source is None:
            raise ConfigurationError("CachedLineSource requires a source")
        if not callable(getattr(source, "produce_lines", None)):
            raise ConfigurationError(
                f"{type(source).__name__} does not implement produce_lines()"
            )

        if not isinstance(ttl, timedelta):
            ttl = timedelta(seconds=ttl)
        if ttl < timedelta(0):
            raise ConfigurationError(f"TTL must not be negative, got {ttl}")
        if progress_interval < 1:
            raise ConfigurationError(
                f"progress_interval must be positive, got {progress_interval}"
            )

        self.source = source
        self._ttl = ttl
        self._logger = logger or ConsoleLogger()
        self.store: CacheStoreProtocol = (
            store if store is not None else CacheStore()
        )
        self._clock = clock or utcnow
        self.progress_interval = progress_interval
        self.metrics = metrics_collector

        self._cache_key = self.store.key_for(self.OPERATION, source)

        self._hits = 0
        self._misses = 0
        self._counter_lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        """Fixed time-to-live of this layer's entries."""
        return self._ttl

    @property
    def cache_key(self) -> str:
        """Key of the store slot owned by this layer."""
        return self._cache_key

    def produce_lines(self) -> LineSequence:
        """
        Produce lines, from cache when fresh.

        Returns:
            Immutable sequence of lines

        Raises:
            SourceUnavailable: Propagated unchanged from the wrapped source
        """
        request_id = uuid.uuid4().hex[:8]
        now = self._clock()

        cached = self.store.lookup(self._cache_key, now, self._ttl)
        if cached is not None:
            self._record_hit()
            logger.debug(f"Cache HIT for {self._cache_key}")
            self._logger.info(
                f"[{request_id}] Cache HIT - serving {cached.line_count:,} cached lines"
            )
            return cached.lines

        self._record_miss()
        logger.debug(f"Cache MISS for {self._cache_key}")
        self._logger.info(f"[{request_id}] Cache MISS - fetching fresh data")

        started = time.perf_counter()
        try:
            lines = self._drain(request_id)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._logger.error(
                f"[{request_id}] Cache fill failed after {elapsed_ms:.0f}ms: {e}"
            )
            raise
        elapsed = time.perf_counter() - started

        entry = CacheEntry(lines=tuple(lines), cached_at=now, line_count=len(lines))
        self.store.install(self._cache_key, entry)

        if self.metrics:
            self.metrics.record_timing(
                "cache_fill_seconds",
                elapsed,
                tags=self._metric_tags(),
            )

        self._logger.info(
            f"[{request_id}] Cached {entry.line_count:,} lines in {elapsed * 1000:.0f}ms "
            f"(expires in {_describe_ttl(self._ttl)})"
        )
        return entry.lines

    def invalidate(self) -> bool:
        """
        Drop this layer's entry so the next call refetches.

        Returns:
            True if an entry was removed
        """
        return self.store.invalidate(self._cache_key)

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with store-wide stats and this layer's hit/miss counts
        """
        store_stats = self.store.get_stats()

        with self._counter_lock:
            hits, misses = self._hits, self._misses

        return {
            "cache": {
                "hits": store_stats.hits,
                "misses": store_stats.misses,
                "hit_rate": store_stats.hit_rate,
                "expirations": store_stats.expirations,
                "installs": store_stats.installs,
                "entries": store_stats.current_entries,
            },
            "source": {
                "key": self._cache_key,
                "hits": hits,
                "misses": misses,
            },
        }

    def _drain(self, request_id: str) -> List[str]:
        """Pull every line from the wrapped source."""
        lines: List[str] = []
        chunk_count = 0

        for line in self.source.produce_lines():
            lines.append(line)

            if len(lines) % self.progress_interval == 0:
                chunk_count += 1
                self._logger.info(
                    f"[{request_id}] Cached chunk {chunk_count}: {len(lines):,} lines"
                )

        return lines

    def _record_hit(self) -> None:
        """Record a cache hit."""
        with self._counter_lock:
            self._hits += 1

        if self.metrics:
            self.metrics.record_count(
                "cache_hit",
                1,
                tags=self._metric_tags(),
            )

    def _record_miss(self) -> None:
        """Record a cache miss."""
        with self._counter_lock:
            self._misses += 1

        if self.metrics:
            self.metrics.record_count(
                "cache_miss",
                1,
                tags=self._metric_tags(),
            )

    def _metric_tags(self) -> Dict[str, str]:
        return {"source": type(self.source).__name__, "key": self._cache_key}

    def __repr__(self) -> str:
        return f"CachedLineSource({self.source!r}, ttl={self._ttl})"


def _describe_ttl(ttl: timedelta) -> str:
    seconds = ttl.total_seconds()
    if seconds >= 60:
        return f"{seconds / 60:.0f} minutes"
    return f"{seconds:.0f} seconds"
