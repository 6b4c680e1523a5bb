"""
Cache Store - Thread-Safe Mapping of Cache Keys to Line Snapshots.

Holds one fully materialized line sequence per cache key for the
caching layer.

Design Notes:
    - Thread-safe with a reentrant lock
    - Entries are frozen; install() replaces, never merges
    - Freshness is judged by the caller's TTL, not stored per entry
    - No size-based eviction: an entry lives until it is replaced or
      invalidated, its source is garbage collected, or the store is cleared
"""

from __future__ import annotations

import itertools
import logging
import threading
import weakref
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Protocol, Tuple, runtime_checkable

from line_service.domain.types import LineSequence

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheStoreProtocol(Protocol):
    """
    What the caching layer needs from a store.

    CacheStore is the in-process implementation; anything with these
    methods can be injected instead.
    """

    def key_for(self, operation: str, source: Any) -> str:
        """Get the key reserved for one source instance."""
        ...

    def lookup(
        self, key: str, now: datetime, ttl: timedelta
    ) -> Optional["CacheEntry"]:
        """Get a fresh entry or None."""
        ...

    def get(self, key: str) -> Optional["CacheEntry"]:
        """Get the stored entry regardless of age."""
        ...

    def install(self, key: str, entry: "CacheEntry") -> None:
        """Replace the entry stored under key."""
        ...

    def invalidate(self, key: str) -> bool:
        """Drop the entry stored under key."""
        ...

    def get_stats(self) -> "CacheStats":
        """Get a snapshot of the store statistics."""
        ...


@dataclass(frozen=True)
class CacheEntry:
    """One memoized fetch of a line source."""

    lines: LineSequence
    cached_at: datetime
    line_count: int

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the entry was fetched."""
        return now - self.cached_at

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """An entry stays valid while its age is at most the TTL."""
        return self.age(now) > ttl


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    expirations: int = 0
    installs: int = 0
    current_entries: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class CacheStore:
    """
    Concurrent mapping from cache key to CacheEntry.

    Reads and writes of a key are atomic with respect to each other: a
    reader sees either no entry or one complete entry. Concurrent installs
    on the same key resolve to whichever finishes last.

    Cache Key Format:
        f"{operation}:{type_name}:{token}"

        Example: "produce_lines:FileLineSource:17"

        The token comes from a process-wide counter, so a key is never
        handed to a second source instance, even one allocated at the
        address of a collected one. When a source is garbage collected
        its entry is dropped with it.
    """

    _shared: Optional["CacheStore"] = None
    _shared_lock = threading.Lock()
    _tokens = itertools.count(1)

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._entries: Dict[str, CacheEntry] = {}
        self._slots: Dict[Tuple[str, int], Tuple[weakref.ref, str]] = {}
        self._lock = threading.RLock()
        self._stats = CacheStats()

    @classmethod
    def shared(cls) -> "CacheStore":
        """
        Get the process-wide store.

        Layers built against the shared store see each other's entries
        whenever their keys match.
        """
        with cls._shared_lock:
            if cls._shared is None:
                cls._shared = cls()
            return cls._shared

    def lookup(
        self,
        key: str,
        now: datetime,
        ttl: timedelta,
    ) -> Optional[CacheEntry]:
        """
        Get a fresh entry.

        Args:
            key: Cache key
            now: Current time of the caller's clock
            ttl: Maximum age the caller accepts

        Returns:
            The stored entry if present and not older than ttl, else None
        """
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired(now, ttl):
                self._stats.expirations += 1
                self._stats.misses += 1
                logger.debug(f"Cache EXPIRED: {key} (age {entry.age(now)})")
                return None

            self._stats.hits += 1
            return entry

    def get(self, key: str) -> Optional[CacheEntry]:
        """Get the stored entry regardless of age, without touching stats."""
        with self._lock:
            return self._entries.get(key)

    def install(self, key: str, entry: CacheEntry) -> None:
        """
        Install an entry, replacing any previous one.

        Args:
            key: Cache key
            entry: Fully built entry
        """
        with self._lock:
            self._entries[key] = entry
            self._stats.installs += 1
            logger.debug(f"Cache SET: {key} ({entry.line_count} lines)")

    def invalidate(self, key: str) -> bool:
        """
        Invalidate a cache entry.

        Args:
            key: Cache key to invalidate

        Returns:
            True if entry was removed, False if not found
        """
        with self._lock:
            if self._entries.pop(key, None) is not None:
                logger.debug(f"Cache INVALIDATED: {key}")
                return True
            return False

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._entries.clear()
            logger.info("Cache CLEARED")

    def get_stats(self) -> CacheStats:
        """Get a snapshot of the cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                expirations=self._stats.expirations,
                installs=self._stats.installs,
                current_entries=len(self._entries),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def key_for(self, operation: str, source: Any) -> str:
        """
        Get the cache key bound to one source instance.

        Asking again for a live instance returns the same key. Two distinct
        instances never share a key, even when they would produce identical
        data. Instances that cannot be weakly referenced get a fresh key on
        every call.

        Args:
            operation: Operation name (e.g., "produce_lines")
            source: The wrapped instance

        Returns:
            Cache key in format "operation:type_name:token"
        """
        slot = (operation, id(source))
        with self._lock:
            known = self._slots.get(slot)
            if known is not None and known[0]() is source:
                return known[1]

            key = f"{operation}:{type(source).__name__}:{next(self._tokens)}"
            try:
                ref = weakref.ref(source)
            except TypeError:
                return key

            self._slots[slot] = (ref, key)
            weakref.finalize(source, self._release, slot, key).atexit = False
            return key

    def _release(self, slot: Tuple[str, int], key: str) -> None:
        """Forget a collected source's key and drop its entry."""
        with self._lock:
            known = self._slots.get(slot)
            if known is not None and known[1] == key:
                del self._slots[slot]
            if self._entries.pop(key, None) is not None:
                logger.debug(f"Cache RELEASED: {key}")
