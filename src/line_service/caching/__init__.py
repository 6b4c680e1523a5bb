"""
Caching Layer.

Provides the storage side of the caching decorator:
    - CacheStore: Thread-safe mapping of cache keys to line snapshots
    - CacheEntry: One memoized fetch (lines, cached_at, line_count)
    - CacheStats: Statistics tracking for cache operations
"""

from line_service.caching.cache_store import (
    CacheEntry,
    CacheStats,
    CacheStore,
    CacheStoreProtocol,
)

__all__ = [
    "CacheEntry",
    "CacheStats",
    "CacheStore",
    "CacheStoreProtocol",
]
