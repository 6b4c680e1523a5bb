"""
In-Memory Cache Metrics.

Collects the metrics caching layers report (cache_hit, cache_miss,
cache_fill_seconds) and folds them into one running summary per tag
value, so a caller can see how well each producer is being cached.

Design Notes:
    - Summaries are grouped by one tag ("source" by default; "key"
      separates layers that wrap producers of the same type)
    - Metrics with other names are only totalled
    - Thread-safe; readers get copies
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace
from threading import Lock
from typing import Dict, Optional

CACHE_HIT = "cache_hit"
CACHE_MISS = "cache_miss"
CACHE_FILL = "cache_fill_seconds"

UNTAGGED = "unknown"


@dataclass
class CacheMetrics:
    """Running cache figures for one group."""

    hits: int = 0
    misses: int = 0
    fills: int = 0
    fill_seconds: float = 0.0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    @property
    def mean_fill_seconds(self) -> float:
        return self.fill_seconds / self.fills if self.fills else 0.0


class InMemoryMetricsCollector:
    """
    MetricsCollector that summarizes caching layers in memory.

    Usage:
        metrics = InMemoryMetricsCollector(group_by="key")
        cached = CachedLineSource(source, 300, metrics_collector=metrics)
        cached.produce_lines()
        metrics.summary()[cached.cache_key].misses  # 1
    """

    def __init__(self, group_by: str = "source") -> None:
        """
        Initialize the collector.

        Args:
            group_by: Tag whose value names a summary group
        """
        self.group_by = group_by
        self._groups: Dict[str, CacheMetrics] = defaultdict(CacheMetrics)
        self._other: Dict[str, float] = defaultdict(float)
        self._lock = Lock()

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            if name == CACHE_FILL:
                group = self._groups[self._group(tags)]
                group.fills += 1
                group.fill_seconds += duration_seconds
            else:
                self._other[name] += duration_seconds

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            if name == CACHE_HIT:
                self._groups[self._group(tags)].hits += value
            elif name == CACHE_MISS:
                self._groups[self._group(tags)].misses += value
            else:
                self._other[name] += value

    def summary(self) -> Dict[str, CacheMetrics]:
        """Get a copy of the per-group cache figures."""
        with self._lock:
            return {name: replace(m) for name, m in self._groups.items()}

    def totals(self) -> CacheMetrics:
        """Get cache figures summed over every group."""
        with self._lock:
            total = CacheMetrics()
            for m in self._groups.values():
                total.hits += m.hits
                total.misses += m.misses
                total.fills += m.fills
                total.fill_seconds += m.fill_seconds
            return total

    def other(self) -> Dict[str, float]:
        """Get totals for metrics that are not cache figures."""
        with self._lock:
            return dict(self._other)

    def clear(self) -> None:
        with self._lock:
            self._groups.clear()
            self._other.clear()

    def _group(self, tags: Optional[Dict[str, str]]) -> str:
        return (tags or {}).get(self.group_by, UNTAGGED)
