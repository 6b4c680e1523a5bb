"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List

import pytest

from line_service.adapters.memory_source import InMemoryLineSource
from line_service.adapters.metrics_collector import InMemoryMetricsCollector
from line_service.caching.cache_store import CacheStore
from line_service.config.models import ServiceConfig


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class RecordingSink:
    """Leveled message sink that keeps every message."""

    def __init__(self) -> None:
        self.messages: List[tuple] = []

    def info(self, message: str) -> None:
        self.messages.append(("INFO", message))

    def warning(self, message: str) -> None:
        self.messages.append(("WARN", message))

    def error(self, message: str) -> None:
        self.messages.append(("ERROR", message))

    def texts(self, level: str = None) -> List[str]:
        return [m for lvl, m in self.messages if level is None or lvl == level]


@pytest.fixture
def clock() -> ManualClock:
    """Deterministic clock starting at a fixed instant."""
    return ManualClock(datetime(2024, 12, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def sink() -> RecordingSink:
    """Message sink that records instead of printing."""
    return RecordingSink()


@pytest.fixture
def store() -> CacheStore:
    """Fresh, private cache store."""
    return CacheStore()


@pytest.fixture
def abc_source() -> InMemoryLineSource:
    """Producer serving ["a", "b", "c"]."""
    return InMemoryLineSource(["a", "b", "c"])


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Small newline-delimited data file."""
    path = tmp_path / "sample.txt"
    path.write_text("".join(f"Line {i}\n" for i in range(1, 101)), encoding="utf-8")
    return path


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def default_config() -> ServiceConfig:
    """Create default service configuration."""
    return ServiceConfig()
