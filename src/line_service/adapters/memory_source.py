"""
In-Memory Line Source.

A deterministic producer for development and testing. Serves a fixed
list of lines and counts how often it was asked for them.
"""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional

from line_service.domain.errors import SourceUnavailable


class InMemoryLineSource:
    """Fake line source for development and testing."""

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        fail_with: Optional[SourceUnavailable] = None,
    ) -> None:
        """
        Initialize in-memory source.

        Args:
            lines: Lines to serve
            fail_with: If set, every call raises this error instead
        """
        self._lines: List[str] = list(lines or [])
        self._fail_with = fail_with
        self._lock = threading.Lock()
        self.call_count = 0

    def produce_lines(self) -> List[str]:
        """Return a copy of the configured lines."""
        with self._lock:
            self.call_count += 1
            if self._fail_with is not None:
                raise self._fail_with
            return list(self._lines)

    def replace(self, lines: Iterable[str]) -> None:
        """Swap the served lines."""
        with self._lock:
            self._lines = list(lines)

    def fail(self, error: SourceUnavailable) -> None:
        """Make subsequent calls raise error."""
        with self._lock:
            self._fail_with = error

    def recover(self) -> None:
        """Serve lines again after fail()."""
        with self._lock:
            self._fail_with = None
