"""
Logging Line Source - Call Logging Wrapper for Line Sources.

Records every produce_lines() call on the wrapped source: when it
started, how many lines it returned and how long it took, or how long it
ran before failing.

Design Notes:
    - Decorator/Wrapper pattern over the LineSource protocol
    - Content is passed through unchanged
    - The inner result is fully materialized to count it, which removes
      any laziness of the layers beneath
    - Errors are recorded, then re-raised as the same object
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional

from line_service.domain.errors import ConfigurationError
from line_service.domain.types import LineSequence
from line_service.interfaces.line_source import LineSource
from line_service.interfaces.message_sink import PlainSink

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggingLineSource:
    """Call logging wrapper for LineSource implementations."""

    def __init__(
        self,
        source: LineSource,
        sink: Optional[PlainSink] = None,
        name: str = "DataService",
    ) -> None:
        """
        Initialize logging source.

        Args:
            source: Underlying line source to wrap
            sink: Receives one formatted message per event (print if None)
            name: Label used in messages

        Raises:
            ConfigurationError: If source is missing
        """
        if source is None:
            raise ConfigurationError("LoggingLineSource requires a source")
        if not callable(getattr(source, "produce_lines", None)):
            raise ConfigurationError(
                f"{type(source).__name__} does not implement produce_lines()"
            )

        self.source = source
        self._sink = sink or print
        self.name = name

    def produce_lines(self) -> LineSequence:
        """
        Produce the wrapped source's lines, logging the call.

        Raises:
            SourceUnavailable: Propagated unchanged from the wrapped source
        """
        self._sink(f"[{_timestamp()}] {self.name}.produce_lines() called")

        started = time.perf_counter()
        try:
            result = tuple(self.source.produce_lines())
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self._sink(
                f"[{_timestamp()}] {self.name}.produce_lines() failed after "
                f"{elapsed_ms:.0f}ms. Error: {e}"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        self._sink(
            f"[{_timestamp()}] {self.name}.produce_lines() completed successfully. "
            f"Returned {len(result)} lines in {elapsed_ms:.0f}ms"
        )
        return result

    def __repr__(self) -> str:
        return f"LoggingLineSource({self.source!r})"


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)
