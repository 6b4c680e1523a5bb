"""
Message Sink Protocols.

Two sink shapes are consumed by the pipeline layers:
    - MessageSink: leveled sink used by producers and the caching layer
    - PlainSink: a bare callable taking one line, used by the logging layer

Design Notes:
    - Sinks are assumed fast and non-blocking
    - Sinks never return a value
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

PlainSink = Callable[[str], None]


@runtime_checkable
class MessageSink(Protocol):
    """Abstract interface for leveled log messages."""

    def info(self, message: str) -> None:
        """Record an informational message."""
        ...

    def warning(self, message: str) -> None:
        """Record a warning."""
        ...

    def error(self, message: str) -> None:
        """Record an error."""
        ...
