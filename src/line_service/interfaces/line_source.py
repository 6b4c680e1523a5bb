"""
Line Source Protocol.

Defines the read contract shared by every stage of a pipeline. Producers
(file, in-memory) implement it directly; decorators (caching, logging)
implement it while holding another LineSource, so any stage can be nested
inside any other in any order.

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - A single operation with no arguments
    - Failures are signalled with SourceUnavailable
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from line_service.domain.types import LineStream


@runtime_checkable
class LineSource(Protocol):
    """Abstract interface for an ordered source of text lines."""

    def produce_lines(self) -> LineStream:
        """
        Produce the ordered lines of the backing source.

        Returns:
            Iterable of text lines, in source order

        Raises:
            SourceUnavailable: If the backing source cannot be read
        """
        ...
