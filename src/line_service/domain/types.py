"""
Domain Types.

Shared type aliases used across the pipeline layers.
"""

from __future__ import annotations

from typing import Iterable, Tuple

# Materialized, immutable result of a layer that buffers its input
LineSequence = Tuple[str, ...]

# What a producer may hand back: a lazy iterator or a materialized sequence
LineStream = Iterable[str]
