"""
Domain Errors.

Failure taxonomy for the Line Service:
    - SourceUnavailable is the only failure that travels through a pipeline
      at call time. Every wrapping layer lets it pass unchanged.
    - ConfigurationError is raised while a layer or pipeline is being
      built, never from produce_lines().
"""

from __future__ import annotations

from typing import Optional


class LineServiceError(Exception):
    """Base class for all Line Service errors."""


class SourceUnavailable(LineServiceError):
    """Raised when a producer cannot read its backing source."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


class ConfigurationError(LineServiceError, ValueError):
    """Raised when a component is constructed with invalid arguments."""
