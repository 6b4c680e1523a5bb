"""
Domain Layer - Core Types and Errors.

This package contains the core domain model for the Line Service.
Everything here is pure Python with no infrastructure dependencies.

Types:
    - LineSequence: Ordered, immutable collection of text lines

Errors:
    - LineServiceError: Base class for all package errors
    - SourceUnavailable: Backing source cannot supply data
    - ConfigurationError: Invalid construction arguments or config files
"""

from line_service.domain.errors import (
    ConfigurationError,
    LineServiceError,
    SourceUnavailable,
)
from line_service.domain.types import LineSequence

__all__ = [
    "ConfigurationError",
    "LineSequence",
    "LineServiceError",
    "SourceUnavailable",
]
