"""
Line Service - Composable Line Sources with Caching and Call Logging.

Exposes a line-oriented data source behind one read contract and lets
cross-cutting behaviors be stacked onto it without touching the source.

Architecture:
    - Ports & Adapters: protocols in interfaces, implementations in adapters
    - Decorator pattern: caching and logging wrap any LineSource
    - Dependency Injection for testability (store, clock, sinks)
    - Configuration-driven assembly via YAML

Main Components:
    - domain: Line sequence type and error taxonomy
    - interfaces: LineSource, MessageSink, MetricsCollector protocols
    - caching: Thread-safe CacheStore
    - adapters: Producers, decorators, message sinks
    - config: Configuration models and loaders
    - pipeline: Composition root

Example:
    >>> from datetime import timedelta
    >>> from line_service import FileLineSource, PipelineBuilder
    >>> pipeline = (
    ...     PipelineBuilder(FileLineSource("data/sample.txt"))
    ...     .cached(timedelta(minutes=5))
    ...     .logged()
    ...     .build()
    ... )
    >>> lines = pipeline.produce_lines()

"""

import logging

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Line Service.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import line_service
        >>> line_service.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("line_service").setLevel(level)


from line_service.adapters import (  # noqa: E402
    CachedLineSource,
    ConsoleLogger,
    FileLineSource,
    InMemoryLineSource,
    LoggingLineSource,
)
from line_service.caching import CacheEntry, CacheStore  # noqa: E402
from line_service.domain import (  # noqa: E402
    ConfigurationError,
    LineServiceError,
    SourceUnavailable,
)
from line_service.interfaces import LineSource  # noqa: E402
from line_service.pipeline import PipelineBuilder, build_pipeline  # noqa: E402

__all__ = [
    "CacheEntry",
    "CacheStore",
    "CachedLineSource",
    "ConfigurationError",
    "ConsoleLogger",
    "FileLineSource",
    "InMemoryLineSource",
    "LineServiceError",
    "LineSource",
    "LoggingLineSource",
    "PipelineBuilder",
    "SourceUnavailable",
    "build_pipeline",
    "configure_logging",
]
