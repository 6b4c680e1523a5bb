"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package.

Producers:
    - FileLineSource: Lines of a text file on disk
    - InMemoryLineSource: Fixed lines for development/testing

Decorators:
    - CachedLineSource: TTL-bounded caching wrapper
    - LoggingLineSource: Call logging wrapper

Message Sinks:
    - ConsoleLogger: Timestamped console output
    - StdlibLogger: Forwards to the logging module
    - StructuredLogger: structlog events

Metrics:
    - InMemoryMetricsCollector: Per-source cache hit, miss and fill summaries

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - Decorators hold, and implement, the protocol they wrap
"""

from line_service.adapters.cached_source import CachedLineSource
from line_service.adapters.console_logger import ConsoleLogger
from line_service.adapters.file_source import FileLineSource
from line_service.adapters.logging_source import LoggingLineSource
from line_service.adapters.memory_source import InMemoryLineSource
from line_service.adapters.metrics_collector import (
    CacheMetrics,
    InMemoryMetricsCollector,
)
from line_service.adapters.stdlib_logger import StdlibLogger
from line_service.adapters.structured_logger import StructuredLogger

__all__ = [
    "CacheMetrics",
    "CachedLineSource",
    "ConsoleLogger",
    "FileLineSource",
    "InMemoryLineSource",
    "InMemoryMetricsCollector",
    "LoggingLineSource",
    "StdlibLogger",
    "StructuredLogger",
]
