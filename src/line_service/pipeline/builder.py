"""
Pipeline Builder - Composition Root for Line Sources.

Nests line sources into pipelines. Every stage implements LineSource, so
stages can be stacked in any order; the builder only records the
outermost stage built so far.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from line_service.adapters.cached_source import (
    DEFAULT_PROGRESS_INTERVAL,
    CachedLineSource,
)
from line_service.adapters.console_logger import ConsoleLogger
from line_service.adapters.file_source import FileLineSource
from line_service.adapters.logging_source import LoggingLineSource
from line_service.adapters.stdlib_logger import StdlibLogger
from line_service.adapters.structured_logger import (
    StructuredLogger,
    configure_structlog,
)
from line_service.caching.cache_store import CacheStore, CacheStoreProtocol
from line_service.config.models import LoggingConfig, ServiceConfig
from line_service.domain.errors import ConfigurationError
from line_service.interfaces.line_source import LineSource
from line_service.interfaces.message_sink import MessageSink, PlainSink
from line_service.interfaces.metrics_collector import MetricsCollector

logger = logging.getLogger(__name__)


class PipelineBuilder:
    """
    Fluent builder for nested line sources.

    Usage:
        pipeline = (
            PipelineBuilder(FileLineSource("data/sample.txt"))
            .cached(timedelta(minutes=10))
            .logged()
            .build()
        )
    """

    def __init__(
        self,
        source: LineSource,
        logger: Optional[MessageSink] = None,
    ) -> None:
        """
        Initialize builder.

        Args:
            source: Innermost producer
            logger: Message sink handed to caching stages (console if None)
        """
        if source is None:
            raise ConfigurationError("PipelineBuilder requires a source")
        self._current = source
        self._logger = logger or ConsoleLogger()

    def cached(
        self,
        ttl: Union[timedelta, float],
        store: Optional[CacheStoreProtocol] = None,
        clock: Optional[Callable[[], datetime]] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> "PipelineBuilder":
        """Wrap the current stage in a caching layer."""
        self._current = CachedLineSource(
            self._current,
            ttl,
            logger=self._logger,
            store=store,
            clock=clock,
            progress_interval=progress_interval,
            metrics_collector=metrics_collector,
        )
        return self

    def logged(
        self,
        sink: Optional[PlainSink] = None,
        name: str = "DataService",
    ) -> "PipelineBuilder":
        """Wrap the current stage in a call logging layer."""
        self._current = LoggingLineSource(self._current, sink=sink, name=name)
        return self

    def wrap(self, layer: Callable[[LineSource], LineSource]) -> "PipelineBuilder":
        """Wrap the current stage with any LineSource-to-LineSource factory."""
        self._current = layer(self._current)
        return self

    def build(self) -> LineSource:
        """Get the outermost stage."""
        return self._current


def create_message_sink(config: LoggingConfig) -> MessageSink:
    """
    Create the leveled message sink selected by config.

    The stdlib sink logs through a "line_service.<name>" child logger and
    sets the level there only, leaving the package logger to
    configure_logging().

    Args:
        config: Logging configuration

    Returns:
        A MessageSink implementation
    """
    if config.sink == "stdlib":
        name = config.service_name or "messages"
        stdlib_logger = logging.getLogger(f"line_service.{name}")
        stdlib_logger.setLevel(config.level)
        return StdlibLogger(stdlib_logger)

    if config.sink == "structured":
        configure_structlog(
            use_json=config.use_json,
            log_level=logging.getLevelName(config.level),
        )
        return StructuredLogger(service_name=config.service_name or "line_service")

    return ConsoleLogger(verbose=config.level in ("DEBUG", "INFO"))


def build_pipeline(
    config: ServiceConfig,
    message_sink: Optional[MessageSink] = None,
    clock: Optional[Callable[[], datetime]] = None,
    metrics_collector: Optional[MetricsCollector] = None,
) -> LineSource:
    """
    Build the File -> Cache -> Logging pipeline described by config.

    Args:
        config: Service configuration
        message_sink: Overrides the sink selected by config.logging
        clock: Clock for the caching layer
        metrics_collector: Optional metrics collector for the caching layer

    Returns:
        Outermost stage of the pipeline
    """
    sink = message_sink or create_message_sink(config.logging)
    source = FileLineSource(
        config.source.path,
        logger=sink,
        encoding=config.source.encoding,
    )
    builder = PipelineBuilder(source, logger=sink)

    if config.cache.enabled:
        store = CacheStore.shared() if config.cache.shared_store else None
        builder.cached(
            config.cache.ttl,
            store=store,
            clock=clock,
            progress_interval=config.cache.progress_interval,
            metrics_collector=metrics_collector,
        )

    if config.logging.log_calls:
        builder.logged(sink=sink.info)

    pipeline = builder.build()
    logger.debug(f"Built pipeline: {pipeline!r}")
    return pipeline


def build_demo_pipelines(
    path: Union[str, Path],
    message_sink: Optional[MessageSink] = None,
) -> Dict[str, LineSource]:
    """
    Build the three canonical arrangements over one file.

    Returns:
        Dict with "plain" (file only), "cached" (file behind a 5-minute
        cache) and "cached_logged" (a separate file source behind a
        10-minute cache, wrapped in call logging)
    """
    sink = message_sink or ConsoleLogger()

    plain = FileLineSource(path, logger=sink)
    cached = PipelineBuilder(plain, logger=sink).cached(timedelta(minutes=5)).build()
    cached_logged = (
        PipelineBuilder(FileLineSource(path, logger=sink), logger=sink)
        .cached(timedelta(minutes=10))
        .logged(sink=sink.info)
        .build()
    )

    return {
        "plain": plain,
        "cached": cached,
        "cached_logged": cached_logged,
    }
