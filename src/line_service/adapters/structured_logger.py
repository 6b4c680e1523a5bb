"""
Structured Logger - structlog-backed Message Sink.

Provides:
    - Structured JSON or console logging via structlog
    - Correlation ID binding through context variables

Design Notes:
    - Implements the MessageSink protocol
    - Configuration is process-global (structlog.configure)
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

import structlog


def configure_structlog(
    use_json: bool = True,
    log_level: int = logging.INFO,
) -> None:
    """
    Configure structlog for structured logging.

    Args:
        use_json: Render events as JSON lines instead of console output
        log_level: Minimum level to emit
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class StructuredLogger:
    """
    Message sink emitting structured events.

    Each message becomes one event carrying the service name and, when
    set, the active correlation ID.
    """

    def __init__(
        self,
        service_name: str = "line_service",
        logger: Optional[Any] = None,
    ) -> None:
        """
        Initialize structured logger.

        Args:
            service_name: Service name bound to every event
            logger: Pre-built structlog logger (created if None)
        """
        self.service_name = service_name
        self._logger = logger or structlog.get_logger(service_name)
        self._logger = self._logger.bind(service=service_name)

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Bind a correlation ID for the current context.

        Args:
            correlation_id: Unique ID for request tracing
        """
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    def generate_correlation_id(self) -> str:
        """Generate and bind a new correlation ID."""
        correlation_id = uuid.uuid4().hex[:8]
        self.set_correlation_id(correlation_id)
        return correlation_id

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
