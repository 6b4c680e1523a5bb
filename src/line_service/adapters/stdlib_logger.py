"""
Standard Library Logger Adapter.

Routes leveled sink messages into the ``logging`` module so they share
handlers and formatting with the rest of the application.
"""

from __future__ import annotations

import logging
from typing import Optional


class StdlibLogger:
    """Message sink backed by a logging.Logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("line_service")

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)
