"""
Console Logger.

A simple leveled message sink that writes to standard output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional


class ConsoleLogger:
    """Simple console-based message sink."""

    def __init__(
        self,
        verbose: bool = True,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialize console logger.

        Args:
            verbose: If False, info messages are suppressed
            write: Output function (defaults to print)
        """
        self._verbose = verbose
        self._write = write or print

    def info(self, message: str) -> None:
        """Log an informational message."""
        if self._verbose:
            self._log("INFO", message)

    def warning(self, message: str) -> None:
        """Log a warning."""
        self._log("WARN", message)

    def error(self, message: str) -> None:
        """Log an error."""
        self._log("ERROR", message)

    def _log(self, level: str, message: str) -> None:
        """Internal logging method."""
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S.%f")[:-3]
        self._write(f"[{timestamp}] [{level}] {message}")
