"""
File Line Source.

Reads newline-delimited text from a file on disk. This is the expensive
upstream producer the caching layer is designed to sit in front of.

Design Notes:
    - Existence is checked when produce_lines() is called, not at
      construction, so a file may appear or vanish between calls
    - The file is opened eagerly; lines are decoded lazily and wrapping
      layers decide whether to buffer
    - Every read or decode failure surfaces as SourceUnavailable
"""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from line_service.adapters.console_logger import ConsoleLogger
from line_service.domain.errors import ConfigurationError, SourceUnavailable
from line_service.interfaces.message_sink import MessageSink


class FileLineSource:
    """Line source backed by a text file."""

    def __init__(
        self,
        path: Union[str, Path],
        logger: Optional[MessageSink] = None,
        encoding: str = "utf-8",
    ) -> None:
        """
        Initialize file source.

        Args:
            path: Path to a newline-delimited text file
            logger: Message sink (console sink if None)
            encoding: Text encoding of the file

        Raises:
            ConfigurationError: If path is missing or encoding is unknown
        """
        if path is None or str(path) == "":
            raise ConfigurationError("FileLineSource requires a path")
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding: {encoding!r}") from e
        self.path = Path(path)
        self.encoding = encoding
        self._logger = logger or ConsoleLogger()

    def produce_lines(self) -> Iterator[str]:
        """
        Stream the file's lines without trailing newlines.

        The file is opened before this returns; decoding happens as the
        caller iterates.

        Raises:
            SourceUnavailable: If the path is not a readable file, or while
                iterating if the file cannot be read or decoded
        """
        if not self.path.is_file():
            self._logger.error(f"File not found: {self.path}")
            raise SourceUnavailable(f"File not found: {self.path}", source=str(self.path))

        try:
            handle = open(self.path, encoding=self.encoding)
        except OSError as e:
            raise self._unavailable(e) from e

        self._logger.info(f"Reading lines from file: {self.path}")
        return self._read_lines(handle)

    def _read_lines(self, handle: TextIO) -> Iterator[str]:
        with handle:
            try:
                for line in handle:
                    yield line.rstrip("\r\n")
            except (OSError, UnicodeDecodeError) as e:
                raise self._unavailable(e) from e

    def _unavailable(self, error: Exception) -> SourceUnavailable:
        message = f"Cannot read {self.path}: {error}"
        self._logger.error(message)
        return SourceUnavailable(message, source=str(self.path))

    def __repr__(self) -> str:
        return f"FileLineSource(path={str(self.path)!r})"
