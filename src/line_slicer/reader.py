"""Splitting of byte streams into logical lines."""

import logging
from typing import Iterator, Optional

from .errors import InputError
from .protocols import ByteSource, LoggerProtocol


def strip_newline(raw: bytes) -> bytes:
    """Drop a trailing ``\\n`` or ``\\r\\n`` terminator from ``raw``.

    A carriage return is only part of the terminator when a line feed
    follows it.
    """
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw


class LineReader:
    """
    Lazily yields lines from a byte source.

    Lines are pulled with ``readline()`` one at a time, so a consumer that
    stops iterating leaves the rest of the source unread.
    """

    def __init__(self, source: ByteSource, logger: Optional[LoggerProtocol] = None):
        """
        Initialize line reader.

        Args:
            source: Binary stream to read from
            logger: Logger instance
        """
        self._source = source
        self._logger = logger or logging.getLogger(__name__)
        self.lines_read = 0
        self.exhausted = False

    def __iter__(self) -> Iterator[bytes]:
        while True:
            try:
                raw = self._source.readline()
            except OSError as e:
                raise InputError(f"Failed to read input: {e}") from e

            if not raw:
                self.exhausted = True
                self._logger.debug(f"Reached end of input after {self.lines_read} lines")
                return

            self.lines_read += 1
            yield strip_newline(raw)


def iter_lines(source: ByteSource) -> Iterator[bytes]:
    """Yield the lines of ``source`` without their terminators."""
    yield from LineReader(source)
