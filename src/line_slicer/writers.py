"""Writer for newline-normalized output."""

import logging
from typing import Optional

from .errors import OutputError
from .protocols import ByteSink, LoggerProtocol


class LineWriter:
    """
    Writes lines to a byte sink, each terminated by a single line feed.

    Uses context manager pattern so the sink is flushed on exit.
    """

    def __init__(self, sink: ByteSink, logger: Optional[LoggerProtocol] = None):
        """
        Initialize line writer.

        Args:
            sink: Binary stream to write to
            logger: Logger instance
        """
        self._sink = sink
        self._logger = logger or logging.getLogger(__name__)
        self.lines_written = 0
        self.bytes_written = 0

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and flush the sink."""
        # Sink is left untouched once a write has failed
        if exc_type is None:
            self.close()

    def write(self, line: bytes) -> None:
        """
        Write one line followed by a line feed.

        Args:
            line: Line content without terminator

        Raises:
            OutputError: If the sink rejects the write
        """
        data = line + b"\n"
        try:
            self._sink.write(data)
        except OSError as e:
            raise OutputError(f"Failed to write output: {e}") from e
        self.lines_written += 1
        self.bytes_written += len(data)

    def close(self) -> None:
        """Flush the sink."""
        try:
            self._sink.flush()
        except OSError as e:
            raise OutputError(f"Failed to write output: {e}") from e
        self._logger.debug(
            f"Wrote {self.lines_written} lines ({self.bytes_written} bytes)"
        )
