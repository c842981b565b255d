"""Orchestration of a single slice extraction."""

import io
import logging
import time
from typing import Optional

from .models import ExtractionStatistics, SliceSpec
from .protocols import ByteSink, ByteSource, LoggerProtocol
from .reader import LineReader
from .resolver import select_strategy
from .strategies import STRATEGIES
from .writers import LineWriter


class LineExtractor:
    """
    Extracts a slice of lines from a byte source into a byte sink.

    Single Responsibility: Wire reader, strategy and writer together.
    Errors surface as InputError or OutputError; the process is never exited here.
    """

    def __init__(self, buffer_mode: str = "bounded", logger: Optional[LoggerProtocol] = None):
        """
        Initialize extractor.

        Args:
            buffer_mode: ``bounded`` or ``full``, see ``resolver.select_strategy``
            logger: Logger instance
        """
        self.buffer_mode = buffer_mode
        self._logger = logger or logging.getLogger(__name__)

    def extract(self, spec: SliceSpec, source: ByteSource, sink: ByteSink) -> ExtractionStatistics:
        """
        Write the lines of ``source`` selected by ``spec`` to ``sink``.

        Args:
            spec: Slice to extract
            source: Binary input stream
            sink: Binary output stream

        Returns:
            ExtractionStatistics describing the run
        """
        kind = select_strategy(spec, self.buffer_mode)
        strategy = STRATEGIES[kind]()
        self._logger.debug(f"Extracting {spec} using {kind.value} strategy")

        start_time = time.time()
        lines = LineReader(source, self._logger)
        with LineWriter(sink, self._logger) as writer:
            peak_buffered = strategy.extract(spec, lines, writer)

        stats = ExtractionStatistics(
            strategy=kind,
            lines_read=lines.lines_read,
            lines_written=writer.lines_written,
            bytes_written=writer.bytes_written,
            peak_buffered=peak_buffered,
            reached_end_of_input=lines.exhausted,
            elapsed_time=time.time() - start_time,
        )
        self._logger.debug(
            f"Read {stats.lines_read} lines, wrote {stats.lines_written} "
            f"(peak buffered: {stats.peak_buffered}, end of input: {stats.reached_end_of_input}) "
            f"in {stats.elapsed_time:.3f} seconds"
        )
        return stats


def slice_lines(spec: SliceSpec, data: bytes, buffer_mode: str = "bounded") -> bytes:
    """Slice in-memory ``data`` and return the normalized output bytes."""
    output = io.BytesIO()
    LineExtractor(buffer_mode).extract(spec, io.BytesIO(data), output)
    return output.getvalue()
