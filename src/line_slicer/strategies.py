"""Extraction strategies for streaming a slice of lines."""

import sys
from abc import ABC, abstractmethod
from itertools import islice
from typing import Dict, Iterable, Optional, Type

from .buffers import RingBuffer
from .models import ExtractionStrategy, ResolvedRange, SliceSpec
from .reader import LineReader
from .resolver import lookback, resolve
from .writers import LineWriter


class SliceStrategy(ABC):
    """Abstract base class for the ways a slice can be pulled from a stream."""

    kind: ExtractionStrategy

    @abstractmethod
    def extract(self, spec: SliceSpec, lines: LineReader, writer: LineWriter) -> int:
        """Write the lines selected by ``spec`` and return the peak number of
        lines held in memory at once.

        Args:
            spec: Slice to extract
            lines: Reader over the input; consumed at most once
            writer: Destination for the selected lines
        """
        pass


def _cap(index: Optional[int]) -> Optional[int]:
    """Limit a line index to what ``islice`` accepts.

    No stream holds more than ``sys.maxsize`` lines, so capping never
    changes which lines are selected.
    """
    if index is None:
        return None
    return min(index, sys.maxsize)


def _write_tail(
    buffered: Iterable[bytes], held: int, total: int, selected: ResolvedRange, writer: LineWriter
) -> None:
    """Write the buffered lines whose absolute index falls in ``selected``.

    The buffer holds the last ``held`` of ``total`` lines.
    """
    index = total - held
    for line in buffered:
        if index >= selected.hi:
            break
        if index in selected:
            writer.write(line)
        index += 1


class ForwardStrategy(SliceStrategy):
    """
    Streams lines forward, emitting ``[begin, end)`` as they pass.

    Stops reading as soon as ``end`` lines have been seen.
    """

    kind = ExtractionStrategy.FORWARD

    def extract(self, spec: SliceSpec, lines: LineReader, writer: LineWriter) -> int:
        begin = spec.begin or 0
        if spec.end is not None and spec.end <= begin:
            return 0

        for line in islice(lines, _cap(begin), _cap(spec.end)):
            writer.write(line)
        return min(lines.lines_read, 1)


class TailRingStrategy(SliceStrategy):
    """
    Keeps the last ``K`` lines, where ``K`` is the largest negative magnitude.

    Both bounds resolve into the final ``K`` lines once the total is known.
    """

    kind = ExtractionStrategy.TAIL_RING

    def extract(self, spec: SliceSpec, lines: LineReader, writer: LineWriter) -> int:
        ring = RingBuffer(lookback(spec))
        for line in lines:
            ring.append(line)

        total = lines.lines_read
        _write_tail(ring, len(ring), total, resolve(spec, total), writer)
        return len(ring)


class LaggedRingStrategy(SliceStrategy):
    """
    Handles a non-negative begin with a negative end.

    Lines from ``begin`` on are delayed by ``|end|`` positions: a line leaving
    the ring is known to sit before the excluded tail and is written at once.
    Lines still in the ring at end of input form the excluded tail.
    """

    kind = ExtractionStrategy.LAGGED_RING

    def extract(self, spec: SliceSpec, lines: LineReader, writer: LineWriter) -> int:
        ring = RingBuffer(-spec.end)
        for line in islice(lines, _cap(spec.begin or 0), None):
            evicted = ring.append(line)
            if evicted is not None:
                writer.write(evicted)
        return len(ring)


class HeadRingStrategy(SliceStrategy):
    """
    Handles a negative begin with a non-negative end.

    Only the last ``|begin|`` lines are kept. Once ``end + |begin|`` lines have
    been read the resolved begin can no longer precede ``end``, so reading stops.
    """

    kind = ExtractionStrategy.HEAD_RING

    def extract(self, spec: SliceSpec, lines: LineReader, writer: LineWriter) -> int:
        if spec.end == 0:
            return 0

        ring = RingBuffer(-spec.begin)
        for line in islice(lines, _cap(spec.end + ring.capacity)):
            ring.append(line)

        # When reading stopped at the limit this resolves to an empty range,
        # which holds for any longer input as well.
        total = lines.lines_read
        _write_tail(ring, len(ring), total, resolve(spec, total), writer)
        return len(ring)


class FullBufferStrategy(SliceStrategy):
    """
    Buffers the whole input, then slices it.

    Correct for every slice; memory grows with the input.
    """

    kind = ExtractionStrategy.FULL_BUFFER

    def extract(self, spec: SliceSpec, lines: LineReader, writer: LineWriter) -> int:
        buffered = list(lines)
        selected = resolve(spec, len(buffered))
        for line in buffered[selected.lo:selected.hi]:
            writer.write(line)
        return len(buffered)


STRATEGIES: Dict[ExtractionStrategy, Type[SliceStrategy]] = {
    strategy.kind: strategy
    for strategy in (
        ForwardStrategy,
        TailRingStrategy,
        LaggedRingStrategy,
        HeadRingStrategy,
        FullBufferStrategy,
    )
}
