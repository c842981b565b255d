"""Data models for slice specifications and extraction results."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import SliceParseError

_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_index(token: str, message: str) -> Optional[int]:
    if not token:
        return None
    if not _INDEX_PATTERN.fullmatch(token):
        raise SliceParseError(message)
    return int(token)


@dataclass(frozen=True)
class SliceSpec:
    """A BEGIN:END pair with Python slicing semantics.

    Either bound may be absent. Negative values count from the end of the
    input, so ``-1`` denotes the last line.
    """

    begin: Optional[int] = None
    end: Optional[int] = None

    @classmethod
    def parse(cls, text: str) -> "SliceSpec":
        """Parse a ``[INT]:[INT]`` string such as ``3:``, ``:-2`` or ``:``.

        Args:
            text: Slice specification as given on the command line

        Returns:
            Parsed SliceSpec

        Raises:
            SliceParseError: If the text is not exactly two optional integers
                separated by a single colon
        """
        parts = text.split(":")
        if len(parts) != 2:
            raise SliceParseError("Invalid slice")

        begin = _parse_index(parts[0], "Invalid slice starting point")
        end = _parse_index(parts[1], "Invalid slice ending point")
        return cls(begin=begin, end=end)

    @property
    def has_negative_bound(self) -> bool:
        """Whether resolving this slice needs the total line count."""
        return (self.begin is not None and self.begin < 0) or (
            self.end is not None and self.end < 0
        )

    def __str__(self) -> str:
        begin = "" if self.begin is None else str(self.begin)
        end = "" if self.end is None else str(self.end)
        return f"[{begin}:{end}]"


@dataclass(frozen=True)
class ResolvedRange:
    """Concrete half-open range ``[lo, hi)`` of zero-based line indices."""

    lo: int
    hi: int

    def __post_init__(self):
        """Validate range invariants."""
        if self.lo < 0 or self.lo > self.hi:
            raise ValueError(f"Invalid range [{self.lo}, {self.hi})")

    def __contains__(self, index: int) -> bool:
        return self.lo <= index < self.hi

    def __len__(self) -> int:
        return self.hi - self.lo

    @property
    def is_empty(self) -> bool:
        return self.lo == self.hi


class ExtractionStrategy(str, Enum):
    """How lines are pulled from the source for a given slice."""

    FORWARD = "forward"
    TAIL_RING = "tail_ring"
    LAGGED_RING = "lagged_ring"
    HEAD_RING = "head_ring"
    FULL_BUFFER = "full_buffer"


@dataclass
class ExtractionStatistics:
    """Statistics for one extraction call.

    ``reached_end_of_input`` is only set when a read returned end of input.
    A slice that stops after exactly the last line leaves it unset.
    """

    strategy: ExtractionStrategy = ExtractionStrategy.FORWARD
    lines_read: int = 0
    lines_written: int = 0
    bytes_written: int = 0
    peak_buffered: int = 0
    reached_end_of_input: bool = False
    elapsed_time: float = 0.0
