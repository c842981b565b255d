"""Fixed-capacity line buffer."""

from collections import deque
from typing import Deque, Iterator, Optional


class RingBuffer:
    """
    Keeps the most recent ``capacity`` lines.

    Appending to a full buffer evicts and returns the oldest line.
    """

    def __init__(self, capacity: int):
        """
        Initialize ring buffer.

        Args:
            capacity: Maximum number of lines held at once
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._lines: Deque[bytes] = deque()

    def append(self, line: bytes) -> Optional[bytes]:
        evicted = None
        if len(self._lines) == self.capacity:
            evicted = self._lines.popleft()
        self._lines.append(line)
        return evicted

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._lines)

    @property
    def is_full(self) -> bool:
        return len(self._lines) == self.capacity
