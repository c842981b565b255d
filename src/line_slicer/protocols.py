"""Protocol definitions for dependency inversion."""

from typing import Protocol


class ByteSource(Protocol):
    """Protocol for readable byte streams (files opened in binary mode, stdin.buffer)."""

    def readline(self, size: int = -1) -> bytes:
        """Read up to and including the next line feed."""
        ...


class ByteSink(Protocol):
    """Protocol for writable byte streams."""

    def write(self, data: bytes) -> int:
        """Write bytes to the stream."""
        ...

    def flush(self) -> None:
        """Flush buffered bytes."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging."""

    def info(self, message: str) -> None:
        """Log info message."""
        ...

    def debug(self, message: str) -> None:
        """Log debug message."""
        ...

    def warning(self, message: str) -> None:
        """Log warning message."""
        ...

    def error(self, message: str) -> None:
        """Log error message."""
        ...
