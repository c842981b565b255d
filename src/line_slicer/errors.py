"""Error types raised by the slicing core."""


class LineSlicerError(Exception):
    """Base class for all line slicer errors."""


class SliceParseError(LineSlicerError, ValueError):
    """Raised when a BEGIN:END slice specification cannot be parsed."""


class InputError(LineSlicerError):
    """Raised when the input cannot be opened or read."""


class OutputError(LineSlicerError):
    """Raised when writing to the output sink fails."""
