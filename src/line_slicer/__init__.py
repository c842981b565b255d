"""Line Slicer - Print a Python-style slice of the lines of a file."""

__version__ = "0.1.0"

from .errors import InputError, LineSlicerError, OutputError, SliceParseError
from .extractor import LineExtractor, slice_lines
from .models import ExtractionStatistics, ExtractionStrategy, ResolvedRange, SliceSpec
from .resolver import resolve

__all__ = [
    # Models
    "SliceSpec",
    "ResolvedRange",
    "ExtractionStrategy",
    "ExtractionStatistics",
    # Errors
    "LineSlicerError",
    "SliceParseError",
    "InputError",
    "OutputError",
    # Core
    "resolve",
    "LineExtractor",
    "slice_lines",
]
