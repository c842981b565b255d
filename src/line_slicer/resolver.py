"""Resolution of slice specifications into concrete line ranges."""

from typing import Optional

from .models import ExtractionStrategy, ResolvedRange, SliceSpec


def _normalize(index: Optional[int], default: int, total: int) -> int:
    if index is None:
        index = default
    elif index < 0:
        index += total
    return min(max(index, 0), total)


def resolve(spec: SliceSpec, total: int) -> ResolvedRange:
    """Resolve a slice against a known number of lines.

    Negative bounds count from ``total``; every bound is then clamped into
    ``[0, total]``. A reversed range collapses to the empty range ``[hi, hi)``.

    Args:
        spec: Slice to resolve
        total: Total number of lines in the input

    Returns:
        ResolvedRange with ``0 <= lo <= hi <= total``
    """
    if total < 0:
        raise ValueError("total must be non-negative")

    lo = _normalize(spec.begin, 0, total)
    hi = _normalize(spec.end, total, total)
    if lo > hi:
        lo = hi
    return ResolvedRange(lo, hi)


def lookback(spec: SliceSpec) -> int:
    """Largest magnitude among the negative bounds of ``spec`` (0 if none)."""
    magnitudes = [-bound for bound in (spec.begin, spec.end) if bound is not None and bound < 0]
    return max(magnitudes, default=0)


def select_strategy(spec: SliceSpec, buffer_mode: str = "bounded") -> ExtractionStrategy:
    """Pick the extraction strategy for a slice.

    Args:
        spec: Slice to extract
        buffer_mode: ``bounded`` to keep memory proportional to the negative
            bound magnitudes, ``full`` to buffer the whole input whenever a
            negative bound is present

    Returns:
        The ExtractionStrategy to run
    """
    if not spec.has_negative_bound:
        return ExtractionStrategy.FORWARD
    if buffer_mode == "full":
        return ExtractionStrategy.FULL_BUFFER

    begin_negative = spec.begin is not None and spec.begin < 0
    end_negative = spec.end is not None and spec.end < 0
    if begin_negative and (spec.end is None or end_negative):
        return ExtractionStrategy.TAIL_RING
    if begin_negative:
        return ExtractionStrategy.HEAD_RING
    return ExtractionStrategy.LAGGED_RING
