"""Tests for extractor module."""

import io
from itertools import product

import pytest

from line_slicer.errors import InputError, OutputError
from line_slicer.extractor import LineExtractor, slice_lines
from line_slicer.models import ExtractionStrategy, SliceSpec

TEST_INPUTS = [
    b"abc def\ndef ghi\nghi jkl\njkl mno\nmno qwe\n",
    b"abc\n\n\n\nmno\n",
    b"a\nb\nc\nd\ne",
    # same inputs, but with CRLF line breaks
    b"abc def\r\ndef ghi\r\nghi jkl\r\njkl mno\r\nmno qwe\r\n",
    b"abc\r\n\r\n\r\n\r\nmno\r\n",
    b"a\r\nb\r\nc\r\nd\r\ne",
]

BUFFER_MODES = ["bounded", "full"]


def expected_output(data: bytes, begin, end) -> bytes:
    """Slice with Python list semantics and terminate every line with LF."""
    lines = data.replace(b"\r\n", b"\n").split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return b"".join(line + b"\n" for line in lines[begin:end])


class LimitedSource:
    """Endless line source that fails if read past ``limit`` lines."""

    def __init__(self, limit: int):
        self.limit = limit
        self.lines_served = 0

    def readline(self, size=-1):
        if self.lines_served >= self.limit:
            raise AssertionError(f"read past line {self.limit}")
        self.lines_served += 1
        return b"line %d\n" % self.lines_served


@pytest.mark.parametrize("buffer_mode", BUFFER_MODES)
@pytest.mark.parametrize(
    "text,expected",
    [
        ("0:2", b"1\n2\n"),
        ("-1:5", b"5\n"),
        ("2:-1", b"3\n4\n"),
        ("-5:-3", b"1\n2\n"),
    ],
)
def test_documented_examples(buffer_mode, text, expected):
    """Test the documented examples on lines 1 to 5."""
    data = b"1\n2\n3\n4\n5\n"
    assert slice_lines(SliceSpec.parse(text), data, buffer_mode) == expected


@pytest.mark.parametrize("buffer_mode", BUFFER_MODES)
@pytest.mark.parametrize("data", TEST_INPUTS)
@pytest.mark.parametrize(
    "text",
    ["1:", "2:-4", "2:-1", "2:4", "2:1", "-1:", "-1:-2", "-5:-3", "-4:3", "-4:1", "-1:2", "5:", ":-5", ":0"],
)
def test_slice_cases(buffer_mode, data, text):
    """Test slices on inputs with empty lines, CRLF and no final newline."""
    spec = SliceSpec.parse(text)
    assert slice_lines(spec, data, buffer_mode) == expected_output(data, spec.begin, spec.end)


@pytest.mark.parametrize("buffer_mode", BUFFER_MODES)
def test_all_slices_match_list_slicing(buffer_mode):
    """Test every strategy against Python slicing for all small bounds."""
    bounds = [None] + list(range(-8, 9))
    for count in range(0, 7):
        data = b"".join(b"%d\r\n" % i if i % 2 else b"%d\n" % i for i in range(count))
        for begin, end in product(bounds, bounds):
            assert slice_lines(SliceSpec(begin, end), data, buffer_mode) == expected_output(
                data, begin, end
            ), (count, begin, end)


def test_whole_input_is_normalized():
    """Test that an identity slice rewrites every terminator to LF."""
    data = b"first\r\nsecond\nthird\r\nlast"
    output = slice_lines(SliceSpec(), data)
    assert output == b"first\nsecond\nthird\nlast\n"
    assert b"\r" not in output


def test_zero_to_total_equals_whole_input():
    """Test that 0:N gives the same output as no slice."""
    data = b"a\nb\nc\n"
    assert slice_lines(SliceSpec(0, 3), data) == slice_lines(SliceSpec(), data)


def test_head_and_tail():
    """Test that :k gives the first k lines and -k: the last k lines."""
    data = b"".join(b"%d\n" % i for i in range(10))
    for k in range(0, 11):
        assert slice_lines(SliceSpec(None, k), data) == data[: 2 * k]
    for k in range(1, 11):
        assert slice_lines(SliceSpec(-k, None), data) == data[-2 * k:]


@pytest.mark.parametrize("text", ["0:0", "3:3", "-2:-2", "4:2"])
def test_equal_bounds_are_empty(text):
    """Test that begin == end and reversed ranges produce no output."""
    assert slice_lines(SliceSpec.parse(text), b"a\nb\nc\n") == b""


def test_empty_input():
    """Test that empty input produces no output for any slice."""
    for text in (":", "-3:", "2:-1", "-1:4", ":10"):
        assert slice_lines(SliceSpec.parse(text), b"") == b""


def test_identity_reslice_is_idempotent():
    """Test that slicing already sliced output with : keeps it unchanged."""
    once = slice_lines(SliceSpec(1, -1), b"a\r\nb\nc\r\nd")
    assert slice_lines(SliceSpec(), once) == once


def test_forward_stops_reading_at_end():
    """Test that :10 never reads beyond the tenth line."""
    source = LimitedSource(10)
    sink = io.BytesIO()

    stats = LineExtractor().extract(SliceSpec(None, 10), source, sink)

    assert sink.getvalue() == b"".join(b"line %d\n" % i for i in range(1, 11))
    assert source.lines_served == 10
    assert stats.strategy == ExtractionStrategy.FORWARD
    assert stats.lines_read == 10
    assert stats.lines_written == 10
    assert not stats.reached_end_of_input


def test_forward_reads_nothing_for_empty_head():
    """Test that :0 does not touch the input."""
    source = LimitedSource(0)
    sink = io.BytesIO()
    LineExtractor().extract(SliceSpec(3, 0), source, sink)
    assert sink.getvalue() == b""
    assert source.lines_served == 0


def test_head_ring_stops_once_range_is_empty():
    """Test that -2:3 stops after five lines of an endless input."""
    source = LimitedSource(5)
    sink = io.BytesIO()

    stats = LineExtractor().extract(SliceSpec(-2, 3), source, sink)

    assert sink.getvalue() == b""
    assert stats.strategy == ExtractionStrategy.HEAD_RING
    assert not stats.reached_end_of_input


def test_bounded_memory_for_negative_bounds():
    """Test that ring strategies hold at most the negative magnitude."""
    data = b"".join(b"%d\n" % i for i in range(1000))
    extractor = LineExtractor()

    tail = extractor.extract(SliceSpec(-3, None), io.BytesIO(data), io.BytesIO())
    lagged = extractor.extract(SliceSpec(10, -4), io.BytesIO(data), io.BytesIO())
    head = extractor.extract(SliceSpec(-5, 998), io.BytesIO(data), io.BytesIO())

    assert tail.peak_buffered == 3
    assert lagged.peak_buffered == 4
    assert lagged.lines_written == 986
    assert head.peak_buffered == 5
    assert head.lines_written == 3


def test_full_buffer_holds_whole_input():
    """Test that full mode buffers every line."""
    data = b"".join(b"%d\n" % i for i in range(100))
    stats = LineExtractor("full").extract(SliceSpec(-3, None), io.BytesIO(data), io.BytesIO())
    assert stats.strategy == ExtractionStrategy.FULL_BUFFER
    assert stats.peak_buffered == 100
    assert stats.lines_written == 3
    assert stats.reached_end_of_input


def test_statistics_bytes_written():
    """Test byte accounting of the written output."""
    sink = io.BytesIO()
    stats = LineExtractor().extract(SliceSpec(), io.BytesIO(b"ab\r\ncd"), sink)
    assert stats.bytes_written == len(sink.getvalue()) == 6


def test_write_failure_raises_output_error():
    """Test that a closed pipe surfaces as OutputError."""

    class ClosedPipe:
        def write(self, data):
            raise BrokenPipeError(32, "Broken pipe")

        def flush(self):
            pass

    with pytest.raises(OutputError) as exc_info:
        LineExtractor().extract(SliceSpec(), io.BytesIO(b"a\n"), ClosedPipe())
    assert isinstance(exc_info.value.__cause__, BrokenPipeError)


def test_read_failure_raises_input_error():
    """Test that a failing source surfaces as InputError."""

    class FailingSource:
        def readline(self, size=-1):
            raise OSError("Input/output error")

    with pytest.raises(InputError):
        LineExtractor().extract(SliceSpec(-1, None), FailingSource(), io.BytesIO())


@pytest.mark.parametrize("buffer_mode", BUFFER_MODES)
@pytest.mark.parametrize(
    "begin,end",
    [
        (None, 2**63),
        (2**63, None),
        (1, 2**63),
        (2**63, -1),
        (-1, 2**63),
        (-(2**63), 2**63),
        (-(2**63), None),
        (None, -(2**63)),
        (-2, 2**64 + 5),
    ],
)
def test_huge_bounds_are_clamped(buffer_mode, begin, end):
    """Test that bounds beyond the platform word size clamp like any other."""
    data = b"a\nb\r\nc\n"
    assert slice_lines(SliceSpec(begin, end), data, buffer_mode) == expected_output(
        data, begin, end
    )


def test_head_ring_reads_nothing_for_empty_head():
    """Test that -3:0 does not touch the input."""
    source = LimitedSource(0)
    sink = io.BytesIO()

    stats = LineExtractor().extract(SliceSpec(-3, 0), source, sink)

    assert sink.getvalue() == b""
    assert source.lines_served == 0
    assert stats.strategy == ExtractionStrategy.HEAD_RING
    assert stats.peak_buffered == 0


def test_reached_end_of_input_when_all_lines_consumed():
    """Test that a slice reading to the end of the input reports it."""
    stats = LineExtractor().extract(SliceSpec(None, 10), io.BytesIO(b"a\nb\n"), io.BytesIO())
    assert stats.reached_end_of_input
