"""Tests for Range header parsing."""

import pytest

from kmusic.domain.streaming.exceptions import RangeNotSatisfiableError
from kmusic.domain.streaming.ranges import ByteRange, parse_range_header


class TestParseRangeHeader:
    def test_explicit_range(self):
        byte_range = parse_range_header("bytes=0-99", 1000)

        assert byte_range == ByteRange(0, 99, 1000)
        assert byte_range.length == 100
        assert byte_range.content_range == "bytes 0-99/1000"

    def test_open_ended_range(self):
        byte_range = parse_range_header("bytes=500-", 1000)

        assert byte_range == ByteRange(500, 999, 1000)
        assert byte_range.length == 500
        assert byte_range.content_range == "bytes 500-999/1000"

    def test_suffix_range(self):
        assert parse_range_header("bytes=-100", 1000) == ByteRange(900, 999, 1000)

    def test_suffix_longer_than_file(self):
        assert parse_range_header("bytes=-5000", 1000) == ByteRange(0, 999, 1000)

    def test_end_clamped_to_last_byte(self):
        assert parse_range_header("bytes=900-5000", 1000) == ByteRange(900, 999, 1000)

    def test_single_byte(self):
        byte_range = parse_range_header("bytes=999-999", 1000)
        assert byte_range.length == 1

    def test_whitespace_and_case_tolerated(self):
        assert parse_range_header(" Bytes = 10 - 19 ", 1000) == ByteRange(10, 19, 1000)

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "bytes",
            "bytes=",
            "bytes=-",
            "bytes=abc-def",
            "items=0-10",
            "bytes=0-10,20-30",
            "bytes=1.5-2",
        ],
    )
    def test_ignored_headers(self, header):
        assert parse_range_header(header, 1000) is None

    @pytest.mark.parametrize(
        "header",
        ["bytes=1000-", "bytes=5000-6000", "bytes=10-5", "bytes=-0"],
    )
    def test_unsatisfiable(self, header):
        with pytest.raises(RangeNotSatisfiableError) as exc_info:
            parse_range_header(header, 1000)

        assert exc_info.value.status_code == 416
        assert exc_info.value.headers == {"Content-Range": "bytes */1000"}

    def test_any_range_on_empty_file_unsatisfiable(self):
        with pytest.raises(RangeNotSatisfiableError):
            parse_range_header("bytes=0-", 0)
        with pytest.raises(RangeNotSatisfiableError):
            parse_range_header("bytes=-10", 0)
