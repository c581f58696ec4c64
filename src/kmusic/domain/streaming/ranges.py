"""
HTTP Range header parsing for single byte ranges.

Supported forms: ``bytes=<start>-<end>``, ``bytes=<start>-`` and the suffix
form ``bytes=-<length>``. Anything else (other units, multiple ranges,
garbage) is ignored and the caller serves the whole file.
"""

import re
from typing import NamedTuple, Optional

from .exceptions import RangeNotSatisfiableError

_RANGE_SPEC = re.compile(r"^\s*([0-9]*)\s*-\s*([0-9]*)\s*$")


class ByteRange(NamedTuple):
    """Inclusive byte range. Always satisfies 0 <= start <= end < file_size."""
    start: int
    end: int
    file_size: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.file_size}"


def parse_range_header(header: Optional[str], file_size: int) -> Optional[ByteRange]:
    """Parse a Range header against a file of `file_size` bytes.

    An end past the last byte is clamped to the last byte.

    Returns:
        ByteRange, or None when the header should be ignored

    Raises:
        RangeNotSatisfiableError: If the range starts past the end of the file,
            has start > end, or is a zero-length suffix
    """
    if not header:
        return None

    unit, sep, spec = header.strip().partition("=")
    if not sep or unit.strip().lower() != "bytes" or "," in spec:
        return None

    match = _RANGE_SPEC.match(spec)
    if not match:
        return None
    start_text, end_text = match.groups()

    if not start_text:
        if not end_text:
            return None
        # Suffix range: last N bytes
        suffix = int(end_text)
        if suffix == 0 or file_size == 0:
            raise RangeNotSatisfiableError(file_size)
        return ByteRange(max(0, file_size - suffix), file_size - 1, file_size)

    start = int(start_text)
    end = int(end_text) if end_text else file_size - 1

    if start >= file_size or start > end:
        raise RangeNotSatisfiableError(file_size)

    return ByteRange(start, min(end, file_size - 1), file_size)
