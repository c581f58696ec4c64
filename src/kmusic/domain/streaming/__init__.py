"""Streaming domain - serving audio files whole or as a single byte range."""

from .exceptions import (
    StreamError,
    MissingFileParameterError,
    PathOutsideLibraryError,
    AudioFileNotFoundError,
    RangeNotSatisfiableError,
    StreamIOError,
)
from .ranges import ByteRange, parse_range_header
from .streamer import (
    AUDIO_MIME_TYPES,
    AudioStream,
    get_mime_type,
    iter_file_range,
    open_stream,
    resolve_audio_file,
)

__all__ = [
    # Exceptions
    "StreamError",
    "MissingFileParameterError",
    "PathOutsideLibraryError",
    "AudioFileNotFoundError",
    "RangeNotSatisfiableError",
    "StreamIOError",
    # Ranges
    "ByteRange",
    "parse_range_header",
    # Streamer
    "AUDIO_MIME_TYPES",
    "AudioStream",
    "get_mime_type",
    "iter_file_range",
    "open_stream",
    "resolve_audio_file",
]
