"""
Audio file streaming with single byte-range support.

Validates the requested path against the library root, then reads the
requested bytes from an open file handle in fixed-size chunks.
"""

import os
from pathlib import Path
from typing import BinaryIO, Iterator, NamedTuple, Optional

from loguru import logger

from kmusic.core.path_security import resolve_library_path

from .exceptions import (
    AudioFileNotFoundError,
    MissingFileParameterError,
    PathOutsideLibraryError,
    StreamIOError,
)
from .ranges import ByteRange, parse_range_header

AUDIO_MIME_TYPES: dict[str, str] = {
    ".mp3": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".opus": "audio/ogg; codecs=opus",
    ".flac": "audio/flac",
    ".m4a": "audio/mp4",
    ".wav": "audio/wav",
}
DEFAULT_MIME_TYPE = "audio/mpeg"
DEFAULT_CACHE_CONTROL = "public, max-age=31536000, immutable"
DEFAULT_CHUNK_SIZE = 64 * 1024


class AudioStream(NamedTuple):
    """Everything a web layer needs to send one streaming response."""
    status_code: int  # 200 or 206
    headers: dict[str, str]
    media_type: str
    body: Iterator[bytes]
    byte_range: Optional[ByteRange] = None


def get_mime_type(file_path: Path) -> str:
    """Pure function - fixed extension table, audio/mpeg when unknown."""
    return AUDIO_MIME_TYPES.get(file_path.suffix.lower(), DEFAULT_MIME_TYPE)


def iter_file_range(
    handle: BinaryIO, start: int, length: int, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Iterator[bytes]:
    """Yield exactly `length` bytes from `start` (fewer if the file shrank), then close."""
    try:
        handle.seek(start)
        remaining = length
        while remaining > 0:
            chunk = handle.read(min(chunk_size, remaining))
            if not chunk:
                break
            remaining -= len(chunk)
            yield chunk
    finally:
        handle.close()


def resolve_audio_file(library_path: Path, requested: Optional[str]) -> Path:
    """Map a client-supplied relative path to an existing file inside the library.

    Raises:
        MissingFileParameterError: If `requested` is missing or blank
        PathOutsideLibraryError: If the path escapes the library root
        AudioFileNotFoundError: If nothing (or not a regular file) is there
    """
    if requested is None or not requested.strip():
        raise MissingFileParameterError()

    resolved = resolve_library_path(library_path, requested)
    if resolved is None:
        logger.warning(f"Blocked access outside library: {requested!r}")
        raise PathOutsideLibraryError()

    if not resolved.is_file():
        raise AudioFileNotFoundError()

    return resolved


def open_stream(
    library_path: Path,
    requested: Optional[str],
    range_header: Optional[str] = None,
    cache_control: str = DEFAULT_CACHE_CONTROL,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AudioStream:
    """Prepare a full (200) or partial (206) response for one audio file.

    Args:
        library_path: Library root directory
        requested: URL-decoded relative path from the `file` query parameter
        range_header: Raw Range header value, if any
        cache_control: Cache-Control value for successful responses
        chunk_size: Bytes per read from the file

    Raises:
        StreamError subclasses; see resolve_audio_file and parse_range_header.
        StreamIOError for unexpected filesystem failures.
    """
    file_path = resolve_audio_file(library_path, requested)

    try:
        handle = open(file_path, "rb")
    except FileNotFoundError as e:
        # Deleted between the existence check and open
        raise AudioFileNotFoundError() from e
    except OSError as e:
        logger.exception(f"Failed to open {file_path}")
        raise StreamIOError() from e

    try:
        file_size = os.fstat(handle.fileno()).st_size
        byte_range = parse_range_header(range_header, file_size)
    except OSError as e:
        handle.close()
        logger.exception(f"Failed to stat {file_path}")
        raise StreamIOError() from e
    except Exception:
        handle.close()
        raise

    media_type = get_mime_type(file_path)
    headers = {
        "Accept-Ranges": "bytes",
        "Cache-Control": cache_control,
    }

    if byte_range is None:
        headers["Content-Length"] = str(file_size)
        logger.debug(f"Streaming {file_path.name} in full ({file_size} bytes)")
        return AudioStream(
            status_code=200,
            headers=headers,
            media_type=media_type,
            body=iter_file_range(handle, 0, file_size, chunk_size),
        )

    headers["Content-Range"] = byte_range.content_range
    headers["Content-Length"] = str(byte_range.length)
    logger.debug(f"Streaming {file_path.name} {byte_range.content_range}")
    return AudioStream(
        status_code=206,
        headers=headers,
        media_type=media_type,
        body=iter_file_range(handle, byte_range.start, byte_range.length, chunk_size),
        byte_range=byte_range,
    )
