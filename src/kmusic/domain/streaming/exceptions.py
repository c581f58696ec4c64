"""Streaming exceptions, each carrying the HTTP status it maps to."""

from typing import Optional


class StreamError(Exception):
    """Base exception for audio streaming."""

    status_code = 500
    message = "Failed to stream file"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        self.headers = headers or {}
        super().__init__(message or self.message)


class MissingFileParameterError(StreamError):
    """Raised when the request has no file to stream."""

    status_code = 400
    message = "File parameter is required"


class PathOutsideLibraryError(StreamError):
    """Raised when the requested path resolves outside the library root."""

    status_code = 403
    message = "Invalid file path"


class AudioFileNotFoundError(StreamError):
    """Raised when the requested path is not an existing regular file."""

    status_code = 404
    message = "File not found"


class RangeNotSatisfiableError(StreamError):
    """Raised when a Range header lies entirely outside the file."""

    status_code = 416
    message = "Requested range not satisfiable"

    def __init__(self, file_size: int):
        self.file_size = file_size
        super().__init__(headers={"Content-Range": f"bytes */{file_size}"})


class StreamIOError(StreamError):
    """Raised for unexpected filesystem failures while preparing a stream."""

    status_code = 500
