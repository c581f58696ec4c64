"""
Music library domain models.

Contains data structures for catalog entries and their metadata sources.
"""

from typing import Optional, NamedTuple
from urllib.parse import quote

STREAM_ENDPOINT = "/api/music/stream"


class MetadataOverride(NamedTuple):
    """One entry of the sidecar metadata file.

    `filename` is either a bare filename (matches that name in any folder)
    or a '/'-separated path relative to the library root.
    """
    filename: str
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    cover: Optional[str] = None
    duration: Optional[float] = None  # in seconds
    genre: Optional[str] = None


class EmbeddedTags(NamedTuple):
    """Tag values read from inside the audio container (ID3, Vorbis comments, MP4 atoms)."""
    title: Optional[str] = None
    artist: Optional[str] = None
    album_artist: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    duration: Optional[int] = None  # whole seconds


class TrackDescriptor(NamedTuple):
    """A playable file in the library catalog.

    Built per request and discarded after the response is sent.
    """
    id: str
    filename: str
    relative_path: str  # '/'-separated, relative to the library root
    title: str
    artist: str
    format: str  # lowercase extension without the dot
    size_bytes: int
    album: Optional[str] = None
    genre: Optional[str] = None
    cover: Optional[str] = None
    duration: Optional[float] = None

    @property
    def stream_url(self) -> str:
        """URL of the streaming endpoint for this file."""
        encoded = quote(self.relative_path, safe='', errors='surrogateescape')
        return f"{STREAM_ENDPOINT}?file={encoded}"
