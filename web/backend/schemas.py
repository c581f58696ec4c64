from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional

from kmusic.domain.library import TrackDescriptor


class TrackFile(BaseModel):
    """Catalog entry as sent to the browser (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    filename: str
    path: str  # Stream URL
    relative_path: str
    title: str
    artist: str
    album: Optional[str] = None
    duration: Optional[float] = None
    format: str
    size_bytes: int
    cover: Optional[str] = None
    genre: Optional[str] = None

    @classmethod
    def from_track(cls, track: TrackDescriptor) -> "TrackFile":
        return cls(
            id=track.id,
            filename=track.filename,
            path=track.stream_url,
            relative_path=track.relative_path,
            title=track.title,
            artist=track.artist,
            album=track.album,
            duration=track.duration,
            format=track.format,
            size_bytes=track.size_bytes,
            cover=track.cover,
            genre=track.genre,
        )


class MusicListResponse(BaseModel):
    success: bool = True
    files: list[TrackFile]
    count: int


class MusicListError(BaseModel):
    success: bool = False
    error: str


class ErrorResponse(BaseModel):
    error: str
