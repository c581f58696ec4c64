from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse, StreamingResponse
from loguru import logger
from typing import Literal, Optional

from kmusic.core.config import Config
from kmusic.domain.library import (
    filter_by_format,
    load_overrides,
    scan_library,
    search_tracks,
    sort_tracks,
)
from kmusic.domain.streaming import StreamError, StreamIOError, open_stream
from ..deps import get_config, get_library_root
from ..schemas import ErrorResponse, MusicListError, MusicListResponse, TrackFile

router = APIRouter()

SCAN_FAILED = "Failed to scan music directory"


# Plain `def` handlers: FastAPI runs the blocking filesystem work in its threadpool.
@router.get(
    "/music",
    response_model=MusicListResponse,
    response_model_exclude_none=True,
    responses={500: {"model": MusicListError}},
)
def list_music(
    q: Optional[str] = None,
    format_: Optional[str] = Query(None, alias="format"),
    sort: Optional[Literal["title", "artist", "duration"]] = None,
    config: Config = Depends(get_config),
):
    """Scan the library and return every playable file."""
    try:
        library_root = get_library_root(config)
        overrides = load_overrides(config.music.metadata_path())
        tracks = scan_library(
            library_root, overrides, config.music.supported_formats
        )

        if q:
            tracks = search_tracks(tracks, q)
        if format_:
            tracks = filter_by_format(tracks, format_)
        if sort:
            tracks = sort_tracks(tracks, sort)

        files = [TrackFile.from_track(track) for track in tracks]
        return MusicListResponse(files=files, count=len(files))

    except Exception:
        logger.exception("Failed to scan music directory")
        return JSONResponse(
            status_code=500,
            content=MusicListError(error=SCAN_FAILED).model_dump(),
        )


@router.get(
    "/music/stream",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"audio/mpeg": {}}},
        206: {"description": "Partial content"},
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        416: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def stream_music(
    file: Optional[str] = Query(None),
    range_header: Optional[str] = Header(None, alias="range"),
    config: Config = Depends(get_config),
):
    """Stream an audio file, honouring a single-range Range header.

    StreamError subclasses are rendered as {"error": ...} by the app-level handler.
    """
    try:
        stream = open_stream(
            get_library_root(config),
            file,
            range_header,
            cache_control=config.stream.cache_control,
            chunk_size=config.stream.read_chunk_size,
        )
    except StreamError:
        raise
    except Exception as e:
        logger.exception(f"Failed to stream {file!r}")
        raise StreamIOError() from e

    return StreamingResponse(
        stream.body,
        status_code=stream.status_code,
        headers=stream.headers,
        media_type=stream.media_type,
    )
