"""
Music metadata extraction and resolution.

Reads embedded tags with Mutagen and merges them with sidecar overrides
through a per-field priority chain: override, then embedded tag, then a
filename-derived default.
"""

import math
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from mutagen import File as MutagenFile

from .models import EmbeddedTags, MetadataOverride

UNKNOWN_ARTIST = "Unknown Artist"

# Easy keys first (EasyID3/EasyMP4/Vorbis), then raw frame names for
# containers mutagen can't open in easy mode (e.g. WAV with ID3 chunk).
TITLE_TAGS = ["title", "TIT2", "\xa9nam", "TITLE"]
ARTIST_TAGS = ["artist", "TPE1", "\xa9ART", "ARTIST"]
ALBUM_ARTIST_TAGS = ["albumartist", "TPE2", "aART", "ALBUMARTIST"]
ALBUM_TAGS = ["album", "TALB", "\xa9alb", "ALBUM"]
GENRE_TAGS = ["genre", "TCON", "\xa9gen", "GENRE"]


def get_tag_value(audio_file: Any, tag_names: list[str]) -> Optional[str]:
    """Get tag value, trying multiple possible tag names."""
    for tag_name in tag_names:
        try:
            value = audio_file.get(tag_name)
        except (KeyError, ValueError):
            # Some formats (like Vorbis) raise ValueError for odd keys
            continue
        if not value:
            continue
        if isinstance(value, list):
            value = value[0]
        text = str(value).strip()
        if text:
            return text
    return None


def round_duration(length: Optional[float]) -> Optional[int]:
    """Round a stream length to whole seconds, halves rounding up."""
    if length is None or not math.isfinite(length) or length <= 0:
        return None
    return int(math.floor(length + 0.5))


def read_embedded_tags(local_path: Path) -> Optional[EmbeddedTags]:
    """Read tag metadata from an audio file.

    Returns:
        EmbeddedTags, or None if Mutagen can't identify or parse the file
    """
    try:
        audio_file = MutagenFile(local_path, easy=True)
    except Exception as e:
        logger.debug(f"Could not read metadata from {local_path}: {e}")
        return None

    if audio_file is None:
        logger.debug(f"Unrecognized audio container: {local_path}")
        return None

    duration = None
    info = getattr(audio_file, "info", None)
    if info is not None:
        duration = round_duration(getattr(info, "length", None))

    return EmbeddedTags(
        title=get_tag_value(audio_file, TITLE_TAGS),
        artist=get_tag_value(audio_file, ARTIST_TAGS),
        album_artist=get_tag_value(audio_file, ALBUM_ARTIST_TAGS),
        album=get_tag_value(audio_file, ALBUM_TAGS),
        genre=get_tag_value(audio_file, GENRE_TAGS),
        duration=duration,
    )


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_field(*candidates: Any, default: Any = None) -> Any:
    """Pure function - first non-empty candidate, else default."""
    for candidate in candidates:
        if not _is_empty(candidate):
            return candidate
    return default


def strip_extension(filename: str) -> str:
    """Filename without its last extension; never returns an empty string."""
    stem, dot, _ = filename.rpartition(".")
    if dot and stem:
        return stem
    return filename


def resolve_track_metadata(
    filename: str,
    override: Optional[MetadataOverride],
    tags: Optional[EmbeddedTags],
) -> dict[str, Any]:
    """Pure function - merge override, embedded tags and filename defaults.

    Each field is resolved independently. Title and artist are always
    non-empty; the rest may be None.
    """
    override = override or MetadataOverride(filename=filename)
    tags = tags or EmbeddedTags()

    return {
        "title": resolve_field(
            override.title, tags.title, default=strip_extension(filename)
        ),
        "artist": resolve_field(
            override.artist, tags.artist, tags.album_artist, default=UNKNOWN_ARTIST
        ),
        "album": resolve_field(override.album, tags.album),
        "genre": resolve_field(override.genre, tags.genre),
        "duration": resolve_field(override.duration, tags.duration),
        "cover": resolve_field(override.cover),
    }


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"


def format_size(size_bytes: int) -> str:
    """Format file size in bytes to human-readable string."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
