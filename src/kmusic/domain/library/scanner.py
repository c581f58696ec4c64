"""
Music library scanning and search operations.

Walks the library root for supported audio files, resolves their metadata,
and provides the search/filter/sort helpers behind the catalog endpoint.
"""

import os
import re
from pathlib import Path
from typing import Any, Iterable, Optional

from loguru import logger

from .metadata import (
    format_duration,
    format_size,
    read_embedded_tags,
    resolve_track_metadata,
)
from .models import MetadataOverride, TrackDescriptor
from .overrides import find_override

DEFAULT_FORMATS = ("mp3", "ogg", "opus", "flac", "m4a", "wav")

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def display_name(name: str) -> str:
    """Undo surrogate escapes left by undecodable bytes in a file name.

    Invalid UTF-8 bytes become U+FFFD so the name can be serialised.
    """
    return os.fsencode(name).decode("utf-8", errors="replace")


def make_track_id(relative_path: str) -> str:
    """Pure function - replace every non-alphanumeric character with '_'.

    Not collision free: "a b.mp3" and "a_b.mp3" both map to "a_b_mp3".
    """
    return _NON_ALNUM.sub("_", relative_path)


def get_extension(filename: str) -> Optional[str]:
    """Lowercased text after the last '.', or None if there is no dot."""
    _, dot, ext = filename.rpartition(".")
    if not dot or not ext:
        return None
    return ext.lower()


def is_supported_format(filename: str, supported_formats: Iterable[str]) -> bool:
    """Check if file format is supported."""
    ext = get_extension(filename)
    return ext is not None and ext in supported_formats


def describe_track(
    local_path: Path,
    relative_path: str,
    overrides: dict[str, MetadataOverride],
) -> Optional[TrackDescriptor]:
    """Build the catalog entry for one audio file.

    Embedded tags are only read when no override exists for the file.

    Returns:
        TrackDescriptor, or None if the file can't be stat'ed
    """
    filename = display_name(local_path.name)
    relative_path = display_name(relative_path)
    try:
        size_bytes = local_path.stat().st_size
    except OSError as e:
        logger.warning(f"Skipping {relative_path}: {e}")
        return None

    override = find_override(overrides, relative_path, filename)
    tags = None if override else read_embedded_tags(local_path)
    fields = resolve_track_metadata(filename, override, tags)

    return TrackDescriptor(
        id=make_track_id(relative_path),
        filename=filename,
        relative_path=relative_path,
        format=get_extension(filename) or "",
        size_bytes=size_bytes,
        **fields,
    )


def _scan_directory(
    directory: Path,
    base_path: str,
    overrides: dict[str, MetadataOverride],
    supported_formats: frozenset[str],
) -> list[TrackDescriptor]:
    tracks: list[TrackDescriptor] = []

    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.warning(f"Cannot read directory {directory}: {e}")
        return tracks

    for entry in entries:
        relative_path = f"{base_path}/{entry.name}" if base_path else entry.name
        try:
            # Symlinks are neither followed nor served
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file(follow_symlinks=False)
        except OSError as e:
            logger.warning(f"Skipping {relative_path}: {e}")
            continue

        if is_dir:
            tracks.extend(
                _scan_directory(
                    Path(entry.path), relative_path, overrides, supported_formats
                )
            )
        elif is_file and is_supported_format(entry.name, supported_formats):
            track = describe_track(Path(entry.path), relative_path, overrides)
            if track is not None:
                tracks.append(track)

    return tracks


def scan_library(
    library_path: Path,
    overrides: Optional[dict[str, MetadataOverride]] = None,
    supported_formats: Iterable[str] = DEFAULT_FORMATS,
) -> list[TrackDescriptor]:
    """Recursively scan the library root for supported audio files.

    Depth-first, in directory-entry order. Unreadable directories and files
    that can't be stat'ed are skipped; nothing here raises for a single bad
    entry.

    Args:
        library_path: Library root directory
        overrides: Sidecar overrides keyed by filename or relative path
        supported_formats: Lowercase extensions without the dot

    Returns:
        List of TrackDescriptor objects
    """
    if not library_path.is_dir():
        logger.warning(f"Library path does not exist: {library_path}")
        return []

    formats = frozenset(fmt.lower().lstrip(".") for fmt in supported_formats)
    tracks = _scan_directory(library_path, "", overrides or {}, formats)
    logger.info(f"Library scan complete: {len(tracks)} tracks in {library_path}")
    return tracks


def search_tracks(tracks: list[TrackDescriptor], query: str) -> list[TrackDescriptor]:
    """Search tracks by title, artist or album (case-insensitive substring)."""
    query = query.strip().lower()
    if not query:
        return list(tracks)

    return [
        track
        for track in tracks
        if query in track.title.lower()
        or query in track.artist.lower()
        or (track.album and query in track.album.lower())
    ]


def filter_by_format(
    tracks: list[TrackDescriptor], fmt: str
) -> list[TrackDescriptor]:
    """Keep tracks of one format; 'all' keeps everything."""
    fmt = fmt.lower().lstrip(".")
    if fmt == "all":
        return list(tracks)
    return [track for track in tracks if track.format == fmt]


SORT_KEYS = ("title", "artist", "duration")


def sort_tracks(tracks: list[TrackDescriptor], key: str) -> list[TrackDescriptor]:
    """Sort by title or artist (case-insensitive), or duration (unknown last).

    Raises:
        ValueError: If key is not one of SORT_KEYS
    """
    if key == "title":
        return sorted(tracks, key=lambda t: t.title.lower())
    if key == "artist":
        return sorted(tracks, key=lambda t: (t.artist.lower(), t.title.lower()))
    if key == "duration":
        return sorted(
            tracks, key=lambda t: (t.duration is None, t.duration or 0)
        )
    raise ValueError(f"Invalid sort key: {key!r}. Valid keys are: {SORT_KEYS}")


def get_library_stats(tracks: list[TrackDescriptor]) -> dict[str, Any]:
    """Get statistics about the music library."""
    total_duration = sum(track.duration or 0 for track in tracks)
    total_size = sum(track.size_bytes for track in tracks)

    formats: dict[str, int] = {}
    for track in tracks:
        formats[track.format] = formats.get(track.format, 0) + 1

    return {
        "total_tracks": len(tracks),
        "total_duration": total_duration,
        "total_duration_str": format_duration(total_duration),
        "total_size": total_size,
        "total_size_str": format_size(total_size),
        "artists": len({track.artist for track in tracks}),
        "albums": len({track.album for track in tracks if track.album}),
        "formats": formats,
    }
