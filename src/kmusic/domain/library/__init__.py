"""Library domain - music file scanning and metadata.

This domain handles:
- Catalog data models
- Sidecar metadata overrides
- Embedded tag extraction and per-field resolution
- Library scanning, search and statistics
"""

# Models
from .models import EmbeddedTags, MetadataOverride, TrackDescriptor

# Sidecar overrides
from .overrides import find_override, load_overrides, parse_override_entry

# Metadata extraction and resolution
from .metadata import (
    UNKNOWN_ARTIST,
    get_tag_value,
    read_embedded_tags,
    resolve_field,
    resolve_track_metadata,
    format_duration,
    format_size,
)

# Library scanning and search
from .scanner import (
    DEFAULT_FORMATS,
    SORT_KEYS,
    make_track_id,
    is_supported_format,
    describe_track,
    scan_library,
    search_tracks,
    filter_by_format,
    sort_tracks,
    get_library_stats,
)

__all__ = [
    # Models
    "EmbeddedTags",
    "MetadataOverride",
    "TrackDescriptor",
    # Overrides
    "find_override",
    "load_overrides",
    "parse_override_entry",
    # Metadata
    "UNKNOWN_ARTIST",
    "get_tag_value",
    "read_embedded_tags",
    "resolve_field",
    "resolve_track_metadata",
    "format_duration",
    "format_size",
    # Scanner
    "DEFAULT_FORMATS",
    "SORT_KEYS",
    "make_track_id",
    "is_supported_format",
    "describe_track",
    "scan_library",
    "search_tracks",
    "filter_by_format",
    "sort_tracks",
    "get_library_stats",
]
