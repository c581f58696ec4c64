"""
Sidecar metadata overrides.

The sidecar is a JSON array of objects
``{filename, title, artist, album?, cover?, duration?, genre?}``.
Any problem reading it degrades to "no overrides".
"""

import json
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .models import MetadataOverride

_TEXT_FIELDS = ("title", "artist", "album", "cover", "genre")


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    # Numbers read as text; anything else falls through to the next source
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _optional_number(value: Any) -> Optional[float]:
    # bool is an int subclass; a true/false duration is junk
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def parse_override_entry(entry: Any) -> Optional[MetadataOverride]:
    """Pure function - build a MetadataOverride from one sidecar object.

    Returns None for entries that are not objects or have no usable filename.
    """
    if not isinstance(entry, dict):
        return None

    filename = entry.get("filename")
    if not isinstance(filename, str) or not filename.strip():
        return None

    fields = {name: _optional_text(entry.get(name)) for name in _TEXT_FIELDS}
    return MetadataOverride(
        filename=filename.strip().strip("/"),
        duration=_optional_number(entry.get("duration")),
        **fields,
    )


def load_overrides(metadata_file: Path) -> dict[str, MetadataOverride]:
    """Load the sidecar file into a mapping of filename (or relative path) to override.

    Args:
        metadata_file: Location of the sidecar JSON file

    Returns:
        Mapping keyed by each entry's `filename`. Empty if the file is absent
        or malformed. Later entries win over earlier ones with the same key.
    """
    if not metadata_file.exists():
        logger.debug(f"No metadata sidecar at {metadata_file}")
        return {}

    try:
        with open(metadata_file, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable metadata sidecar {metadata_file}: {e}")
        return {}

    if not isinstance(data, list):
        logger.warning(
            f"Ignoring metadata sidecar {metadata_file}: expected a JSON array, "
            f"got {type(data).__name__}"
        )
        return {}

    overrides: dict[str, MetadataOverride] = {}
    skipped = 0
    for entry in data:
        override = parse_override_entry(entry)
        if override is None:
            skipped += 1
            continue
        overrides[override.filename] = override

    if skipped:
        logger.warning(f"Skipped {skipped} malformed entries in {metadata_file}")

    logger.debug(f"Loaded {len(overrides)} metadata overrides from {metadata_file}")
    return overrides


def find_override(
    overrides: dict[str, MetadataOverride], relative_path: str, filename: str
) -> Optional[MetadataOverride]:
    """Look up an override, preferring a relative-path key over a bare filename key."""
    if not overrides:
        return None
    return overrides.get(relative_path) or overrides.get(filename)
