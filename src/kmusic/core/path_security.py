"""
Path security validation utilities for kmusic.

Provides pure functions to validate file paths are within the library root,
preventing directory traversal attacks and symlink escapes.
"""

from pathlib import Path
from typing import Optional


def is_path_within_library(file_path: Path, library_path: Path) -> bool:
    """Pure function - validates path is within the library root.

    Uses Path.resolve() to handle symlinks and relative paths, then checks if the
    resolved path is a child of the resolved library root.

    Args:
        file_path: The file path to validate
        library_path: The library root directory

    Returns:
        True if path is within library boundaries, False otherwise
    """
    try:
        resolved_path = file_path.resolve()
        resolved_root = Path(library_path).resolve()
        # relative_to raises ValueError if path is not a subpath
        resolved_path.relative_to(resolved_root)
        return True
    except (OSError, RuntimeError, ValueError):
        # Path.resolve() can raise OSError for invalid paths or RuntimeError for recursion
        return False


def resolve_library_path(library_path: Path, requested: str) -> Optional[Path]:
    """Pure function - join a client-supplied relative path to the library root.

    Args:
        library_path: The library root directory
        requested: Relative path as sent by the client (already URL-decoded)

    Returns:
        The resolved absolute Path if it stays inside the library, None otherwise
    """
    if "\x00" in requested:
        return None

    candidate = Path(library_path) / requested
    if not is_path_within_library(candidate, library_path):
        return None

    try:
        return candidate.resolve()
    except (OSError, RuntimeError):
        return None
