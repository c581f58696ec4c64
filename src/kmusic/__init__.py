"""kmusic - personal music library streaming backend."""

__version__ = "0.1.0"
