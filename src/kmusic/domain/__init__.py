"""Domain layer - library catalog and audio streaming."""
