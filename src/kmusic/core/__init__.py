"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML + environment)
- Logging setup (Loguru)
- Path validation against the library root
"""

# Configuration
from .config import (
    Config,
    MusicConfig,
    StreamConfig,
    LoggingConfig,
    WebConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
)

# Logging
from .output import setup_loguru, setup_from_config

# Path security
from .path_security import is_path_within_library, resolve_library_path

__all__ = [
    # Config
    "Config",
    "MusicConfig",
    "StreamConfig",
    "LoggingConfig",
    "WebConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    # Logging
    "setup_loguru",
    "setup_from_config",
    # Path security
    "is_path_within_library",
    "resolve_library_path",
]
