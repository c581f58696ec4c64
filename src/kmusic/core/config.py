"""
Configuration management for kmusic
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger


@dataclass
class MusicConfig:
    """Configuration for music library settings."""

    library_path: str = field(default_factory=lambda: str(Path.cwd() / "data"))
    metadata_file: str = "music-metadata.json"  # Relative to library_path unless absolute
    supported_formats: List[str] = field(
        default_factory=lambda: ["mp3", "ogg", "opus", "flac", "m4a", "wav"]
    )

    def metadata_path(self) -> Path:
        """Resolve the sidecar file location against the library root."""
        path = Path(self.metadata_file).expanduser()
        if path.is_absolute():
            return path
        return Path(self.library_path) / path


@dataclass
class StreamConfig:
    """Configuration for audio streaming responses."""

    read_chunk_size: int = 64 * 1024  # Bytes per read from the open file
    cache_control: str = "public, max-age=31536000, immutable"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/kmusic/kmusic.log)
    )
    console_output: bool = True  # Also log to stderr


@dataclass
class WebConfig:
    """Configuration for the web backend."""

    host: str = "127.0.0.1"
    port: int = 8000
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:5173"]
    )


@dataclass
class Config:
    """Main configuration object."""

    music: MusicConfig = field(default_factory=MusicConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "kmusic"
    return Path.home() / ".config" / "kmusic"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "kmusic"
    return Path.home() / ".local" / "share" / "kmusic"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/kmusic (or ~/.config/kmusic)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _apply_toml(config: Config, toml_data: dict) -> Config:
    """Overlay parsed TOML sections onto a default Config."""
    if "music" in toml_data:
        music_data = toml_data["music"]
        library_path = music_data.get("library_path")
        config.music = MusicConfig(
            library_path=(
                str(Path(library_path).expanduser())
                if library_path
                else config.music.library_path
            ),
            metadata_file=music_data.get("metadata_file", config.music.metadata_file),
            supported_formats=[
                fmt.lower().lstrip(".")
                for fmt in music_data.get(
                    "supported_formats", config.music.supported_formats
                )
            ],
        )

    if "stream" in toml_data:
        stream_data = toml_data["stream"]
        config.stream = StreamConfig(
            read_chunk_size=stream_data.get(
                "read_chunk_size", config.stream.read_chunk_size
            ),
            cache_control=stream_data.get(
                "cache_control", config.stream.cache_control
            ),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    if "web" in toml_data:
        web_data = toml_data["web"]
        config.web = WebConfig(
            host=web_data.get("host", config.web.host),
            port=web_data.get("port", config.web.port),
            allowed_origins=web_data.get(
                "allowed_origins", config.web.allowed_origins
            ),
        )

    return config


def _apply_env(config: Config) -> Config:
    """Environment variables win over TOML values."""
    music_dir = os.environ.get("KMUSIC_MUSIC_DIR")
    if music_dir:
        config.music.library_path = str(Path(music_dir).expanduser())

    metadata_file = os.environ.get("KMUSIC_METADATA_FILE")
    if metadata_file:
        config.music.metadata_file = metadata_file

    log_level = os.environ.get("KMUSIC_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    allowed_origins = os.environ.get("ALLOWED_ORIGINS", "")
    if allowed_origins:
        config.web.allowed_origins = [
            origin.strip() for origin in allowed_origins.split(",") if origin.strip()
        ]

    return config


def load_config() -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - KMUSIC_MUSIC_DIR
    - KMUSIC_METADATA_FILE
    - KMUSIC_LOG_LEVEL
    - ALLOWED_ORIGINS
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config = Config()
    config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                toml_data = tomllib.load(f)
            config = _apply_toml(config, toml_data)
        except Exception as e:
            # Unreadable file, bad TOML, or values of the wrong type
            logger.warning(f"Error loading configuration from {config_path}: {e}")
            logger.warning("Using default configuration.")
            config = Config()

    return _apply_env(config)
