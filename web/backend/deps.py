from pathlib import Path

from kmusic.core.config import Config, load_config


def get_config() -> Config:
    """FastAPI dependency for configuration."""
    return load_config()


def get_library_root(config: Config) -> Path:
    """Library root as an absolute path."""
    return Path(config.music.library_path).expanduser().absolute()
