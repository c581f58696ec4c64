"""Pytest configuration for backend tests."""

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add repository root to path so `web.backend` is importable
repo_root = Path(__file__).parent.parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from kmusic.core.config import Config  # noqa: E402
from web.backend.deps import get_config  # noqa: E402
from web.backend.main import app  # noqa: E402


@pytest.fixture
def music_dir(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def config(music_dir: Path) -> Config:
    config = Config()
    config.music.library_path = str(music_dir)
    return config


@pytest.fixture
def client(config: Config):
    """TestClient whose get_config dependency points at the temp library."""
    app.dependency_overrides[get_config] = lambda: config
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_config, None)


@pytest.fixture
def add_file(music_dir: Path):
    def _add(relative_path: str, data: bytes = b"fake audio") -> Path:
        path = music_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _add


@pytest.fixture
def write_sidecar(music_dir: Path):
    def _write(entries) -> Path:
        path = music_dir / "music-metadata.json"
        content = entries if isinstance(entries, str) else json.dumps(entries)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
