"""Shared fixtures for kmusic package tests."""

import json
import wave
from pathlib import Path

import pytest


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """Empty library root."""
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def make_file(library: Path):
    """Create a file under the library root, parents included."""

    def _make(relative_path: str, data: bytes = b"fake audio") -> Path:
        path = library / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def make_wav(library: Path):
    """Create a silent mono 16-bit WAV file under the library root."""

    def _make(relative_path: str, seconds: float = 1.0, framerate: int = 8000) -> Path:
        path = library / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with wave.open(str(path), "wb") as w:
            w.setnchannels(1)
            w.setsampwidth(2)
            w.setframerate(framerate)
            w.writeframes(b"\x00\x00" * int(seconds * framerate))
        return path

    return _make


@pytest.fixture
def make_sidecar(library: Path):
    """Write the metadata sidecar; `entries` is dumped as JSON unless it's a str."""

    def _make(entries, name: str = "music-metadata.json") -> Path:
        path = library / name
        content = entries if isinstance(entries, str) else json.dumps(entries)
        path.write_text(content, encoding="utf-8")
        return path

    return _make
