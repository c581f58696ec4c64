"""Tests for sidecar metadata override loading."""

from kmusic.domain.library.models import MetadataOverride
from kmusic.domain.library.overrides import (
    find_override,
    load_overrides,
    parse_override_entry,
)


class TestLoadOverrides:
    """Test load_overrides degrades to an empty mapping on bad input."""

    def test_missing_file_returns_empty(self, library):
        assert load_overrides(library / "music-metadata.json") == {}

    def test_valid_file_keyed_by_filename(self, make_sidecar):
        path = make_sidecar(
            [
                {
                    "filename": "song.mp3",
                    "title": "Song",
                    "artist": "Band",
                    "album": "Record",
                    "cover": "/covers/record.jpg",
                    "duration": 215,
                    "genre": "Rock",
                },
                {"filename": "other.flac", "title": "Other", "artist": "Someone"},
            ]
        )

        overrides = load_overrides(path)

        assert set(overrides) == {"song.mp3", "other.flac"}
        assert overrides["song.mp3"] == MetadataOverride(
            filename="song.mp3",
            title="Song",
            artist="Band",
            album="Record",
            cover="/covers/record.jpg",
            duration=215,
            genre="Rock",
        )
        assert overrides["other.flac"].album is None

    def test_invalid_json_returns_empty(self, make_sidecar):
        path = make_sidecar("[{not json")
        assert load_overrides(path) == {}

    def test_wrong_top_level_shape_returns_empty(self, make_sidecar):
        path = make_sidecar({"filename": "song.mp3", "title": "Song"})
        assert load_overrides(path) == {}

    def test_malformed_entries_skipped(self, make_sidecar):
        path = make_sidecar(
            [
                "not an object",
                {"title": "No filename"},
                {"filename": 42, "title": "Numeric filename"},
                {"filename": "good.mp3", "title": "Good", "artist": "Fine"},
            ]
        )

        overrides = load_overrides(path)
        assert list(overrides) == ["good.mp3"]

    def test_later_entry_wins(self, make_sidecar):
        path = make_sidecar(
            [
                {"filename": "song.mp3", "title": "First", "artist": "A"},
                {"filename": "song.mp3", "title": "Second", "artist": "B"},
            ]
        )
        assert load_overrides(path)["song.mp3"].title == "Second"

    def test_directory_instead_of_file_returns_empty(self, library):
        sidecar = library / "music-metadata.json"
        sidecar.mkdir()
        assert load_overrides(sidecar) == {}


class TestParseOverrideEntry:
    """Test parse_override_entry field coercion."""

    def test_non_numeric_duration_dropped(self):
        entry = parse_override_entry(
            {"filename": "a.mp3", "title": "A", "artist": "B", "duration": "3:00"}
        )
        assert entry.duration is None

    def test_boolean_duration_dropped(self):
        entry = parse_override_entry({"filename": "a.mp3", "duration": True})
        assert entry.duration is None

    def test_non_text_values_dropped(self):
        entry = parse_override_entry(
            {
                "filename": "a.mp3",
                "title": ["a"],
                "artist": {"name": "x"},
                "album": True,
                "genre": 1999,
            }
        )
        assert entry.title is None
        assert entry.artist is None
        assert entry.album is None
        assert entry.genre == "1999"

    def test_relative_path_key_normalized(self):
        entry = parse_override_entry({"filename": "/albums/a.mp3"})
        assert entry.filename == "albums/a.mp3"

    def test_blank_filename_rejected(self):
        assert parse_override_entry({"filename": "   "}) is None


class TestFindOverride:
    """Test lookup precedence between relative-path and filename keys."""

    def test_relative_path_beats_filename(self):
        by_name = MetadataOverride(filename="intro.mp3", title="Generic Intro")
        by_path = MetadataOverride(filename="live/intro.mp3", title="Live Intro")
        overrides = {"intro.mp3": by_name, "live/intro.mp3": by_path}

        assert find_override(overrides, "live/intro.mp3", "intro.mp3") is by_path
        assert find_override(overrides, "studio/intro.mp3", "intro.mp3") is by_name

    def test_no_match(self):
        overrides = {"a.mp3": MetadataOverride(filename="a.mp3")}
        assert find_override(overrides, "b.mp3", "b.mp3") is None
        assert find_override({}, "a.mp3", "a.mp3") is None
