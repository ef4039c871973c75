"""
Unit tests for client.storage module.
Tests key-value backends and typed preference access.
"""
import json

import pytest
from pydantic import ValidationError
from unittest.mock import MagicMock

from hablaya.client.storage import (
    SETTINGS_KEY,
    SPEED_KEY,
    THEME_KEY,
    VOICE_KEY,
    JsonFileStore,
    MemoryStore,
    PreferenceStore,
    SessionSettings,
)


class TestSessionSettings:

    def test_defaults(self):
        settings = SessionSettings()
        assert settings.proficiencyLevel is None
        assert settings.learningFocus == "conversation"
        assert settings.feedbackVerbosity == "balanced"
        assert settings.voiceId == "nova"
        assert settings.speechRate == 1.0

    @pytest.mark.parametrize("rate", [0.1, 4.5])
    def test_speech_rate_range(self, rate):
        with pytest.raises(ValidationError):
            SessionSettings(speechRate=rate)


class TestJsonFileStore:

    def test_round_trip_on_disk(self, tmp_path):
        path = tmp_path / "prefs" / "preferences.json"
        store = JsonFileStore(path)

        store.set(THEME_KEY, "dark")
        store.set(VOICE_KEY, "shimmer")
        store.remove(VOICE_KEY)

        assert json.loads(path.read_text()) == {THEME_KEY: "dark"}
        assert JsonFileStore(path).get(THEME_KEY) == "dark"
        assert store.get(VOICE_KEY) is None

    def test_missing_file(self, tmp_path):
        assert JsonFileStore(tmp_path / "absent.json").get(THEME_KEY) is None

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text("{not json")

        store = JsonFileStore(path)
        assert store.get(THEME_KEY) is None
        store.set(THEME_KEY, "light")
        assert store.get(THEME_KEY) == "light"


class TestPreferenceStore:

    def test_settings_round_trip(self):
        prefs = PreferenceStore(MemoryStore())
        prefs.save_settings(SessionSettings(proficiencyLevel="advanced", speechRate=0.75))

        loaded = prefs.load_settings()
        assert loaded.proficiencyLevel == "advanced"
        assert loaded.speechRate == 0.75

    def test_invalid_saved_settings_fall_back_to_defaults(self):
        store = MemoryStore({SETTINGS_KEY: '{"speechRate": "very fast"}'})
        assert PreferenceStore(store).load_settings() == SessionSettings()

    def test_malformed_json_falls_back_to_defaults(self):
        store = MemoryStore({SETTINGS_KEY: "{oops"})
        assert PreferenceStore(store).load_settings() == SessionSettings()

    def test_unknown_theme_is_ignored(self):
        assert PreferenceStore(MemoryStore({THEME_KEY: "sepia"})).load_theme() is None
        assert PreferenceStore(MemoryStore({THEME_KEY: "dark"})).load_theme() == "dark"

    def test_speed(self):
        prefs = PreferenceStore(MemoryStore())
        assert prefs.load_speed() is None
        prefs.save_speed(1.25)
        assert prefs.load_speed() == 1.25
        assert PreferenceStore(MemoryStore({SPEED_KEY: "fast"})).load_speed() is None

    def test_write_failure_is_not_raised(self):
        store = MagicMock()
        store.set.side_effect = OSError("read-only file system")

        PreferenceStore(store).save_theme("dark")

        store.set.assert_called_once_with(THEME_KEY, "dark")
