"""
Client preference storage.

Best-effort key-value persistence of user preferences (theme, voice, speed,
session settings). Nothing here is required for a turn to succeed: read
failures fall back to defaults, write failures are logged.
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

THEME_KEY = "hablaya-theme"
VOICE_KEY = "hablaya-voice"
SPEED_KEY = "hablaya-speed"
SETTINGS_KEY = "hablaya-settings"

THEMES = ("light", "dark")


class SessionSettings(BaseModel):
    """User-chosen tutoring settings, changed only through explicit settings actions"""
    proficiencyLevel: Optional[str] = None  # None = let the server detect it
    learningFocus: str = "conversation"
    feedbackVerbosity: str = "balanced"  # minimal / balanced / detailed
    voiceId: str = "nova"
    speechRate: float = Field(default=1.0, ge=0.25, le=4.0)


class KeyValueStore(ABC):
    """String-keyed string store (browser localStorage equivalent)"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Keeps all keys in one JSON object on disk"""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("[storage] Could not read %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)


class PreferenceStore:
    """Typed access to the preference keys on top of a KeyValueStore"""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _safe_set(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except OSError as e:
            logger.warning("[storage] Could not persist %s: %s", key, e)

    def load_settings(self) -> SessionSettings:
        raw = self.store.get(SETTINGS_KEY)
        if not raw:
            return SessionSettings()
        try:
            return SessionSettings.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("[storage] Ignoring invalid saved settings: %s", e)
            return SessionSettings()

    def save_settings(self, settings: SessionSettings) -> None:
        self._safe_set(SETTINGS_KEY, settings.model_dump_json())

    def load_theme(self) -> Optional[str]:
        theme = self.store.get(THEME_KEY)
        return theme if theme in THEMES else None

    def save_theme(self, theme: str) -> None:
        self._safe_set(THEME_KEY, theme)

    def load_voice(self) -> Optional[str]:
        return self.store.get(VOICE_KEY)

    def save_voice(self, voice: str) -> None:
        self._safe_set(VOICE_KEY, voice)

    def load_speed(self) -> Optional[float]:
        raw = self.store.get(SPEED_KEY)
        if raw is None:
            return None
        try:
            return float(raw)
        except ValueError:
            return None

    def save_speed(self, speed: float) -> None:
        self._safe_set(SPEED_KEY, str(speed))
