"""
Client session package.

Platform-independent version of the in-browser session logic: conversation
buffer, statistics, preferences, relay client and the turn state machine.
"""
from .capabilities import (
    CaptureError,
    EmptyCaptureError,
    MicrophonePermissionError,
    NullCapabilities,
    UnsupportedCapabilityError,
    VoiceCapabilities,
)
from .controller import SessionController, SessionState
from .history import ConversationHistory, Message
from .relay import ChatReply, RelayClient, RelayError, TranscriptionResult
from .stats import SessionStats
from .storage import JsonFileStore, KeyValueStore, MemoryStore, PreferenceStore, SessionSettings
from .view import SessionView

__all__ = [
    "CaptureError",
    "EmptyCaptureError",
    "MicrophonePermissionError",
    "NullCapabilities",
    "UnsupportedCapabilityError",
    "VoiceCapabilities",
    "SessionController",
    "SessionState",
    "ConversationHistory",
    "Message",
    "ChatReply",
    "RelayClient",
    "RelayError",
    "TranscriptionResult",
    "SessionStats",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "PreferenceStore",
    "SessionSettings",
    "SessionView",
]
