"""
Device Capability Interface

Abstracts microphone capture, native speech recognition and audio output so
the session controller does not depend on any particular platform.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CaptureError(RuntimeError):
    """Local capture problem; shown to the learner, never sent to the relays"""

    guidance = "Something went wrong with audio capture. Please try again."


class MicrophonePermissionError(CaptureError):
    guidance = "Microphone access was denied. Please allow microphone access in your browser settings and try again."


class EmptyCaptureError(CaptureError):
    guidance = "No audio was recorded. Hold the microphone button while you speak."


class UnsupportedCapabilityError(CaptureError):
    guidance = "This feature is not supported on your device. Please use Chrome or Edge, or type your message."


class VoiceCapabilities(ABC):
    """Platform adapter used by SessionController"""

    @abstractmethod
    async def request_microphone(self) -> bool:
        """Ask for microphone permission; True when granted"""
        pass

    @abstractmethod
    async def start_capture(self) -> None:
        """Open the capture stream and start buffering chunks"""
        pass

    @abstractmethod
    async def stop_capture(self) -> bytes:
        """Stop capturing and return the buffered audio as one blob"""
        pass

    @abstractmethod
    async def native_transcribe(self) -> Optional[str]:
        """One attempt with the platform speech recognizer"""
        pass

    @abstractmethod
    async def speak(self, audio: bytes) -> Any:
        """Start playing audio; returns a handle for stop_speaking"""
        pass

    @abstractmethod
    async def stop_speaking(self, handle: Any) -> None:
        """Stop and release playback started by speak"""
        pass

    async def native_speak(self, text: str) -> Any:
        """Speak text with the platform synthesizer (optional)"""
        raise UnsupportedCapabilityError("native speech synthesis not available")


class NullCapabilities(VoiceCapabilities):
    """Text-only device: no microphone, no audio output"""

    async def request_microphone(self) -> bool:
        raise UnsupportedCapabilityError("microphone capture not available")

    async def start_capture(self) -> None:
        raise UnsupportedCapabilityError("microphone capture not available")

    async def stop_capture(self) -> bytes:
        raise UnsupportedCapabilityError("microphone capture not available")

    async def native_transcribe(self) -> Optional[str]:
        raise UnsupportedCapabilityError("speech recognition not available")

    async def speak(self, audio: bytes) -> Any:
        raise UnsupportedCapabilityError("audio playback not available")

    async def stop_speaking(self, handle: Any) -> None:
        return None
