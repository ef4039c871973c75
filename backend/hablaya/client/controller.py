"""
Client Session Controller

Drives one learner session as an explicit state machine:

    idle -> recording -> transcribing -> awaiting-reply -> speaking -> idle

Every failure path lands back in idle with a system message for the learner.
Each turn runs strictly in sequence: store the user message, ask the chat
relay, store the reply, synthesize it, play it.
"""
import datetime as dt
import logging
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import httpx

from .capabilities import (
    CaptureError,
    EmptyCaptureError,
    MicrophonePermissionError,
    NullCapabilities,
    UnsupportedCapabilityError,
    VoiceCapabilities,
)
from .history import ConversationHistory
from .relay import RelayError, TranscriptionResult
from .stats import SessionStats
from .storage import KeyValueStore, MemoryStore, PreferenceStore, SessionSettings
from .view import SessionView

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10
TYPED_ACCURACY = 1.0
NATIVE_CONFIDENCE = 0.8

MSG_BUSY = "Please wait until the current reply has finished."
MSG_CHAT_FAILED = "Sorry, there was an error processing your request. Please try again."
MSG_NOT_UNDERSTOOD = "Sorry, I couldn't understand the audio. Please try again or type your message."

# Failures coming back from the relays
_RELAY_ERRORS = (RelayError, httpx.HTTPError)


class SessionState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"
    AWAITING_REPLY = "awaiting-reply"
    SPEAKING = "speaking"


class SessionController:
    """
    In-session orchestrator.

    Args:
        relay: RelayClient (or anything with chat / speak / transcribe coroutines)
        capabilities: Platform adapter for microphone, recognition and playback
        view: Where messages, typing indicator and feedback are rendered
        store: Key-value store for preferences (loaded once here)
        history_limit: Conversation window sent with every chat request
        model: Optional chat model override
    """

    def __init__(
        self,
        relay,
        capabilities: Optional[VoiceCapabilities] = None,
        view: Optional[SessionView] = None,
        store: Optional[KeyValueStore] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        model: Optional[str] = None,
    ):
        self.relay = relay
        self.capabilities = capabilities or NullCapabilities()
        self.view = view or SessionView()
        self.preferences = PreferenceStore(store or MemoryStore())
        self.model = model

        self.history = ConversationHistory(history_limit)
        self.stats = SessionStats()
        self.state = SessionState.IDLE
        self.last_transcription: Optional[TranscriptionResult] = None
        self.last_reply_metadata: Dict[str, Any] = {}

        self._mic_permission = False
        self._playback: Any = None

        self.settings = self._load_settings()
        self.theme = self.preferences.load_theme() or "light"
        self.view.apply_theme(self.theme)

    # -------- settings / preferences --------
    def _load_settings(self) -> SessionSettings:
        settings = self.preferences.load_settings()
        overrides: Dict[str, Any] = {}
        voice = self.preferences.load_voice()
        if voice:
            overrides["voiceId"] = voice
        speed = self.preferences.load_speed()
        if speed is not None and 0.25 <= speed <= 4.0:
            overrides["speechRate"] = speed
        return settings.model_copy(update=overrides) if overrides else settings

    def update_settings(self, **changes) -> SessionSettings:
        """Apply an explicit settings action and persist it (raises ValidationError on bad values)"""
        self.settings = SessionSettings.model_validate({**self.settings.model_dump(), **changes})
        self.preferences.save_settings(self.settings)
        if "voiceId" in changes:
            self.preferences.save_voice(self.settings.voiceId)
        if "speechRate" in changes:
            self.preferences.save_speed(self.settings.speechRate)
        return self.settings

    def set_theme(self, theme: str) -> None:
        self.theme = theme
        self.preferences.save_theme(theme)
        self.view.apply_theme(theme)

    def toggle_theme(self) -> str:
        self.set_theme("light" if self.theme == "dark" else "dark")
        return self.theme

    # -------- state --------
    def _transition(self, state: SessionState) -> None:
        logger.debug("[session] %s -> %s", self.state.value, state.value)
        self.state = state
        self.view.on_state_change(state.value)

    def _fail(self, message: str) -> None:
        self.view.add_system_message(message)
        self._transition(SessionState.IDLE)

    def _session_data(self) -> Dict[str, Any]:
        elapsed = dt.datetime.now(dt.timezone.utc) - self.stats.startTime
        return {
            "messagesSent": self.stats.messagesSent,
            "wordsPracticed": self.stats.wordsPracticed,
            "accuracyScore": round(self.stats.accuracyScore, 2),
            "sessionMinutes": int(elapsed.total_seconds() // 60),
            "feedbackVerbosity": self.settings.feedbackVerbosity,
        }

    # -------- typed input --------
    async def submit_text(self, text: str) -> Optional[str]:
        """Send a typed message; returns the tutor reply, or None on failure"""
        text = (text or "").strip()
        if not text:
            return None
        if self.state is not SessionState.IDLE:
            self.view.add_system_message(MSG_BUSY)
            return None
        return await self._run_turn(text, is_voice=False, accuracy=TYPED_ACCURACY)

    # -------- voice input --------
    async def press_mic(self) -> bool:
        """Mic down: get permission (once per session) and start capturing"""
        if self.state is not SessionState.IDLE:
            self.view.add_system_message(MSG_BUSY)
            return False
        try:
            if not self._mic_permission:
                if not await self.capabilities.request_microphone():
                    raise MicrophonePermissionError("microphone permission denied")
                self._mic_permission = True
            await self._stop_playback()
            await self.capabilities.start_capture()
        except CaptureError as e:
            logger.warning("[session] Could not start recording: %s", e)
            self._fail(e.guidance)
            return False
        except Exception as e:
            logger.exception("[session] Unexpected error starting capture: %s", e)
            self._fail(CaptureError.guidance)
            return False
        self._transition(SessionState.RECORDING)
        return True

    async def release_mic(self) -> Optional[str]:
        """Mic up: finalize the recording, transcribe it and run the turn"""
        if self.state is not SessionState.RECORDING:
            return None
        try:
            audio = await self.capabilities.stop_capture()
            if not audio:
                raise EmptyCaptureError("empty recording")
        except CaptureError as e:
            logger.warning("[session] Recording failed: %s", e)
            self._fail(e.guidance)
            return None
        except Exception as e:
            logger.exception("[session] Unexpected error finishing capture: %s", e)
            self._fail(CaptureError.guidance)
            return None

        self._transition(SessionState.TRANSCRIBING)
        text, confidence = await self._transcribe(audio)
        if not text:
            self._fail(MSG_NOT_UNDERSTOOD)
            return None
        return await self._run_turn(text, is_voice=True, accuracy=confidence)

    async def _transcribe(self, audio: bytes) -> Tuple[Optional[str], float]:
        """Provider transcription first, then exactly one native recognition attempt"""
        try:
            result = await self.relay.transcribe(audio, language="en")
        except _RELAY_ERRORS as e:
            logger.warning("[session] Transcription relay failed, trying native recognition: %s", e)
        except Exception as e:
            logger.exception("[session] Unexpected transcription failure, trying native recognition: %s", e)
        else:
            text = (result.text or "").strip()
            if text:
                self.last_transcription = result
                self.view.show_feedback(result)
                return text, result.confidence
            logger.info("[session] Transcription relay returned no text, trying native recognition")

        try:
            text = await self.capabilities.native_transcribe()
        except CaptureError as e:
            logger.info("[session] Native recognition unavailable: %s", e)
            return None, 0.0
        except Exception as e:
            logger.exception("[session] Native recognition failed: %s", e)
            return None, 0.0
        text = (text or "").strip()
        return (text, NATIVE_CONFIDENCE) if text else (None, 0.0)

    # -------- one turn --------
    async def _run_turn(self, text: str, is_voice: bool, accuracy: float) -> Optional[str]:
        self.history.add("user", text, isVoiceInput=is_voice, mode="voice" if is_voice else "text")
        self.view.add_message("user", text)
        self.stats.record_message(text, accuracy)

        self._transition(SessionState.AWAITING_REPLY)
        self.view.show_typing()
        try:
            try:
                reply = await self.relay.chat(
                    self.history.to_payload(),
                    model=self.model,
                    user_level=self.settings.proficiencyLevel,
                    learning_focus=self.settings.learningFocus,
                    session_data=self._session_data(),
                    is_voice_input=is_voice,
                )
            finally:
                self.view.hide_typing()
        except _RELAY_ERRORS as e:
            logger.error("[session] Error getting AI response: %s", e)
            self._fail(MSG_CHAT_FAILED)
            return None
        except Exception as e:
            logger.exception("[session] Unexpected error getting AI response: %s", e)
            self._fail(MSG_CHAT_FAILED)
            return None

        self.history.add("assistant", reply.message)
        self.last_reply_metadata = reply.metadata
        self.view.add_message("assistant", reply.message)

        try:
            await self._speak(reply.message)
        finally:
            self._transition(SessionState.IDLE)
        return reply.message

    async def replay(self, text: str) -> None:
        """Speak an earlier tutor message again"""
        if self.state is not SessionState.IDLE:
            self.view.add_system_message(MSG_BUSY)
            return
        try:
            await self._speak(text)
        finally:
            self._transition(SessionState.IDLE)

    # -------- audio output --------
    async def _speak(self, text: str) -> None:
        self._transition(SessionState.SPEAKING)
        try:
            audio = await self.relay.speak(
                text, voice=self.settings.voiceId, speed=self.settings.speechRate
            )
        except Exception as e:
            logger.warning("[session] Speech relay failed, using native synthesis: %s", e)
            await self._stop_playback()
            try:
                self._playback = await self.capabilities.native_speak(text)
            except UnsupportedCapabilityError:
                logger.info("[session] No speech output available, reply stays text-only")
            except Exception as err:
                logger.exception("[session] Native synthesis failed: %s", err)
            return
        await self._play(audio)

    async def _play(self, audio: bytes) -> None:
        # One playback slot: release the current one before taking it
        await self._stop_playback()
        try:
            self._playback = await self.capabilities.speak(audio)
        except UnsupportedCapabilityError:
            logger.info("[session] Audio playback not supported, reply stays text-only")
        except Exception as e:
            logger.exception("[session] Audio playback failed: %s", e)

    async def _stop_playback(self) -> None:
        handle, self._playback = self._playback, None
        if handle is None:
            return
        try:
            await self.capabilities.stop_speaking(handle)
        except Exception as e:
            logger.warning("[session] Could not stop playback: %s", e)
