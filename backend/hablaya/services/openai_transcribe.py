"""
OpenAI Whisper Transcription Service

Forwards an uploaded recording to the Whisper API with a language hint and
a context prompt that nudges it towards language-learning speech.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .provider_base import OpenAIService, UpstreamError, extract_error_message
from ..config import settings

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
DEFAULT_PROMPT = (
    "This is an English language learning session. "
    "Please transcribe clearly and provide pronunciation feedback."
)


@dataclass
class WhisperTranscript:
    """Raw transcript returned by the provider"""
    text: str
    language: str
    confidence: Optional[float] = None  # Whisper normally omits this


class OpenAIWhisperService(OpenAIService):
    """OpenAI Whisper API Service"""

    @property
    def name(self) -> str:
        return "OpenAI Whisper API"

    async def transcribe(
        self,
        audio: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm",
        language: str = DEFAULT_LANGUAGE,
        prompt: str = DEFAULT_PROMPT,
    ) -> WhisperTranscript:
        """
        Transcribe an in-memory recording

        Raises:
            RuntimeError: API key missing
            UpstreamError: non-success status or no transcript text
        """
        self._require_key()

        data = {
            "model": settings.whisper_model,
            "language": language,
            "prompt": prompt,
        }
        files = {"file": (filename, audio, content_type)}

        logger.info("[ASR] Sending %d bytes (%s) to %s", len(audio), content_type, self.name)
        async with self._client(timeout=120) as client:
            resp = await client.post(
                settings.whisper_api_url, headers=self._auth_headers(), data=data, files=files
            )

        logger.info("[ASR] OpenAI response status: %s", resp.status_code)
        if resp.is_error:
            message = extract_error_message(resp, f"OpenAI API error: {resp.status_code}")
            logger.error("[ASR] Upstream error %s: %s", resp.status_code, message)
            raise UpstreamError(message, status_code=resp.status_code)

        result = resp.json()
        text = result.get("text")
        if not text:
            raise UpstreamError("No transcription text received from OpenAI")

        return WhisperTranscript(
            text=text,
            language=language,
            confidence=result.get("confidence"),
        )


# Global singleton
whisper_service = OpenAIWhisperService()
