"""
OpenAI Text-to-Speech Service

Turns tutor replies into mp3 audio. Text is lightly rewritten first
(pauses after punctuation, optional emphasis markup) so learners can follow it.
"""
import logging
import re
from typing import AsyncIterator, Optional

from .provider_base import OpenAIService, UpstreamError, extract_error_message
from ..config import settings

logger = logging.getLogger(__name__)

VALID_VOICES = ("alloy", "echo", "fable", "onyx", "nova", "shimmer")
MAX_TEXT_LENGTH = 4096
MIN_SPEED = 0.25
MAX_SPEED = 4.0
EMPHASIS_KEYWORDS = ("important", "key", "essential", "crucial", "vital")


def resolve_voice(voice: Optional[str]) -> str:
    """Unknown or missing voices fall back to the configured default"""
    if voice in VALID_VOICES:
        return voice
    return settings.default_voice


def clamp_speed(speed: float) -> float:
    return max(MIN_SPEED, min(MAX_SPEED, speed))


def process_text_for_learning(text: str, emphasis: str = "moderate") -> str:
    """
    Prepare text for language-learning playback.

    - emphasis == "strong": wrap key vocabulary in <emphasis level="strong">
    - always: "." -> "... " and "," -> ", " (longer pauses)
    """
    processed = text
    if emphasis == "strong":
        for word in EMPHASIS_KEYWORDS:
            processed = re.sub(
                rf"\b{word}\b",
                f'<emphasis level="strong">{word}</emphasis>',
                processed,
                flags=re.IGNORECASE,
            )
    processed = processed.replace(".", "... ")
    processed = processed.replace(",", ", ")
    return processed


class OpenAISpeechService(OpenAIService):
    """OpenAI audio/speech API Service"""

    @property
    def name(self) -> str:
        return "OpenAI Text-to-Speech"

    async def synthesize(self, text: str, voice: str, speed: float) -> AsyncIterator[bytes]:
        """
        Start a streamed synthesis request.

        The provider status is checked before returning, so errors surface
        here rather than halfway through the response body.

        Returns:
            Async iterator of mp3 chunks; the HTTP client is closed once it is exhausted
        """
        self._require_key()

        headers = {**self._auth_headers(), "Content-Type": "application/json"}
        payload = {
            "model": settings.tts_model,
            "voice": voice,
            "input": text,
            "response_format": "mp3",
            "speed": speed,
        }

        logger.info("[TTS] HTTP POST %s voice=%s speed=%s chars=%d",
                    settings.speech_api_url, voice, speed, len(text))
        client = self._client(timeout=None)
        request = client.build_request("POST", settings.speech_api_url, headers=headers, json=payload)
        try:
            resp = await client.send(request, stream=True)
        except BaseException:
            await client.aclose()
            raise

        if resp.is_error:
            await resp.aread()
            message = extract_error_message(resp, "TTS generation failed")
            await resp.aclose()
            await client.aclose()
            logger.error("[TTS] Upstream error %s: %s", resp.status_code, message)
            raise UpstreamError(message, status_code=resp.status_code)

        async def _body() -> AsyncIterator[bytes]:
            try:
                async for chunk in resp.aiter_bytes():
                    if chunk:
                        yield chunk
            finally:
                await resp.aclose()
                await client.aclose()

        return _body()


# Global singleton
speech_service = OpenAISpeechService()
