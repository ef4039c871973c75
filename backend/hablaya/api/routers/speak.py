"""
Speech Synthesis Relay Router

Validates text, applies learning-friendly pauses/emphasis and streams the
provider's mp3 back to the browser.
"""
import logging
from typing import AsyncIterator

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse

from hablaya.schemas.speech import SpeakRequest
from hablaya.services.openai_speech import (
    MAX_TEXT_LENGTH,
    clamp_speed,
    process_text_for_learning,
    resolve_voice,
    speech_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["speech"])


async def _synthesize_speech(text: str, voice: str, speed: float) -> AsyncIterator[bytes]:
    """Open the provider audio stream (patched in tests)"""
    return await speech_service.synthesize(text=text, voice=voice, speed=speed)


def _text_too_long(length: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": f"Text too long (max {MAX_TEXT_LENGTH} characters)",
            "maxLength": MAX_TEXT_LENGTH,
            "length": length,
        },
    )


@router.post("/speak")
async def speak(req: SpeakRequest):
    """
    Synthesize speech for a tutor reply

    Parameters:
    - text: Text to speak (required, at most 4096 characters)
    - voice: One of alloy/echo/fable/onyx/nova/shimmer, anything else uses the default voice
    - speed: Playback speed, clamped to [0.25, 4.0]
    - emphasis: "strong" adds emphasis markup to key vocabulary

    Returns:
    - audio/mpeg stream with X-Voice-Used / X-Speed-Used / X-Emphasis-Used headers
    """
    if not req.text or not isinstance(req.text, str):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid text input")

    if len(req.text) > MAX_TEXT_LENGTH:
        raise _text_too_long(len(req.text))

    voice = resolve_voice(req.voice)
    speed = clamp_speed(req.speed if req.speed is not None else 1.0)
    emphasis = "strong" if req.emphasis == "strong" else "moderate"
    processed = process_text_for_learning(req.text, emphasis)
    # Pauses and emphasis markup lengthen the text; the provider limit applies to what is sent
    if len(processed) > MAX_TEXT_LENGTH:
        raise _text_too_long(len(processed))

    logger.info("[TTS] Received request: voice=%s speed=%s emphasis=%s text_len=%d",
                voice, speed, emphasis, len(req.text))

    try:
        audio = await _synthesize_speech(processed, voice, speed)
    except Exception as e:
        logger.exception("[TTS] Error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate speech: {e}",
        )

    return StreamingResponse(
        audio,
        media_type="audio/mpeg",
        headers={
            "Cache-Control": "no-store, max-age=0",
            "X-Voice-Used": voice,
            "X-Speed-Used": str(speed),
            "X-Emphasis-Used": emphasis,
        },
    )
