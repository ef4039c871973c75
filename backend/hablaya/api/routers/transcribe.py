"""
Transcription Relay Router

Sends a recorded answer to Whisper and decorates the transcript with
pronunciation and learning hints.
"""
import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from hablaya.schemas.transcription import PronunciationAnalysis, TranscriptionOut
from hablaya.services.openai_transcribe import DEFAULT_LANGUAGE, DEFAULT_PROMPT, whisper_service
from hablaya.services.pronunciation import analyze_pronunciation, generate_learning_suggestions

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])

# Whisper does not report confidence; this is a placeholder, not a calibrated value
DEFAULT_CONFIDENCE = 0.8


@router.post("/transcribe", response_model=TranscriptionOut)
async def transcribe(
    file: Optional[UploadFile] = File(None),
    language: Optional[str] = Form(None),
    prompt: Optional[str] = Form(None),
):
    """
    Transcribe a learner's recording.

    Args:
        file: Audio blob (webm/ogg/wav/mp3...), required and non-empty
        language: Language hint, defaults to "en"
        prompt: Context hint for Whisper, defaults to a language-learning prompt

    Raises:
        HTTPException (400): No file, or an empty file (checked before calling the provider)
        HTTPException (500): Provider error or empty transcript
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No audio file provided")

    audio = await file.read()
    if not audio:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Audio file is empty")

    language = language or DEFAULT_LANGUAGE
    logger.info("[ASR] Processing audio file: size=%d type=%s name=%s",
                len(audio), file.content_type, file.filename)

    try:
        transcript = await whisper_service.transcribe(
            audio,
            filename=file.filename or "audio.webm",
            content_type=file.content_type or "audio/webm",
            language=language,
            prompt=prompt or DEFAULT_PROMPT,
        )
    except Exception as e:
        logger.exception("[ASR] Transcription error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to transcribe audio: {e}",
        )

    confidence = transcript.confidence if transcript.confidence is not None else DEFAULT_CONFIDENCE
    return TranscriptionOut(
        text=transcript.text,
        language=language,
        confidence=confidence,
        pronunciationAnalysis=PronunciationAnalysis(**analyze_pronunciation(transcript.text)),
        learningSuggestions=generate_learning_suggestions(transcript.text),
        timestamp=dt.datetime.now(dt.timezone.utc).isoformat(),
    )
