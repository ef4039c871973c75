"""
Chat Relay Router

Forwards one tutor turn to the chat provider with a freshly built system prompt.
"""
import datetime as dt
import logging

from fastapi import APIRouter, HTTPException, status

from hablaya.config import settings
from hablaya.schemas.chat import ChatMetadata, ChatRequest, ChatResponse
from hablaya.services.level_detector import detect_level_from_messages
from hablaya.services.openai_chat import chat_service
from hablaya.services.prompt_builder import (
    DEFAULT_LEVEL,
    LEVEL_PROFILES,
    build_default_prompt,
    build_system_prompt,
    get_level_profile,
    normalize_focus,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def _build_system_message(req: ChatRequest, level_name: str, now: dt.datetime) -> dict:
    if settings.prompt_style == "simple":
        content = build_default_prompt(now)
    else:
        content = build_system_prompt(
            level=get_level_profile(level_name),
            focus=req.learningFocus,
            is_voice_input=req.isVoiceInput,
            session_data=req.sessionData,
            now=now,
        )
    return {"role": "system", "content": content}


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest):
    """
    Get the tutor's reply to the conversation so far.

    The declared `userLevel` wins when it is a known level; otherwise the level
    is estimated from the last user message, falling back to intermediate.

    Returns:
        {"message": str, "metadata": {model, level, detectedLevel, focus, timestamp, usage}}

    Raises:
        HTTPException (400): messages missing or not a list
        HTTPException (500): provider error or empty reply
    """
    if req.messages is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid messages array")

    detected = detect_level_from_messages(req.messages)
    if req.userLevel in LEVEL_PROFILES:
        level = req.userLevel
    else:
        level = detected or DEFAULT_LEVEL
    focus = normalize_focus(req.learningFocus)

    now = dt.datetime.now()
    conversation = [_build_system_message(req, level, now)]
    conversation += [m.to_provider() for m in req.messages]

    try:
        completion = await chat_service.complete(conversation, model=req.model)
    except Exception as e:
        logger.exception("[Chat] Error in chat relay: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while processing your request: {e}",
        )

    return ChatResponse(
        message=completion.content,
        metadata=ChatMetadata(
            model=completion.model,
            level=level,
            detectedLevel=detected,
            focus=focus,
            timestamp=dt.datetime.now(dt.timezone.utc).isoformat(),
            usage=completion.usage,
        ),
    )
