# hablaya/schemas/chat.py
"""
Pydantic schemas for the chat relay.
Defines request/response models for a single tutor turn.
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Literal, Optional

__all__ = ["ChatMessage", "ChatRequest", "ChatMetadata", "ChatResponse"]

class ChatMessage(BaseModel):
    """
    One conversation message as sent by the client.
    Extra client-side fields (e.g. ids) are ignored; only role/content reach the provider.
    """
    model_config = ConfigDict(extra="ignore")

    role: Literal["system", "user", "assistant"]  # Message author
    content: str  # Message text
    timestamp: Optional[str] = None  # ISO timestamp set by the client
    metadata: Optional[Dict[str, Any]] = None  # e.g. {"isVoiceInput": true, "mode": "voice"}

    def to_provider(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

class ChatRequest(BaseModel):
    """
    Request model for POST /api/chat.
    `messages` is checked by the route so a missing list gets a specific error.
    """
    messages: Optional[List[ChatMessage]] = None  # Recent conversation, oldest first
    model: Optional[str] = None  # Chat model override
    userLevel: Optional[str] = None  # Declared proficiency level
    learningFocus: Optional[str] = None  # conversation / pronunciation / grammar / ...
    sessionData: Optional[Dict[str, Any]] = None  # Free-form session metadata
    isVoiceInput: bool = False  # Last user message was spoken

class ChatMetadata(BaseModel):
    model: str  # Model that produced the reply
    level: str  # Level the prompt was pitched at
    detectedLevel: Optional[str] = None  # Level estimated from the last user message
    focus: str  # Effective learning focus
    timestamp: str  # ISO timestamp of the reply
    usage: Dict[str, Any] = {}  # Provider token usage

class ChatResponse(BaseModel):
    message: str  # Assistant reply
    metadata: Optional[ChatMetadata] = None
