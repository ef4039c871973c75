# hablaya/schemas/speech.py
"""
Pydantic schemas for the speech synthesis relay.
"""
from pydantic import BaseModel
from typing import Any, Optional

__all__ = ["SpeakRequest"]

class SpeakRequest(BaseModel):
    """
    Request model for POST /api/speak.
    Text is validated by the route (type, emptiness, length) to report precise errors.
    """
    text: Any = None  # Text to synthesize (string, max 4096 characters)
    voice: Any = None  # alloy / echo / fable / onyx / nova / shimmer
    speed: Optional[float] = None  # Clamped to [0.25, 4.0], 1.0 when absent
    emphasis: Optional[str] = None  # "moderate" (default) or "strong"
