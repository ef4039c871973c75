# hablaya/schemas/transcription.py
"""
Pydantic schemas for the transcription relay.
"""
from pydantic import BaseModel
from typing import List

__all__ = ["PronunciationAnalysis", "TranscriptionOut"]

class PronunciationAnalysis(BaseModel):
    clarity: str  # Always "good" for now (no audio analysis)
    pace: str  # slow / moderate / fast
    suggestions: List[str]

class TranscriptionOut(BaseModel):
    """
    Response model for POST /api/transcribe.
    """
    text: str  # Transcript
    language: str  # Language hint used for the request
    confidence: float  # Provider confidence, 0.8 when the provider omits it (not calibrated)
    pronunciationAnalysis: PronunciationAnalysis
    learningSuggestions: List[str]
    timestamp: str  # ISO timestamp
