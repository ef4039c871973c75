"""
Services Module

Provides interfaces for the external provider and the text heuristics:
- Chat: OpenAI Chat Completions
- TTS (Text-to-Speech): OpenAI audio/speech
- ASR (Automatic Speech Recognition): OpenAI Whisper API
- Heuristics: proficiency level detection, pronunciation feedback
- Prompts: tutor system prompt builder
"""

from .provider_base import OpenAIService, UpstreamError

# Provider adapters
from .openai_chat import ChatCompletion, chat_service
from .openai_speech import (
    MAX_TEXT_LENGTH,
    VALID_VOICES,
    clamp_speed,
    process_text_for_learning,
    resolve_voice,
    speech_service,
)
from .openai_transcribe import WhisperTranscript, whisper_service
from .openai_probe import probe_service

# Heuristics
from .level_detector import detect_level, detect_level_from_messages
from .pronunciation import analyze_pronunciation, generate_learning_suggestions

# Prompts
from .prompt_builder import build_default_prompt, build_system_prompt, get_level_profile

__all__ = [
    # Base
    "OpenAIService",
    "UpstreamError",
    # Chat
    "ChatCompletion",
    "chat_service",
    # TTS
    "MAX_TEXT_LENGTH",
    "VALID_VOICES",
    "clamp_speed",
    "process_text_for_learning",
    "resolve_voice",
    "speech_service",
    # ASR
    "WhisperTranscript",
    "whisper_service",
    # Health
    "probe_service",
    # Heuristics
    "detect_level",
    "detect_level_from_messages",
    "analyze_pronunciation",
    "generate_learning_suggestions",
    # Prompts
    "build_default_prompt",
    "build_system_prompt",
    "get_level_profile",
]
