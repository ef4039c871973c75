# hablaya/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "HablaYa! English Tutor API"
    env: str = os.getenv("ENV", "dev")
    runtime: str = os.getenv("RUNTIME", "uvicorn")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # OpenAI API (chat, speech and transcription share one key)
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_api_base: str = os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1")

    # Chat completion settings (fixed per deployment, never taken from the request)
    chat_model: str = os.getenv("CHAT_MODEL", "gpt-4-turbo")
    chat_temperature: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
    chat_max_tokens: int = int(os.getenv("CHAT_MAX_TOKENS", "150"))
    chat_frequency_penalty: float = float(os.getenv("CHAT_FREQUENCY_PENALTY", "0.5"))
    chat_presence_penalty: float = float(os.getenv("CHAT_PRESENCE_PENALTY", "0.5"))
    chat_top_p: float = float(os.getenv("CHAT_TOP_P", "1.0"))
    # "adaptive" = level/focus aware prompt, "simple" = fixed tutor prompt
    prompt_style: str = os.getenv("PROMPT_STYLE", "adaptive")

    # Text-to-speech settings
    tts_model: str = os.getenv("TTS_MODEL", "tts-1-hd")
    default_voice: str = os.getenv("DEFAULT_VOICE", "nova")

    # Whisper settings
    whisper_model: str = os.getenv("WHISPER_MODEL", "whisper-1")

    # Client session defaults
    history_limit: int = int(os.getenv("HISTORY_LIMIT", "10"))

    @property
    def chat_api_url(self) -> str:
        return f"{self.openai_api_base}/chat/completions"

    @property
    def speech_api_url(self) -> str:
        return f"{self.openai_api_base}/audio/speech"

    @property
    def whisper_api_url(self) -> str:
        return f"{self.openai_api_base}/audio/transcriptions"

    @property
    def models_api_url(self) -> str:
        return f"{self.openai_api_base}/models"

settings = Settings()  # Instantiate configuration
