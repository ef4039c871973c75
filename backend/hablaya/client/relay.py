"""
Relay HTTP Client

Talks to the HablaYa! backend (/api/chat, /api/speak, /api/transcribe).
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class RelayError(RuntimeError):
    """Backend answered with a non-success status"""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"Relay request failed with status {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


@dataclass
class TranscriptionResult:
    text: str
    language: str = "en"
    confidence: float = 0.8
    pronunciationAnalysis: Dict[str, Any] = field(default_factory=dict)
    learningSuggestions: List[str] = field(default_factory=list)
    timestamp: Optional[str] = None


@dataclass
class ChatReply:
    message: str
    metadata: Dict[str, Any] = field(default_factory=dict)


def _detail(resp: httpx.Response) -> Any:
    try:
        return resp.json().get("detail")
    except (ValueError, AttributeError):
        return resp.text


class RelayClient:
    """
    Thin async client for the three relays.

    Pass an existing httpx.AsyncClient (e.g. one bound to ASGITransport in
    tests); otherwise one is created for base_url and closed by aclose().
    """

    def __init__(self, base_url: str = "http://localhost:8000", client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=120)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    def _check(self, resp: httpx.Response) -> None:
        if resp.is_error:
            detail = _detail(resp)
            logger.warning("[relay] %s %s -> %s %s", resp.request.method, resp.request.url.path,
                           resp.status_code, detail)
            raise RelayError(resp.status_code, detail)

    def _json(self, resp: httpx.Response) -> Dict[str, Any]:
        """Success body as a JSON object; anything else (e.g. a proxy HTML page) is a RelayError"""
        try:
            body = resp.json()
        except ValueError:
            raise RelayError(resp.status_code, f"Invalid response body ({resp.headers.get('content-type', 'unknown')})")
        if not isinstance(body, dict):
            raise RelayError(resp.status_code, "Invalid response body (not a JSON object)")
        return body

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        model: Optional[str] = None,
        user_level: Optional[str] = None,
        learning_focus: Optional[str] = None,
        session_data: Optional[Dict[str, Any]] = None,
        is_voice_input: bool = False,
    ) -> ChatReply:
        body: Dict[str, Any] = {"messages": messages, "isVoiceInput": is_voice_input}
        if model:
            body["model"] = model
        if user_level:
            body["userLevel"] = user_level
        if learning_focus:
            body["learningFocus"] = learning_focus
        if session_data is not None:
            body["sessionData"] = session_data

        resp = await self.client.post("/api/chat", json=body)
        self._check(resp)
        data = self._json(resp)
        message = data.get("message")
        if not isinstance(message, str):
            raise RelayError(resp.status_code, "Invalid response body (no message)")
        return ChatReply(message=message, metadata=data.get("metadata") or {})

    async def speak(self, text: str, voice: Optional[str] = None, speed: float = 1.0,
                    emphasis: str = "moderate") -> bytes:
        resp = await self.client.post(
            "/api/speak",
            json={"text": text, "voice": voice, "speed": speed, "emphasis": emphasis},
        )
        self._check(resp)
        return resp.content

    async def transcribe(self, audio: bytes, language: str = "en", prompt: Optional[str] = None,
                         filename: str = "recording.webm", content_type: str = "audio/webm") -> TranscriptionResult:
        data = {"language": language}
        if prompt:
            data["prompt"] = prompt
        resp = await self.client.post(
            "/api/transcribe",
            data=data,
            files={"file": (filename, audio, content_type)},
        )
        self._check(resp)
        body = self._json(resp)
        return TranscriptionResult(
            text=body.get("text") or "",
            language=body.get("language", language),
            confidence=body.get("confidence", 0.8),
            pronunciationAnalysis=body.get("pronunciationAnalysis") or {},
            learningSuggestions=body.get("learningSuggestions") or [],
            timestamp=body.get("timestamp"),
        )
