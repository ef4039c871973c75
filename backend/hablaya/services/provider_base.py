"""
Provider Service Base

Shared plumbing for the OpenAI adapters (chat / speech / transcription / probe):
API key handling, HTTP client construction and provider error extraction.
"""
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from ..config import settings


class UpstreamError(RuntimeError):
    """Provider answered with a non-success status or an unusable body"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_error_message(resp: httpx.Response, fallback: str) -> str:
    """
    Pull `error.message` out of an OpenAI error body.

    Falls back to `fallback` when the body is not JSON or has no message.
    """
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return fallback


class OpenAIService(ABC):
    """Base class for services talking to the OpenAI REST API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        # Tests swap in httpx.MockTransport here
        self.transport = transport

    @property
    def api_key(self) -> Optional[str]:
        """Explicit key, else whatever settings hold at call time"""
        return self._api_key if self._api_key is not None else settings.openai_api_key

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name (e.g., "OpenAI Chat Completions")"""
        pass

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    def _require_key(self) -> None:
        if not self.is_available():
            raise RuntimeError("OPENAI_API_KEY not set")

    def _auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _client(self, timeout: Optional[float]) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=timeout, transport=self.transport)
