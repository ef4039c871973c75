"""
OpenAI Chat Completion Service

Sends the tutor conversation (system prompt + recent history) to the
chat completions endpoint and returns the assistant reply.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .provider_base import OpenAIService, UpstreamError, extract_error_message
from ..config import settings

logger = logging.getLogger(__name__)


@dataclass
class ChatCompletion:
    """Assistant reply plus the bits of provider metadata we surface"""
    content: str
    model: str
    usage: Dict = field(default_factory=dict)


class OpenAIChatService(OpenAIService):
    """OpenAI Chat Completions API Service"""

    @property
    def name(self) -> str:
        return "OpenAI Chat Completions"

    def sampling_params(self) -> Dict:
        """Sampling parameters are fixed by configuration"""
        return {
            "temperature": settings.chat_temperature,
            "max_tokens": settings.chat_max_tokens,
            "frequency_penalty": settings.chat_frequency_penalty,
            "presence_penalty": settings.chat_presence_penalty,
            "top_p": settings.chat_top_p,
        }

    async def complete(self, messages: List[Dict], model: Optional[str] = None) -> ChatCompletion:
        """
        Request one completion.

        Parameters:
            messages: [{"role": ..., "content": ...}, ...] with the system prompt first
            model: Model identifier (defaults to settings.chat_model)

        Raises:
            RuntimeError: API key missing
            UpstreamError: non-success status or empty assistant content
        """
        self._require_key()

        model = model or settings.chat_model
        headers = {**self._auth_headers(), "Content-Type": "application/json"}
        payload = {"model": model, "messages": messages, **self.sampling_params()}

        logger.info("[Chat] Calling %s with %d messages", model, len(messages))
        async with self._client(timeout=60) as client:
            resp = await client.post(settings.chat_api_url, headers=headers, json=payload)

        if resp.is_error:
            message = extract_error_message(resp, f"OpenAI API error: {resp.status_code}")
            logger.error("[Chat] Upstream error %s: %s", resp.status_code, message)
            raise UpstreamError(message, status_code=resp.status_code)

        result = resp.json()
        choices = result.get("choices") or []
        content = None
        if choices:
            content = (choices[0].get("message") or {}).get("content")
        if not content:
            raise UpstreamError("No response from AI")

        return ChatCompletion(
            content=content,
            model=result.get("model") or model,
            usage=result.get("usage") or {},
        )


# Global singleton
chat_service = OpenAIChatService()
