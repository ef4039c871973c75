import json
from typing import Callable, List

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hablaya.config import settings
from hablaya.main import app
from hablaya.services.openai_chat import chat_service
from hablaya.services.openai_probe import probe_service
from hablaya.services.openai_speech import speech_service
from hablaya.services.openai_transcribe import whisper_service


TEST_API_KEY = "sk-test-0123456789"


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    """
    Every test starts with a configured key; tests that need it missing
    set settings.openai_api_key to None themselves.
    """
    monkeypatch.setattr(settings, "openai_api_key", TEST_API_KEY)
    return TEST_API_KEY


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


class FakeOpenAI:
    """
    Records provider requests and answers them with a handler per URL suffix.
    Installed on all service singletons through httpx.MockTransport.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, path_suffix: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path_suffix] = handler

    def reply(self, path_suffix: str, status_code: int = 200, **kwargs) -> None:
        self.on(path_suffix, lambda request: httpx.Response(status_code, **kwargs))

    def calls_to(self, path_suffix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(path_suffix)]

    def json_body(self, path_suffix: str, index: int = -1) -> dict:
        return json.loads(self.calls_to(path_suffix)[index].read())

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for suffix, handler in self.routes.items():
            if request.url.path.endswith(suffix):
                return handler(request)
        return httpx.Response(404, json={"error": {"message": f"unexpected call to {request.url.path}"}})


@pytest.fixture
def fake_openai(monkeypatch):
    fake = FakeOpenAI()
    transport = httpx.MockTransport(fake.handle)
    for service in (chat_service, speech_service, whisper_service, probe_service):
        monkeypatch.setattr(service, "transport", transport)
    return fake


@pytest.fixture
def make_completion():
    """Factory for chat completions response bodies"""

    def _completion(content, model="gpt-4-turbo", usage=None) -> dict:
        return {
            "id": "chatcmpl-test",
            "model": model,
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
            "usage": usage or {"prompt_tokens": 120, "completion_tokens": 20, "total_tokens": 140},
        }

    return _completion
