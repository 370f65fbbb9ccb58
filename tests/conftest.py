from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from assistant.providers import GeminiAdapter, OpenAIAdapter
from config.settings import Settings


PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUg=="


def gemini_reply(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def openai_reply(text: str) -> Dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": text}}]}


class RecordingTransport(httpx.MockTransport):
    """Answers every request with a canned response and keeps what was sent."""

    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = status_code
        self.body = body if body is not None else gemini_reply("")
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def gemini(transport: RecordingTransport) -> GeminiAdapter:
    return GeminiAdapter(
        api_key="test-key",
        model="gemini-2.0-flash",
        base_url="https://gemini.test/v1beta",
        transport=transport,
    )


@pytest.fixture
def openai(transport: RecordingTransport) -> OpenAIAdapter:
    return OpenAIAdapter(
        api_key="sk-test",
        model="gpt-4o-mini",
        base_url="https://openai.test/v1/",
        transport=transport,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(app_env="test", gemini_api_key="test-key", static_dir=str(tmp_path / "missing"))


@pytest.fixture
def make_client(settings: Settings) -> Callable[..., TestClient]:
    def factory(provider, **overrides) -> TestClient:
        app = create_app(settings.model_copy(update=overrides), provider=provider)
        return TestClient(app)

    return factory


@pytest.fixture
def client(make_client, gemini) -> TestClient:
    return make_client(gemini)
