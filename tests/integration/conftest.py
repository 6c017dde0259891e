"""Integration test fixtures.

The FastAPI app runs for real; only the HTTP hop to Gemini is replaced by an
httpx.MockTransport serving scripted responses.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from bondsense.api.dependencies import get_llm_client, get_retry_engine
from bondsense.llm.gemini_client import GeminiClient
from bondsense.main import app
from bondsense.retry.engine import RetryEngine
from bondsense.retry.policy import RetryPolicy


class GeminiStub:
    """Scripted generateContent endpoint.

    Responses are served in order; the last one repeats once the script runs out.
    """

    def __init__(self):
        self.script: list[httpx.Response] = []
        self.requests: list[httpx.Request] = []

    def reply_text(self, text: str, times: int = 1) -> "GeminiStub":
        body = {
            "candidates": [{"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": "STOP"}],
            "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 5, "totalTokenCount": 15},
            "modelVersion": "gemini-1.5-flash-002",
        }
        return self._add(httpx.Response(200, json=body), times)

    def reply_json(self, payload: dict, times: int = 1) -> "GeminiStub":
        return self.reply_text(json.dumps(payload), times)

    def reply_error(self, code: int, status: str, message: str, reason: str | None = None, times: int = 1) -> "GeminiStub":
        error = {"code": code, "message": message, "status": status}
        if reason:
            error["details"] = [{"reason": reason}]
        return self._add(httpx.Response(code, json={"error": error}), times)

    def _add(self, response: httpx.Response, times: int) -> "GeminiStub":
        self.script.extend([response] * times)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        original = self.script[index]
        return httpx.Response(original.status_code, content=original.content, headers=original.headers)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def gemini_stub() -> GeminiStub:
    return GeminiStub()


@pytest.fixture
def client(gemini_stub):
    """TestClient with Gemini stubbed and retry backoff disabled."""
    gemini_client = GeminiClient(
        base_url="https://gemini.test",
        timeout=5,
        transport=httpx.MockTransport(gemini_stub.handler),
    )

    async def no_sleep(_seconds: float) -> None:
        return None

    retry_engine = RetryEngine(RetryPolicy(), sleep=no_sleep, jitter=lambda _max: 0.0)

    app.dependency_overrides[get_llm_client] = lambda: gemini_client
    app.dependency_overrides[get_retry_engine] = lambda: retry_engine
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
