"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without calling Gemini.
"""

import json
from unittest.mock import AsyncMock

import pytest

from bondsense.llm.base_client import BaseLLMClient
from bondsense.llm.prompt_builder import PromptBuilder
from bondsense.models.llm_models import LLMGenerationResponse
from bondsense.retry.engine import RetryEngine
from bondsense.retry.policy import RetryPolicy


def make_llm_response(content: str) -> LLMGenerationResponse:
    return LLMGenerationResponse(
        content=content,
        model_version="gemini-1.5-flash-002",
        finish_reason="STOP",
        usage_tokens=2100,
        prompt_tokens=1200,
        completion_tokens=900,
        latency_ms=850,
    )


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays (seconds)."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def fast_retry_engine(sleep_recorder) -> RetryEngine:
    """Retry engine with the default policy, zero jitter and no real sleeping."""
    return RetryEngine(RetryPolicy(), sleep=sleep_recorder, jitter=lambda _max: 0.0)


@pytest.fixture
def prompt_builder(test_settings) -> PromptBuilder:
    return PromptBuilder.from_settings(test_settings)


@pytest.fixture
def chat_analysis_json() -> str:
    """Well-formed chat analysis output."""
    return json.dumps({
        "participants": ["Alex", "Sam"],
        "sentiments": {"Alex": "positive", "Sam": "neutral"},
        "tones": {"Alex": ["warm", "playful"], "Sam": ["concise", "direct"]},
        "emotional_shift": "Warms up over the conversation.",
        "relationship_summary": "Comfortable friends.",
    })


@pytest.fixture
def overall_analysis_json() -> str:
    """Well-formed overall analysis output."""
    return json.dumps({
        "relationship_type": "friendship",
        "compatibility_score": 82,
        "overall_sentiment": "positive",
    })


@pytest.fixture
def mock_llm_client(chat_analysis_json) -> AsyncMock:
    """Mock LLM client answering every request with a valid chat analysis."""
    mock = AsyncMock(spec=BaseLLMClient)
    mock.generate = AsyncMock(return_value=make_llm_response(chat_analysis_json))
    return mock


@pytest.fixture
def llm_response_factory():
    """Factory fixture: LLMGenerationResponse carrying the given text."""
    return make_llm_response
