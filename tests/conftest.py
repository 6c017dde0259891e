"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest
from pydantic import SecretStr

from bondsense.config import DEFAULT_PROMPTS_DIR, Settings
from bondsense.models.chat_models import ChatFile, ChatMessage

DAY_MS = 86_400_000

# Format-valid Gemini key (AIza + 35 chars); never sent anywhere
TEST_API_KEY = "AIza" + "T" * 35


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing."""
    return Settings(
        APP_NAME="BondSense (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        GEMINI_BASE_URL="https://gemini.test",
        GEMINI_MODEL="gemini-1.5-flash",
        GEMINI_TIMEOUT=5,
        MAX_RETRIES=3,
        RETRY_BASE_DELAY_MS=2000,
        RETRY_JITTER_MAX_MS=1000,
        PROMPT_TEMPLATES_DIR=str(DEFAULT_PROMPTS_DIR),
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def api_key() -> SecretStr:
    return SecretStr(TEST_API_KEY)


@pytest.fixture
def create_messages():
    """Factory fixture building a conversation from (sender, content, day) tuples.

    Usage:
        def test_something(create_messages):
            messages = create_messages([("Alex", "hi", 0), ("Sam", "hey", 2)])
    """
    def _create(rows: list[tuple[str, str, int]], start_ms: int = 1_700_000_000_000) -> list[ChatMessage]:
        return [
            ChatMessage(sender_name=sender, content=content, timestamp_ms=start_ms + day * DAY_MS + i)
            for i, (sender, content, day) in enumerate(rows)
        ]
    return _create


@pytest.fixture
def sample_messages(create_messages) -> list[ChatMessage]:
    """Two-person conversation over 3 days; Alex writes more and longer messages."""
    return create_messages([
        ("Alex", "Morning! Did you sleep okay after the concert?", 0),
        ("Sam", "Barely, ears still ringing", 0),
        ("Alex", "Same here. Want to grab breakfast and recover together?", 1),
        ("Alex", "There's a new place near the station I've been meaning to try", 1),
        ("Sam", "Sure, 10?", 3),
    ])


@pytest.fixture
def sample_chat_files(create_messages) -> list[ChatFile]:
    """Two chat files, deliberately out of filename order."""
    return [
        ChatFile(name="message_2.json", data=create_messages([
            ("Sam", "See you tomorrow", 5),
            ("Alex", "Can't wait", 5),
        ])),
        ChatFile(name="message_1.json", data=create_messages([
            ("Alex", "Hey, long time!", 0),
            ("Sam", "Hi! How have you been?", 1),
        ])),
    ]
