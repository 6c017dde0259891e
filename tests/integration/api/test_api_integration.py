"""
End-to-end tests for the analysis API.

Requests go through routing, validation, the retry engine, the real Gemini
client and response recovery. Only the network hop is stubbed.
"""

import json

import pytest

from bondsense.api.error_handlers import (
    INVALID_KEY_MESSAGE,
    MODEL_NOT_FOUND_MESSAGE,
    RATE_LIMIT_MESSAGE,
    UNAVAILABLE_MESSAGE,
)


pytestmark = pytest.mark.integration

API_KEY = "AIza" + "I" * 35

DAY_MS = 86_400_000
START_MS = 1_700_000_000_000

CHAT_ANALYSIS = {
    "participants": ["Alex", "Sam"],
    "sentiments": {"Alex": "positive", "Sam": "positive"},
    "relationship_summary": "Close friends.",
}

OVERALL_ANALYSIS = {"relationship_type": "friendship", "compatibility_score": 90}


def create_message_payloads(rows: list[tuple[str, str, int]]) -> list[dict]:
    return [
        {"sender_name": sender, "content": content, "timestamp_ms": START_MS + day * DAY_MS + i}
        for i, (sender, content, day) in enumerate(rows)
    ]


def chat_body(**overrides) -> dict:
    body = {
        "apiKey": API_KEY,
        "fileName": "message_1.json",
        "messages": create_message_payloads([
            ("Alex", "Are we still on for Saturday?", 0),
            ("Sam", "Yes! I'll bring snacks", 0),
            ("Alex", "Perfect", 2),
        ]),
    }
    body.update(overrides)
    return body


def chat_files() -> list[dict]:
    return [
        {"name": "message_2.json", "data": create_message_payloads([("Sam", "Home safe", 4)])},
        {"name": "message_1.json", "data": {"messages": create_message_payloads([
            ("Alex", "Hey!", 0),
            ("Sam", "Hi Alex", 0),
        ])}},
    ]


# ============================================================================
# /api/analyze-chat
# ============================================================================


def test_analyze_chat_success(client, gemini_stub):
    gemini_stub.reply_json(CHAT_ANALYSIS)

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 200
    data = response.json()
    assert data["participants"] == ["Alex", "Sam"]
    assert data["sentiments"] == {"Alex": "positive", "Sam": "positive"}
    assert data["message_stats"] == {
        "total_messages": 3,
        "avg_message_length": 19,
        "conversation_duration": "2 days",
    }
    assert gemini_stub.call_count == 1
    assert gemini_stub.requests[0].headers["x-goog-api-key"] == API_KEY
    assert API_KEY not in response.text


def test_analyze_chat_repairs_fenced_output(client, gemini_stub):
    gemini_stub.reply_text('```json\n{participants: ["Alex","Sam"], sentiments: {Alex: "positive"}}\n```')

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 200
    assert response.json()["sentiments"] == {"Alex": "positive"}


def test_analyze_chat_fallback_for_prose(client, gemini_stub):
    gemini_stub.reply_text("I'd be happy to help, but I need more context.")

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 200
    data = response.json()
    assert set(data["sentiments"]) == {"Alex", "Sam"}
    assert data["message_balance"] == {"user1_msg_count": 2, "user2_msg_count": 1}


def test_analyze_chat_recovers_after_unavailable(client, gemini_stub):
    gemini_stub.reply_error(503, "UNAVAILABLE", "The model is overloaded.", times=2).reply_json(CHAT_ANALYSIS)

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 200
    assert gemini_stub.call_count == 3


def test_analyze_chat_unavailable_after_retries(client, gemini_stub):
    gemini_stub.reply_error(503, "UNAVAILABLE", "The model is overloaded.")

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 503
    assert response.json()["error"] == UNAVAILABLE_MESSAGE
    assert gemini_stub.call_count == 4


def test_analyze_chat_rate_limited_after_retries(client, gemini_stub):
    gemini_stub.reply_error(429, "RESOURCE_EXHAUSTED", "Resource has been exhausted.")

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 429
    assert response.json()["error"] == RATE_LIMIT_MESSAGE
    assert gemini_stub.call_count == 4


def test_analyze_chat_invalid_key_not_retried(client, gemini_stub):
    gemini_stub.reply_error(400, "INVALID_ARGUMENT", "API key not valid.", reason="API_KEY_INVALID")

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 401
    assert response.json()["error"] == INVALID_KEY_MESSAGE
    assert gemini_stub.call_count == 1


def test_analyze_chat_model_not_found(client, gemini_stub):
    gemini_stub.reply_error(404, "NOT_FOUND", "models/gemini-1.5-flash is not found for API version v1beta")

    response = client.post("/api/analyze-chat", json=chat_body())

    assert response.status_code == 404
    assert response.json()["error"] == MODEL_NOT_FOUND_MESSAGE
    assert gemini_stub.call_count == 1


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_analyze_chat_requires_key(client, gemini_stub, api_key):
    body = chat_body()
    if api_key is None:
        del body["apiKey"]
    else:
        body["apiKey"] = api_key

    response = client.post("/api/analyze-chat", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == "Gemini API key is required"
    assert gemini_stub.call_count == 0


def test_analyze_chat_rejects_empty_messages(client, gemini_stub):
    response = client.post("/api/analyze-chat", json=chat_body(messages=[]))

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request data"
    assert "timestamp" in response.json()
    assert gemini_stub.call_count == 0


# ============================================================================
# /api/analyze-overall
# ============================================================================


def test_analyze_overall_success(client, gemini_stub):
    gemini_stub.reply_json(OVERALL_ANALYSIS)

    response = client.post(
        "/api/analyze-overall",
        json={"apiKey": API_KEY, "allChats": chat_files(), "individualAnalyses": [CHAT_ANALYSIS]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["compatibility_score"] == 90
    assert data["total_stats"] == {
        "total_messages": 3,
        "total_participants": 2,
        "conversation_span": "4 days",
        "avg_daily_messages": 2,
    }


def test_analyze_overall_only_empty_chats(client, gemini_stub):
    response = client.post(
        "/api/analyze-overall",
        json={"apiKey": API_KEY, "allChats": [{"name": "message_1.json", "data": []}]},
    )

    assert response.status_code == 400
    assert gemini_stub.call_count == 0


# ============================================================================
# /api/analyze-batch
# ============================================================================


def test_analyze_batch_success(client, gemini_stub):
    gemini_stub.reply_json(CHAT_ANALYSIS, times=2).reply_json(OVERALL_ANALYSIS)

    response = client.post("/api/analyze-batch", json={"apiKey": API_KEY, "files": chat_files()})

    assert response.status_code == 200
    data = response.json()
    assert [r["file_name"] for r in data["results"]] == ["message_1.json", "message_2.json"]
    assert data["overall"]["relationship_type"] == "friendship"
    assert data["overall_error"] is None
    assert data["progress"][-1] == {
        "current_file": 2,
        "total_files": 2,
        "current_file_name": "Analysis completed!",
        "status": "completed",
    }
    assert gemini_stub.call_count == 3


def test_analyze_batch_rejects_malformed_key(client, gemini_stub):
    response = client.post("/api/analyze-batch", json={"apiKey": "sk-not-a-gemini-key", "files": chat_files()})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid API key format")
    assert gemini_stub.call_count == 0


def test_analyze_batch_overall_failure_is_not_fatal(client, gemini_stub):
    gemini_stub.reply_json(CHAT_ANALYSIS, times=2).reply_error(503, "UNAVAILABLE", "Overloaded.")

    response = client.post("/api/analyze-batch", json={"apiKey": API_KEY, "files": chat_files()})

    assert response.status_code == 200
    data = response.json()
    assert len(data["results"]) == 2
    assert data["overall"] is None
    assert "All retries exhausted" in data["overall_error"]


# ============================================================================
# /api/test-api-key
# ============================================================================


def test_api_key_check_success(client, gemini_stub):
    gemini_stub.reply_text("API key is working")

    response = client.post("/api/test-api-key", json={"apiKey": API_KEY})

    assert response.status_code == 200
    assert response.json() == {"message": "API key is valid and working correctly!", "success": True}
    request_body = json.loads(gemini_stub.requests[0].content)
    assert request_body["generationConfig"]["maxOutputTokens"] == 100


def test_api_key_check_unexpected_reply(client, gemini_stub):
    gemini_stub.reply_text("Hello!")

    response = client.post("/api/test-api-key", json={"apiKey": API_KEY})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_api_key_check_invalid_key(client, gemini_stub):
    gemini_stub.reply_error(400, "INVALID_ARGUMENT", "API key not valid.", reason="API_KEY_INVALID")

    response = client.post("/api/test-api-key", json={"apiKey": API_KEY})

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.json()["error"] == INVALID_KEY_MESSAGE


def test_api_key_check_does_not_retry(client, gemini_stub):
    gemini_stub.reply_error(503, "UNAVAILABLE", "Overloaded.")

    response = client.post("/api/test-api-key", json={"apiKey": API_KEY})

    assert response.status_code == 503
    assert gemini_stub.call_count == 1


def test_api_key_check_requires_key(client):
    response = client.post("/api/test-api-key", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "Gemini API key is required"


# ============================================================================
# Service Endpoints
# ============================================================================


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"] == {"prompt_templates": "ok"}


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_request_id_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_generated(client):
    response = client.get("/health")

    assert response.headers["X-Request-ID"]
