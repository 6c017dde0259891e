"""
API-specific request and response models for FastAPI endpoints.

Request bodies use the camelCase keys the dashboard sends (apiKey, fileName,
allChats, individualAnalyses); snake_case names are accepted as well. The
caller's key is held as a SecretStr and never echoed back.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from bondsense.models.chat_models import ChatFile, ChatMessage


class ApiKeyMixin(BaseModel):
    """Common `apiKey` field."""

    model_config = ConfigDict(populate_by_name=True)

    api_key: SecretStr = Field(
        alias="apiKey",
        description="Caller's Gemini API key, used for this request only",
    )

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        key = value.get_secret_value().strip()
        if not key:
            raise ValueError("API key is required")
        return SecretStr(key)


class AnalyzeChatRequest(ApiKeyMixin):
    """Request for per-conversation analysis."""

    messages: list[ChatMessage] = Field(
        min_length=1,
        description="Conversation messages in file order",
    )
    file_name: Optional[str] = Field(
        default=None,
        alias="fileName",
        description="Source file name, for logging",
    )


class AnalyzeOverallRequest(ApiKeyMixin):
    """Request for the aggregate relationship analysis."""

    all_chats: list[ChatFile] = Field(
        alias="allChats",
        min_length=1,
        description="Every uploaded conversation",
    )
    individual_analyses: Optional[list[dict[str, Any]]] = Field(
        default=None,
        alias="individualAnalyses",
        description="Per-file results already produced (accepted, not used in the prompt)",
    )


class AnalyzeBatchRequest(ApiKeyMixin):
    """Request for the full upload flow: every file, then the aggregate."""

    files: list[ChatFile] = Field(
        min_length=1,
        max_length=100,
        description="Uploaded chat exports, any order",
    )


class ApiKeyTestRequest(ApiKeyMixin):
    """Request for the API key check."""
    pass


class ApiKeyTestResponse(BaseModel):
    """Response for the API key check."""

    message: str = Field(examples=["API key is valid and working correctly!"])
    success: bool


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded"],
    )
    version: str = Field(description="Service version", examples=["0.1.0"])
    model: str = Field(description="Configured Gemini model")
    checks: dict[str, str] = Field(
        description="Local readiness checks",
        examples=[{"prompt_templates": "ok"}],
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Health check timestamp (UTC)",
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(description="Human-readable error message")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp (UTC)",
    )
