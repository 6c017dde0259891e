"""
Input models for uploaded chat exports.

A chat export file is either a bare JSON array of messages or an object
wrapping them under "messages". Both shapes normalize to ChatFile.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ChatMessage(BaseModel):
    """A single message from a chat export."""

    model_config = ConfigDict(extra="ignore")

    sender_name: str = Field(..., description="Display name of the sender")
    timestamp_ms: int = Field(..., description="Unix timestamp in milliseconds")
    content: str = Field(default="", description="Message text (empty for media-only messages)")
    is_geoblocked_for_viewer: Optional[bool] = Field(default=None)

    @field_validator("content", mode="before")
    @classmethod
    def _none_content_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ChatFile(BaseModel):
    """One uploaded chat export file."""

    name: str = Field(..., description="Original file name, e.g. message_1.json")
    data: list[ChatMessage] = Field(default_factory=list, description="Messages in file order")

    @model_validator(mode="before")
    @classmethod
    def _unwrap_messages(cls, value: Any) -> Any:
        """Accept `data` as either a message array or {"messages": [...]}."""
        if isinstance(value, dict) and isinstance(value.get("data"), dict):
            value = {**value, "data": value["data"].get("messages") or []}
        return value
