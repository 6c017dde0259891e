"""
Output-side models: locally computed statistics, required-field contracts
and batch progress state.

Shaped Results themselves stay plain dicts: their schema is owned by the
prompt templates and only the required fields are enforced.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from bondsense.models.enums import ProgressStatus


CHAT_REQUIRED_FIELDS: tuple[str, ...] = ("participants", "sentiments")
OVERALL_REQUIRED_FIELDS: tuple[str, ...] = ("relationship_type", "compatibility_score")

# Stand-in names when a conversation has fewer than two senders
PLACEHOLDER_PARTICIPANTS: tuple[str, str] = ("Participant 1", "Participant 2")


class ParticipantStats(BaseModel):
    """Message volume for one participant."""

    message_count: int = Field(default=0, ge=0)
    avg_length: float = Field(default=0.0, ge=0.0, description="Mean content length (unrounded)")


class ConversationStats(BaseModel):
    """Statistics for one conversation; drives prompts and fallbacks."""

    participants: list[str] = Field(..., description="First two distinct senders, in order")
    total_messages: int = Field(..., ge=0)
    avg_message_length: int = Field(..., ge=0)
    duration_days: int = Field(..., ge=0)
    per_participant: dict[str, ParticipantStats] = Field(default_factory=dict)

    def for_participant(self, name: str) -> ParticipantStats:
        return self.per_participant.get(name, ParticipantStats())


class MessageStats(BaseModel):
    """`message_stats` block appended to a chat Shaped Result."""

    total_messages: int
    avg_message_length: int
    conversation_duration: str


class TotalStats(BaseModel):
    """`total_stats` block appended to an overall Shaped Result."""

    total_messages: int
    total_participants: int
    conversation_span: str
    avg_daily_messages: int


class OverallStats(BaseModel):
    """Statistics across every uploaded conversation."""

    participants: list[str] = Field(..., description="All distinct senders, in order")
    chat_count: int = Field(..., ge=0)
    total_messages: int = Field(..., ge=0)
    span_days: int = Field(..., ge=0)
    avg_daily_messages: int = Field(..., ge=0)


class AnalysisProgress(BaseModel):
    """Snapshot of batch progress, handed to the caller's progress callback."""

    current_file: int = Field(..., ge=0)
    total_files: int = Field(..., ge=0)
    current_file_name: str = ""
    status: ProgressStatus = ProgressStatus.ANALYZING


class BatchAnalysisResult(BaseModel):
    """Per-file results plus the best-effort overall analysis."""

    results: list[dict[str, Any]] = Field(default_factory=list)
    overall: Optional[dict[str, Any]] = None
    overall_error: Optional[str] = Field(
        default=None,
        description="Why the overall analysis is missing, if it is",
    )
    progress: list[AnalysisProgress] = Field(default_factory=list)


def pad_participants(participants: list[str]) -> tuple[str, str]:
    """
    First two participants, padded with placeholders.

    A placeholder already used as a real name is skipped, so the two
    returned names always differ.

    Examples:
        >>> pad_participants(["Alex"])
        ('Alex', 'Participant 2')
        >>> pad_participants(["Participant 2"])
        ('Participant 2', 'Participant 1')
    """
    names = list(participants[:2])
    for placeholder in PLACEHOLDER_PARTICIPANTS:
        if len(names) == 2:
            break
        if placeholder not in names:
            names.append(placeholder)
    return names[0], names[1]
