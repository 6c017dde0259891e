"""
Local conversation statistics.

Computed from the uploaded messages, never by the model. They feed the
prompts, the fallback records and the `message_stats` / `total_stats`
blocks attached to every result.
"""

import math
from typing import Iterable, Sequence

from bondsense.models.chat_models import ChatFile, ChatMessage
from bondsense.models.output_models import (
    ConversationStats,
    MessageStats,
    OverallStats,
    ParticipantStats,
    TotalStats,
)


MS_PER_DAY = 1000 * 60 * 60 * 24


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves upward.

    Examples:
        >>> round_half_up(2.5), round_half_up(3.5), round_half_up(-0.5)
        (3, 4, 0)
    """
    return int(math.floor(value + 0.5))


def distinct_senders(messages: Iterable[ChatMessage]) -> list[str]:
    """Distinct sender names in order of first appearance."""
    seen: dict[str, None] = {}
    for message in messages:
        seen.setdefault(message.sender_name, None)
    return list(seen)


def extract_participants(messages: Iterable[ChatMessage]) -> list[str]:
    """First two distinct senders; a conversation is analysed as a pair."""
    return distinct_senders(messages)[:2]


def average_length(messages: Sequence[ChatMessage]) -> float:
    if not messages:
        return 0.0
    return sum(len(m.content) for m in messages) / len(messages)


def span_days(messages: Sequence[ChatMessage]) -> int:
    """Days between the earliest and latest timestamps, rounded half-up."""
    if not messages:
        return 0
    timestamps = [m.timestamp_ms for m in messages]
    return round_half_up((max(timestamps) - min(timestamps)) / MS_PER_DAY)


def duration_label(days: int) -> str:
    """
    Examples:
        >>> duration_label(0), duration_label(12)
        ('Same day', '12 days')
    """
    return f"{days} days" if days > 0 else "Same day"


def compute_conversation_stats(messages: Sequence[ChatMessage]) -> ConversationStats:
    """
    Statistics for one conversation.

    Per-participant figures are kept for the first two participants only.
    """
    participants = extract_participants(messages)
    per_participant = {}
    for name in participants:
        own = [m for m in messages if m.sender_name == name]
        per_participant[name] = ParticipantStats(
            message_count=len(own),
            avg_length=average_length(own),
        )

    return ConversationStats(
        participants=participants,
        total_messages=len(messages),
        avg_message_length=round_half_up(average_length(messages)),
        duration_days=span_days(messages),
        per_participant=per_participant,
    )


def compute_overall_stats(chats: Sequence[ChatFile]) -> OverallStats:
    """Statistics across every conversation; participants are all distinct senders."""
    all_messages = [m for chat in chats for m in chat.data]
    return OverallStats(
        participants=distinct_senders(all_messages),
        chat_count=len(chats),
        total_messages=len(all_messages),
        span_days=span_days(all_messages),
        avg_daily_messages=round_half_up(len(all_messages) / max(len(chats), 1)),
    )


def message_stats(stats: ConversationStats) -> MessageStats:
    return MessageStats(
        total_messages=stats.total_messages,
        avg_message_length=stats.avg_message_length,
        conversation_duration=duration_label(stats.duration_days),
    )


def total_stats(stats: OverallStats) -> TotalStats:
    return TotalStats(
        total_messages=stats.total_messages,
        total_participants=len(stats.participants),
        conversation_span=duration_label(stats.span_days),
        avg_daily_messages=stats.avg_daily_messages,
    )
