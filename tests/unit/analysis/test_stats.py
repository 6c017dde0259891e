"""Unit tests for locally computed conversation statistics."""

import pytest

from bondsense.analysis.stats import (
    compute_conversation_stats,
    compute_overall_stats,
    distinct_senders,
    duration_label,
    extract_participants,
    message_stats,
    round_half_up,
    span_days,
    total_stats,
)
from bondsense.models.chat_models import ChatFile


@pytest.mark.parametrize("value, expected", [(2.5, 3), (3.5, 4), (2.49, 2), (0.0, 0), (-0.5, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_distinct_senders_keep_first_appearance(create_messages):
    messages = create_messages([("Sam", "a", 0), ("Alex", "b", 0), ("Sam", "c", 0), ("Jo", "d", 0)])

    assert distinct_senders(messages) == ["Sam", "Alex", "Jo"]
    assert extract_participants(messages) == ["Sam", "Alex"]


def test_span_days_rounds_half_up(create_messages):
    half_day = create_messages([("A", "x", 0)]) + create_messages([("B", "y", 0)], start_ms=1_700_000_000_000 + 43_200_000)

    assert span_days(half_day) == 1
    assert span_days([]) == 0


def test_duration_label():
    assert duration_label(0) == "Same day"
    assert duration_label(1) == "1 days"


def test_conversation_stats(create_messages):
    messages = create_messages([
        ("Alex", "abcd", 0),
        ("Sam", "ab", 0),
        ("Alex", "abcdefgh", 2),
        ("Jo", "a", 2),
    ])

    stats = compute_conversation_stats(messages)

    assert stats.participants == ["Alex", "Sam"]
    assert stats.total_messages == 4
    # (4 + 2 + 8 + 1) / 4 = 3.75
    assert stats.avg_message_length == 4
    assert stats.duration_days == 2
    assert stats.for_participant("Alex").message_count == 2
    assert stats.for_participant("Alex").avg_length == 6.0
    assert stats.for_participant("Sam").avg_length == 2.0
    assert stats.for_participant("Jo").message_count == 0


def test_conversation_stats_empty():
    stats = compute_conversation_stats([])

    assert stats.participants == []
    assert stats.total_messages == 0
    assert stats.avg_message_length == 0
    assert stats.duration_days == 0


def test_message_stats_block(create_messages):
    stats = compute_conversation_stats(create_messages([("A", "hey", 0), ("B", "hello", 0)]))

    assert message_stats(stats).model_dump() == {
        "total_messages": 2,
        "avg_message_length": 4,
        "conversation_duration": "Same day",
    }


def test_overall_stats(sample_chat_files):
    stats = compute_overall_stats(sample_chat_files)

    assert stats.participants == ["Sam", "Alex"]
    assert stats.chat_count == 2
    assert stats.total_messages == 4
    assert stats.span_days == 5
    assert stats.avg_daily_messages == 2


def test_overall_stats_three_participants(create_messages):
    chats = [
        ChatFile(name="message_1.json", data=create_messages([("A", "x", 0), ("B", "y", 0)])),
        ChatFile(name="message_2.json", data=create_messages([("C", "z", 1)])),
        ChatFile(name="message_3.json", data=[]),
    ]

    stats = compute_overall_stats(chats)

    assert stats.participants == ["A", "B", "C"]
    # 3 messages / 3 files = 1
    assert stats.avg_daily_messages == 1
    assert total_stats(stats).total_participants == 3
