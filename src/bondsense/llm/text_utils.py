"""
Text processing utilities for the LLM layer.

Turns chat messages into the plain transcript the prompts embed, and keeps
transcripts within the endpoint's input budget.
"""

from typing import Iterable, Optional

from bondsense.models.chat_models import ChatMessage


CONTINUATION_MARKER = "\n[... conversation continues ...]"


def format_transcript(messages: Iterable[ChatMessage]) -> str:
    """
    Render messages as one `sender: content` line each.

    Examples:
        >>> format_transcript([ChatMessage(sender_name="A", timestamp_ms=0, content="hi")])
        'A: hi'
    """
    return "\n".join(f"{m.sender_name}: {m.content}" for m in messages)


def truncate_transcript(text: str, max_chars: int, marker: Optional[str] = None) -> str:
    """
    Hard-truncate a transcript to max_chars.

    Args:
        text: Transcript text
        max_chars: Maximum characters kept from the transcript
        marker: Appended after the cut when truncation happens

    Returns:
        The original text if it fits, otherwise the first max_chars characters
        followed by the marker (if any).
    """
    if len(text) <= max_chars:
        return text
    truncated = text[:max_chars]
    return truncated + marker if marker else truncated


def count_tokens_approximate(text: str) -> int:
    """
    Rough token estimate (~4 characters per token for chat English).

    Only used for log context; the endpoint reports real counts.
    """
    return max(1, len(text) // 4)
