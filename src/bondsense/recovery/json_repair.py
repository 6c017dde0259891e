"""
Deterministic textual repair of near-JSON model output.

Models asked for "only JSON" still wrap it in prose or code fences, leave
trailing commas and forget to quote keys. repair_json_text applies a fixed
sequence of regex rewrites that fixes the common cases. It is best-effort:
a string value containing `, word:` can be damaged, which is acceptable
because repair only runs after strict decoding already failed.

The sequence is idempotent: repair_json_text(repair_json_text(t)) equals
repair_json_text(t).
"""

import re
from typing import Callable


_LEADING_NOISE = re.compile(r"^[^{]*")
_CODE_FENCE = re.compile(r"```[A-Za-z]*\s*")
_TRAILING_COMMA = re.compile(r",(?:\s*,)*(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_]\w*)\s*:")
_BARE_VALUE = re.compile(r":\s*([^\",\[\]{}]+)(\s*[,}])")
_WHITESPACE = re.compile(r"\s+")

_NUMBER = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?")
_JSON_LITERALS = frozenset({"true", "false", "null"})


def _quote_bare_value(match: re.Match) -> str:
    value = match.group(1).strip()
    if not value or value in _JSON_LITERALS or _NUMBER.fullmatch(value):
        return match.group(0)
    return f': "{value}"{match.group(2)}'


def strip_leading_noise(text: str) -> str:
    return _LEADING_NOISE.sub("", text, count=1)


def strip_trailing_noise(text: str) -> str:
    # Everything after the last closing brace; empty when there is none
    return text[: text.rfind("}") + 1]


def remove_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text)


def remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA.sub(r"\1", text)


def quote_bare_keys(text: str) -> str:
    return _BARE_KEY.sub(r'\1"\2":', text)


def quote_bare_values(text: str) -> str:
    """Quote unquoted scalar values; numbers and true/false/null stay as they are."""
    return _BARE_VALUE.sub(_quote_bare_value, text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


# Order matters
REPAIR_STEPS: tuple[Callable[[str], str], ...] = (
    strip_leading_noise,
    strip_trailing_noise,
    remove_code_fences,
    remove_trailing_commas,
    quote_bare_keys,
    quote_bare_values,
    collapse_whitespace,
)


def repair_json_text(text: str) -> str:
    """
    Apply every repair step in order.

    Args:
        text: Raw model output

    Returns:
        Rewritten text; may still not be valid JSON

    Examples:
        >>> repair_json_text('Sure! ```json\\n{name: "A", tags: ["x",],}\\n```')
        '{"name": "A", "tags": ["x"]}'
    """
    for step in REPAIR_STEPS:
        text = step(text)
    return text


def has_object_framing(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")
