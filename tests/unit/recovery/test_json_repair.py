"""
Unit tests for the textual repair sequence.
"""

import json

import pytest

from bondsense.recovery.json_repair import (
    REPAIR_STEPS,
    collapse_whitespace,
    has_object_framing,
    quote_bare_keys,
    quote_bare_values,
    remove_code_fences,
    remove_trailing_commas,
    repair_json_text,
    strip_leading_noise,
    strip_trailing_noise,
)


# ============================================================================
# Individual Steps
# ============================================================================


def test_strip_leading_noise():
    assert strip_leading_noise('Here is the analysis: {"a": 1}') == '{"a": 1}'
    assert strip_leading_noise("no braces at all") == ""


def test_strip_trailing_noise():
    assert strip_trailing_noise('{"a": 1}\nHope this helps!') == '{"a": 1}'
    assert strip_trailing_noise("no braces at all") == ""


def test_remove_code_fences():
    assert remove_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}\n'


def test_remove_trailing_commas():
    assert remove_trailing_commas('{"a": [1, 2,], "b": 3,}') == '{"a": [1, 2], "b": 3}'


def test_remove_trailing_commas_drops_whole_run():
    assert remove_trailing_commas('{"a": [1, 2,,]}') == '{"a": [1, 2]}'
    assert remove_trailing_commas('{"a": [1, , ]}') == '{"a": [1 ]}'
    assert remove_trailing_commas("{,,}") == "{}"


def test_quote_bare_keys():
    assert quote_bare_keys('{name: "A", user_2: 3}') == '{"name": "A", "user_2": 3}'


def test_quote_bare_keys_leaves_quoted_keys():
    text = '{"name": "A", "tags": ["x"]}'
    assert quote_bare_keys(text) == text


def test_quote_bare_values():
    assert quote_bare_values('{"mood": happy, "level": High}') == '{"mood": "happy", "level": "High"}'


@pytest.mark.parametrize("literal", ["7", "-3.5", "1e3", "true", "false", "null"])
def test_quote_bare_values_keeps_json_literals(literal):
    text = '{"value": ' + literal + "}"
    assert quote_bare_values(text) == text


def test_collapse_whitespace():
    assert collapse_whitespace('  {\n  "a":\t1\n}  ') == '{ "a": 1 }'


def test_step_order():
    assert REPAIR_STEPS == (
        strip_leading_noise,
        strip_trailing_noise,
        remove_code_fences,
        remove_trailing_commas,
        quote_bare_keys,
        quote_bare_values,
        collapse_whitespace,
    )


# ============================================================================
# Full Sequence
# ============================================================================


def test_fenced_output_with_unquoted_keys_decodes():
    raw = '```json\n{participants: ["A","B"], sentiments: {A: "positive"}}\n```'

    repaired = repair_json_text(raw)

    assert json.loads(repaired) == {
        "participants": ["A", "B"],
        "sentiments": {"A": "positive"},
    }


def test_prose_wrapped_with_trailing_commas():
    raw = 'Sure! ```json\n{name: "A", tags: ["x",],}\n```'
    assert repair_json_text(raw) == '{"name": "A", "tags": ["x"]}'


def test_prose_without_braces_becomes_empty():
    repaired = repair_json_text("I'm sorry, I can't analyze this conversation.")
    assert repaired == ""
    assert not has_object_framing(repaired)


@pytest.mark.parametrize(
    "raw",
    [
        'Sure! ```json\n{name: "A", tags: ["x",],}\n```',
        '```json\n{participants: ["A","B"], sentiments: {A: positive}}\n```',
        '{"relationship_type": "friendship", "compatibility_score": 80}',
        "no json here",
        '{mood: happy,\n\n score: 7,}',
        '{"a": [1, 2,,]}',
        '{"a": [1, , ]}',
        "{,,}",
    ],
)
def test_repair_is_idempotent(raw):
    once = repair_json_text(raw)
    assert repair_json_text(once) == once


def test_has_object_framing():
    assert has_object_framing('{"a": 1}')
    assert not has_object_framing('["a"]')
    assert not has_object_framing("")
