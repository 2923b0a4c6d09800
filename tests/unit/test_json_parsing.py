"""Unit tests for model reply parsing."""

import pytest

from models.generation import RawFallback, Recovered, Structured
from services.generation.json_parsing import extract_outer_json, parse_reply, strip_code_fences


@pytest.mark.unit
def test_plain_json_is_structured():
    outcome = parse_reply('{"summary":"x","skills":["a"]}')

    assert isinstance(outcome, Structured)
    assert outcome.kind == "structured"
    assert outcome.data == {"summary": "x", "skills": ["a"]}


@pytest.mark.unit
def test_fenced_json_is_structured():
    outcome = parse_reply('```json\n{"summary": "x"}\n```')

    assert isinstance(outcome, Structured)
    assert outcome.data["summary"] == "x"


@pytest.mark.unit
def test_surrounding_commentary_is_recovered():
    outcome = parse_reply('Sure! Here\'s your resume: {"summary":"x"} Hope that helps!')

    assert isinstance(outcome, Recovered)
    assert outcome.data == {"summary": "x"}


@pytest.mark.unit
def test_not_json_falls_back_to_raw_text():
    reply = "I'm sorry, I can't produce JSON today."

    outcome = parse_reply(reply)

    assert isinstance(outcome, RawFallback)
    assert outcome.raw_text == reply
    assert outcome.errors


@pytest.mark.unit
def test_json_array_is_not_structured():
    assert isinstance(parse_reply('["a", "b"]'), RawFallback)


@pytest.mark.unit
def test_empty_reply_falls_back():
    outcome = parse_reply(None)

    assert isinstance(outcome, RawFallback)
    assert outcome.raw_text == ""


@pytest.mark.unit
def test_extract_outer_json_ignores_braces_in_strings():
    text = 'prefix {"a": "}{", "b": {"c": 1}} trailing } junk'

    assert extract_outer_json(text) == '{"a": "}{", "b": {"c": 1}}'


@pytest.mark.unit
def test_extract_outer_json_unbalanced_uses_last_brace():
    assert extract_outer_json('x {"a": {"b": 1} y') == '{"a": {"b": 1}'
    assert extract_outer_json("no braces here") is None


@pytest.mark.unit
def test_strip_code_fences_without_language():
    assert strip_code_fences("```\n{}\n```") == "{}"
    assert strip_code_fences("  {}  ") == "{}"
