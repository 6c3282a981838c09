import pytest

from flowbot.execution.interpolation import render_prompt


def test_interpolates_user_data():
    prompt = "Nice to meet you, {name}! What brings you here today?"
    assert render_prompt(prompt, {"name": "Alice"}) == "Nice to meet you, Alice! What brings you here today?"


def test_handles_multiple_placeholders():
    prompt = "Hello {name}, your ID is {id}"
    assert render_prompt(prompt, {"name": "Bob", "id": 12345}) == "Hello Bob, your ID is 12345"


def test_replaces_every_occurrence():
    assert render_prompt("{name} and {name}", {"name": "Ann"}) == "Ann and Ann"


@pytest.mark.parametrize("data", [{}, {"name": "Alice"}, {"x": 1, "y": None}])
def test_template_without_placeholders_is_unchanged(data):
    prompt = "What's your name?"
    assert render_prompt(prompt, data) == prompt


def test_unknown_placeholders_are_left_verbatim():
    assert render_prompt("Hi {name}, from {city}", {"name": "Ann"}) == "Hi Ann, from {city}"


def test_overlapping_keys_match_whole_tokens():
    prompt = "{name} / {nameTag}"
    assert render_prompt(prompt, {"name": "Ann", "nameTag": "#7"}) == "Ann / #7"
    assert render_prompt(prompt, {"name": "Ann"}) == "Ann / {nameTag}"


def test_substituted_values_are_not_rescanned():
    assert render_prompt("{a}", {"a": "{b}", "b": "x"}) == "{b}"
