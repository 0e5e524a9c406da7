import pytest

from dyslexia_helper.errors import SuggestionParseError
from dyslexia_helper.services.suggestions import (
    FALLBACK_SUGGESTIONS,
    extract_suggestions,
    pad_suggestions,
    parse_bracketed,
    parse_keyed_object,
    parse_lines,
)


def test_bracketed_array_is_truncated_to_four():
    content = 'Sure! ["Yes please", "No thanks", "Tell me more", "Maybe later", "Why?"]'
    assert extract_suggestions(content) == ["Yes please", "No thanks", "Tell me more", "Maybe later"]


def test_array_inside_json_object():
    content = '{"suggestions": ["Okay", "Thank you", "Say it again", "Sounds good"]}'
    assert extract_suggestions(content) == ["Okay", "Thank you", "Say it again", "Sounds good"]


def test_numbered_lines_are_stripped():
    content = '1. "Yes, I agree"\n2. No, not really\n3) Can you repeat?\n- Thanks a lot'
    assert extract_suggestions(content) == ["Yes, I agree", "No, not really", "Can you repeat?", "Thanks a lot"]


def test_broken_array_falls_back_to_lines():
    content = '[\n"Sounds great",\n"I am not sure",\n"Let me think"'
    # нет закрывающей скобки: массив не найден, работают строки
    assert extract_suggestions(content) == ["Sounds great", "I am not sure", "Let me think"]


def test_invalid_json_in_brackets_falls_back_to_lines():
    content = "[Yes please, No thanks]\nOkay then"
    assert parse_lines(content) == ["Yes please, No thanks", "Okay then"]
    assert extract_suggestions(content) == ["Yes please, No thanks", "Okay then"]


def test_preamble_and_code_fence_are_skipped():
    content = "Here are some replies:\n```\n* I like it\n* Not for me\n```"
    assert extract_suggestions(content) == ["I like it", "Not for me"]


def test_non_string_items_are_dropped():
    assert parse_bracketed('["Hi", 3, null, {"a": 1}, "  ", "Bye"]') == ["Hi", "Bye"]


def test_parse_bracketed_rejects_non_list():
    with pytest.raises(SuggestionParseError):
        parse_bracketed("no brackets here")


@pytest.mark.parametrize("content", ["", "   \n  \n", "{}", "[]"])
def test_nothing_to_extract_raises(content):
    with pytest.raises(SuggestionParseError):
        extract_suggestions(content)


def test_pad_fills_from_fallback_without_duplicates():
    padded = pad_suggestions(["What does this word mean?"])
    assert len(padded) == 4
    assert padded[0] == "What does this word mean?"
    assert len(set(padded)) == 4
    assert set(padded) == set(FALLBACK_SUGGESTIONS)


def test_pad_truncates():
    assert pad_suggestions(["a", "b", "c", "d", "e"]) == ["a", "b", "c", "d"]


def test_object_with_responses_key_and_extra_array():
    content = '{"responses": ["Sure thing", "No thanks"], "notes": ["short"]}'
    assert extract_suggestions(content) == ["Sure thing", "No thanks"]


def test_object_with_options_key():
    content = 'Here you go: {"options": ["Yes", "No", "Maybe", "Later", "Never"]}'
    assert extract_suggestions(content) == ["Yes", "No", "Maybe", "Later"]


def test_suggestions_key_wins_over_other_arrays():
    content = '{"tags": ["casual"], "suggestions": ["Yes", "No", "Maybe", "Later"]}'
    assert parse_keyed_object(content) == ["Yes", "No", "Maybe", "Later"]


def test_object_without_known_key_falls_through_to_array():
    assert extract_suggestions('{"replies": ["Okay", "Fine"]}') == ["Okay", "Fine"]


def test_parse_keyed_object_rejects_unknown_keys():
    with pytest.raises(SuggestionParseError):
        parse_keyed_object('{"tags": ["a"], "notes": ["b"]}')
