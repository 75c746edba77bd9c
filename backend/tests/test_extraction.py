"""
CopyCart Backend — Extraction Unit Tests
==========================================

What:  Tests for the pure helpers that turn model output into results.

What we test:
    ✅ First JSON object is recovered from surrounding prose
    ✅ Non-greedy first-match semantics with two brace groups
    ✅ Missing or malformed JSON raises ExtractionError
    ✅ Chat reply is taken after the last marker occurrence
    ✅ Empty chat reply raises EmptyReplyError
"""

import pytest

from copycart.exceptions import EmptyReplyError, ExtractionError
from copycart.services.extraction import (
    extract_chat_reply,
    extract_json_object,
    first_generated_text,
    upstream_error_message,
)

MARKER = "actionable marketing tip."


class TestExtractJsonObject:

    def test_object_after_leading_prose(self):
        text = 'Sure! {"title":"A","description":"B"}'
        assert extract_json_object(text) == {"title": "A", "description": "B"}

    def test_object_spanning_lines_with_trailing_text(self):
        text = 'Here you go:\n{\n  "title": "Glow Mug",\n  "description": "Warm.\\nBright."\n}\nEnjoy!'
        assert extract_json_object(text) == {"title": "Glow Mug", "description": "Warm.\nBright."}

    def test_first_brace_group_wins(self):
        """Two groups: the first is parsed even though it lacks title/description."""
        text = '{"a":1} junk {"title":"T","description":"D"}'
        assert extract_json_object(text) == {"a": 1}

    def test_no_braces_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_json_object("I cannot help with that.")
        assert exc_info.value.status_code == 500

    def test_invalid_json_in_braces_raises(self):
        with pytest.raises(ExtractionError):
            extract_json_object("{title: 'single quotes are not JSON'}")

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_raise(self, constant):
        """NaN and Infinity are not JSON and could not be serialized back out."""
        with pytest.raises(ExtractionError) as exc_info:
            extract_json_object(f'x {{"title": "A", "description": {constant}}} y')
        assert "Invalid JSON constant" in exc_info.value.details

    def test_nested_object_is_cut_at_first_closing_brace(self):
        with pytest.raises(ExtractionError):
            extract_json_object('{"title": "T", "meta": {"k": 1}, "description": "D"}')


class TestExtractChatReply:

    def test_reply_after_marker(self):
        text = "...Provide a concise, actionable marketing tip. Try bundling products."
        assert extract_chat_reply(text, MARKER) == "Try bundling products."

    def test_uses_last_marker_occurrence(self):
        text = (
            "Provide a concise, actionable marketing tip.\n"
            "Here is an actionable marketing tip. Offer a loyalty discount."
        )
        assert extract_chat_reply(text, MARKER) == "Offer a loyalty discount."

    def test_text_ending_at_marker_raises(self):
        with pytest.raises(EmptyReplyError):
            extract_chat_reply("Provide a concise, actionable marketing tip.", MARKER)

    def test_whitespace_after_marker_raises(self):
        with pytest.raises(EmptyReplyError):
            extract_chat_reply("Provide a concise, actionable marketing tip.  \n ", MARKER)

    def test_without_marker_whole_text_is_reply(self):
        assert extract_chat_reply("  Post daily reels.  ", MARKER) == "Post daily reels."

    def test_custom_marker(self):
        assert extract_chat_reply("prompt ### answer", "###") == "answer"


class TestPayloadHelpers:

    def test_first_generated_text(self):
        payload = [{"generated_text": "hello"}, {"generated_text": "ignored"}]
        assert first_generated_text(payload) == "hello"

    @pytest.mark.parametrize("payload", [[], {}, {"generated_text": "x"}, [{}], ["text"], None])
    def test_first_generated_text_defaults_to_empty(self, payload):
        assert first_generated_text(payload) == ""

    def test_upstream_error_message(self):
        assert upstream_error_message({"error": "Model is loading"}) == "Model is loading"
        assert upstream_error_message({"error": ""}) is None
        assert upstream_error_message([{"generated_text": "ok"}]) is None
