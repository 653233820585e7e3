# tests/test_messages.py
"""
Tests for message normalization.

Covers:
- Single message decoding (strings, dicts, canonical messages)
- tool_calls rewriting into tool_use blocks
- Split/merge of consecutive same-role messages and idempotence
- System message extraction and text flattening
- Re-serialization to OpenAI tool_calls
"""

import copy
import json

import pytest

from ai_context_core.exceptions import ContextCoreError, InvalidMessageShape, NonTextContent
from ai_context_core.models import CanonicalMessage, ImageBlock, TextBlock, ToolUseBlock
from ai_context_core.normalization import (
    extract_and_remove_system_messages,
    extract_text,
    normalize_messages,
    normalize_single_message,
    to_openai_tool_calls,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _tool_call(call_id="1", name="f", arguments='{"x": 1}'):
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


def _dumps(messages):
    return [m.model_dump() for m in messages]


class TestNormalizeSingleMessage:
    """Decoding one message."""

    def test_string_becomes_user_text(self):
        msg = normalize_single_message("hello")
        assert isinstance(msg, CanonicalMessage)
        assert msg.role == "user"
        assert msg.content[0] == {"type": "text", "text": "hello"}

    def test_default_role_is_configurable(self):
        msg = normalize_single_message("hi", role="assistant")
        assert msg.role == "assistant"

    def test_explicit_role_wins_over_default(self):
        msg = normalize_single_message({"role": "assistant", "content": "done"}, role="user")
        assert msg.role == "assistant"

    def test_string_content_wrapped(self):
        msg = normalize_single_message({"role": "user", "content": "a"})
        assert msg == {"role": "user", "content": [{"type": "text", "text": "a"}]}

    def test_untyped_text_object_is_text(self):
        msg = normalize_single_message({"role": "user", "content": [{"text": "hello"}]})
        assert isinstance(msg.content[0], TextBlock)
        assert msg.content[0].text == "hello"

    def test_single_object_content_wrapped(self):
        msg = normalize_single_message({"role": "user", "content": {"type": "text", "text": "x"}})
        assert len(msg.content) == 1
        assert msg.content[0].text == "x"

    def test_tool_calls_rewritten(self):
        msg = normalize_single_message({"tool_calls": [_tool_call()]})
        assert len(msg.content) == 1
        block = msg.content[0]
        assert isinstance(block, ToolUseBlock)
        assert block.id == "1"
        assert block.name == "f"
        assert block.input == {"x": 1}
        assert "tool_calls" not in msg

    def test_tool_calls_with_object_arguments(self):
        msg = normalize_single_message({"role": "assistant", "tool_calls": [_tool_call(arguments={"y": 2})]})
        assert msg.content[0].input == {"y": 2}

    def test_tool_calls_with_empty_arguments(self):
        msg = normalize_single_message({"role": "assistant", "tool_calls": [_tool_call(arguments="")]})
        assert msg.content[0].input == {}

    def test_content_and_tool_calls_both_kept(self):
        msg = normalize_single_message(
            {"role": "assistant", "content": "Let me check", "tool_calls": [_tool_call()]}
        )
        assert [block.type for block in msg.content] == ["text", "tool_use"]

    def test_text_stripped_from_tool_use(self):
        msg = normalize_single_message(
            {
                "role": "assistant",
                "content": [{"type": "tool_use", "id": "t1", "name": "f", "input": {}, "text": "thinking"}],
            }
        )
        assert "text" not in msg.content[0].model_dump()

    def test_extra_fields_preserved(self):
        msg = normalize_single_message({"role": "tool", "content": "ok", "tool_call_id": "call_1", "name": "f"})
        assert msg["tool_call_id"] == "call_1"
        assert msg.extra_fields == {"tool_call_id": "call_1", "name": "f"}

    def test_image_url_block(self):
        msg = normalize_single_message(
            {"role": "user", "content": [{"type": "image_url", "image_url": {"url": "http://x/a.png", "detail": "low"}}]}
        )
        block = msg.content[0]
        assert isinstance(block, ImageBlock)
        assert block.is_low_resolution

    def test_input_not_mutated(self):
        original = {"role": "assistant", "content": None, "tool_calls": [_tool_call()]}
        snapshot = copy.deepcopy(original)
        normalize_single_message(original)
        assert original == snapshot

    def test_canonical_input_round_trips(self):
        msg = normalize_single_message({"role": "user", "content": "a"})
        assert normalize_single_message(msg).model_dump() == msg.model_dump()

    @pytest.mark.parametrize("content", [None, "", []])
    def test_missing_content_rejected(self, content):
        with pytest.raises(InvalidMessageShape):
            normalize_single_message({"role": "user", "content": content})

    def test_invalid_argument_json_rejected(self):
        with pytest.raises(InvalidMessageShape):
            normalize_single_message({"tool_calls": [_tool_call(arguments="{not json")]})

    def test_non_object_message_rejected(self):
        with pytest.raises(InvalidMessageShape):
            normalize_single_message(42)

    def test_unknown_block_type_rejected(self):
        with pytest.raises(InvalidMessageShape):
            normalize_single_message({"role": "user", "content": [{"type": "video", "url": "x"}]})

    def test_errors_share_base_class(self):
        with pytest.raises(ContextCoreError):
            normalize_single_message({"role": "user"})


class TestNormalizeMessages:
    """Split/merge and idempotence."""

    def test_merges_consecutive_roles(self):
        result = normalize_messages(
            [
                {"role": "user", "content": "a"},
                {"role": "user", "content": "b"},
                {"role": "assistant", "content": "c"},
            ]
        )
        assert len(result) == 2
        assert result[0] == {"role": "user", "content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]}
        assert result[1] == {"role": "assistant", "content": [{"type": "text", "text": "c"}]}

    def test_alternating_roles_unchanged(self):
        result = normalize_messages(["q", {"role": "assistant", "content": "a"}, "q2"])
        assert [m.role for m in result] == ["user", "assistant", "user"]

    def test_idempotent(self):
        raw = [
            {"role": "system", "content": "be brief"},
            "hello",
            {"role": "user", "content": [{"text": "more"}]},
            {"role": "assistant", "content": "Checking", "tool_calls": [_tool_call()]},
            {"role": "tool", "content": "result", "tool_call_id": "1"},
        ]
        once = normalize_messages(raw)
        twice = normalize_messages(once)
        assert _dumps(twice) == _dumps(once)

    def test_input_list_not_mutated(self):
        raw = [{"role": "user", "content": "a"}, {"role": "user", "content": "b"}]
        snapshot = copy.deepcopy(raw)
        normalize_messages(raw)
        assert raw == snapshot


class TestSystemMessages:
    def test_split_keeps_order(self):
        messages = normalize_messages(
            [
                {"role": "system", "content": "rules"},
                "hi",
                {"role": "assistant", "content": "hello"},
            ]
        )
        system, rest = extract_and_remove_system_messages(messages)
        assert [m.role for m in system] == ["system"]
        assert [m.role for m in rest] == ["user", "assistant"]

    def test_works_on_raw_dicts(self):
        system, rest = extract_and_remove_system_messages([{"role": "system", "content": "s"}, {"role": "user"}])
        assert len(system) == 1
        assert len(rest) == 1


class TestExtractText:
    def test_joins_text_parts(self):
        text = extract_text(
            [
                {"role": "user", "content": "hi"},
                {
                    "role": "assistant",
                    "content": [{"type": "text", "text": "there"}, {"type": "tool_use", "name": "f", "input": {}}],
                },
            ]
        )
        assert text == "hi there"

    def test_canonical_messages(self):
        messages = normalize_messages(["one", {"role": "assistant", "content": "two"}])
        assert extract_text(messages) == "one two"

    def test_single_text_object(self):
        assert extract_text([{"role": "user", "content": {"type": "text", "text": "solo"}}]) == "solo"

    def test_non_text_content_raises(self):
        with pytest.raises(NonTextContent):
            extract_text([{"role": "user", "content": {"type": "text", "text": 5}}])

    def test_non_text_is_also_type_error(self):
        with pytest.raises(TypeError):
            extract_text([{"role": "user", "content": {"text": None}}])


class TestToOpenAIToolCalls:
    def test_reserializes_tool_use(self):
        msg = normalize_single_message({"role": "assistant", "tool_calls": [_tool_call()]})
        calls = to_openai_tool_calls(msg)
        assert len(calls) == 1
        assert calls[0]["id"] == "1"
        assert calls[0]["type"] == "function"
        assert calls[0]["function"]["name"] == "f"
        assert json.loads(calls[0]["function"]["arguments"]) == {"x": 1}

    def test_text_only_message_has_no_calls(self):
        assert to_openai_tool_calls(normalize_single_message("plain")) == []
