"""Tests for folding streamed deltas into an assistant message."""

import pytest
from openai.types.chat.chat_completion_chunk import ChoiceDelta

from swarm_core.core.merge import (
    MessageAccumulator,
    finalize_tool_calls,
    merge_chunk,
    merge_fields,
)


def _fresh():
    return {"content": "", "role": "assistant", "tool_calls": {}}


# -- merge_fields -------------------------------------------------------------


class TestMergeFields:
    def test_strings_concatenate(self):
        target = {"content": "Hel"}
        merge_fields(target, {"content": "lo"})
        assert target["content"] == "Hello"

    def test_string_onto_none(self):
        target = {"content": None}
        merge_fields(target, {"content": "x"})
        assert target["content"] == "x"

    def test_nested_mappings_merge(self):
        target = {"function": {"name": "ad", "arguments": ""}}
        merge_fields(target, {"function": {"name": "d", "arguments": "{}"}})
        assert target == {"function": {"name": "add", "arguments": "{}"}}

    def test_lists_replace(self):
        target = {"items": [1, 2]}
        merge_fields(target, {"items": [3]})
        assert target["items"] == [3]

    def test_none_skipped(self):
        target = {"content": "a"}
        merge_fields(target, {"content": None})
        assert target["content"] == "a"

    def test_scalars_overwrite(self):
        target = {"flag": False}
        merge_fields(target, {"flag": True})
        assert target["flag"] is True

    def test_split_points_do_not_matter(self):
        left, right = {"content": ""}, {"content": ""}
        for piece in ["ab", "c"]:
            merge_fields(left, {"content": piece})
        for piece in ["a", "bc"]:
            merge_fields(right, {"content": piece})
        assert left == right == {"content": "abc"}


# -- merge_chunk --------------------------------------------------------------


class TestMergeChunk:
    def test_role_and_sender_ignored(self):
        acc = _fresh()
        merge_chunk(acc, {"role": "assistant", "sender": "A", "content": "Hi"})
        assert acc["role"] == "assistant"
        assert acc["content"] == "Hi"
        assert "sender" not in acc

    def test_tool_call_fragments_reconstructed(self):
        acc = _fresh()
        merge_chunk(acc, {"tool_calls": [
            {"index": 0, "id": "x", "function": {"name": "ad", "arguments": ""}}
        ]})
        merge_chunk(acc, {"tool_calls": [
            {"index": 0, "function": {"name": "d", "arguments": "{\"a\":"}}
        ]})
        merge_chunk(acc, {"tool_calls": [
            {"index": 0, "function": {"arguments": "1}"}}
        ]})
        calls = finalize_tool_calls(acc)
        assert calls == [
            {"id": "x", "function": {"name": "add", "arguments": "{\"a\":1}"}}
        ]

    def test_id_not_concatenated(self):
        acc = _fresh()
        merge_chunk(acc, {"tool_calls": [{"index": 0, "id": "call_1", "type": "function"}]})
        merge_chunk(acc, {"tool_calls": [{"index": 0, "id": "", "type": ""}]})
        merge_chunk(acc, {"tool_calls": [{"index": 0, "id": "call_1", "type": "function"}]})
        assert acc["tool_calls"][0]["id"] == "call_1"
        assert acc["tool_calls"][0]["type"] == "function"

    def test_interleaved_indices(self):
        acc = _fresh()
        merge_chunk(acc, {"tool_calls": [{"index": 1, "id": "b", "function": {"name": "sub"}}]})
        merge_chunk(acc, {"tool_calls": [{"index": 0, "id": "a", "function": {"name": "add"}}]})
        merge_chunk(acc, {"tool_calls": [{"index": 1, "function": {"arguments": "{}"}}]})
        calls = finalize_tool_calls(acc)
        assert [c["id"] for c in calls] == ["a", "b"]
        assert calls[0]["function"] == {"name": "add", "arguments": ""}
        assert calls[1]["function"] == {"name": "sub", "arguments": "{}"}

    def test_non_contiguous_indices(self):
        acc = _fresh()
        merge_chunk(acc, {"tool_calls": [{"index": 0, "id": "a"}]})
        merge_chunk(acc, {"tool_calls": [{"index": 3, "id": "d"}]})
        assert [c["id"] for c in finalize_tool_calls(acc)] == ["a", "d"]

    def test_pydantic_delta(self):
        acc = _fresh()
        delta = ChoiceDelta.model_validate({
            "role": "assistant",
            "content": "Hi",
            "tool_calls": [
                {"index": 0, "id": "call_1", "type": "function",
                 "function": {"name": "add", "arguments": "{}"}}
            ],
        })
        merge_chunk(acc, delta)
        assert acc["content"] == "Hi"
        assert finalize_tool_calls(acc)[0]["function"]["name"] == "add"

    def test_input_delta_not_mutated(self):
        delta = {"role": "assistant", "tool_calls": [{"index": 0, "id": "a"}]}
        merge_chunk(_fresh(), delta)
        assert delta == {"role": "assistant", "tool_calls": [{"index": 0, "id": "a"}]}


# -- finalize_tool_calls ------------------------------------------------------


class TestFinalize:
    def test_no_tool_calls_gives_none(self):
        acc = _fresh()
        assert finalize_tool_calls(acc) is None
        assert acc["tool_calls"] is None


class TestMessageAccumulator:
    def test_builds_message(self):
        acc = MessageAccumulator(sender="HelperAgent")
        acc.add({"role": "assistant", "content": "Hello"})
        acc.add({"content": " world"})
        message = acc.finalize()
        assert message["content"] == "Hello world"
        assert message["sender"] == "HelperAgent"
        assert message["role"] == "assistant"
        assert message["tool_calls"] is None

    def test_add_after_finalize_raises(self):
        acc = MessageAccumulator(sender="A")
        acc.finalize()
        with pytest.raises(RuntimeError):
            acc.add({"content": "late"})

    def test_finalize_idempotent(self):
        acc = MessageAccumulator(sender="A")
        acc.add({"tool_calls": [{"index": 0, "id": "x", "function": {"name": "f"}}]})
        first = acc.finalize()
        assert acc.finalize() is first
        assert len(first["tool_calls"]) == 1
