"""Folding streamed deltas into one assistant message.

Merge policy per field:
- strings concatenate
- nested mappings merge recursively
- lists and scalars replace (last write wins)
- ``role`` on a delta is ignored

Tool-call fragments are routed by their ``index`` into a sparse map and
only turned into an ordered list by ``finalize_tool_calls``.
"""

from typing import Any, Dict, List, Mapping, MutableMapping, Optional

from ..models.messages import message_to_dict

# Delta keys that describe the stream rather than the message
_IGNORED_DELTA_KEYS = ("role", "sender")


def merge_fields(target: MutableMapping[str, Any], source: Mapping[str, Any]) -> None:
    """Merge *source* into *target* in place."""
    for key, value in source.items():
        if value is None:
            continue
        if isinstance(value, str):
            target[key] = (target.get(key) or "") + value
        elif isinstance(value, Mapping):
            nested = target.get(key)
            if not isinstance(nested, MutableMapping):
                nested = {}
                target[key] = nested
            merge_fields(nested, value)
        elif isinstance(value, list):
            target[key] = list(value)
        else:
            target[key] = value


def _merge_tool_call_fragment(slot: MutableMapping[str, Any], fragment: Mapping[str, Any]) -> None:
    for key, value in fragment.items():
        if value is None:
            continue
        if key in ("id", "type"):
            # identifiers are sent whole, never split across fragments
            if value:
                slot[key] = value
        elif key == "function" and isinstance(value, Mapping):
            function = slot.setdefault("function", {})
            merge_fields(function, value)
        else:
            merge_fields(slot, {key: value})


def merge_chunk(accumulator: MutableMapping[str, Any], delta: Any) -> None:
    """Fold one streamed delta into *accumulator*.

    ``accumulator["tool_calls"]`` must be a dict keyed by fragment index
    while the stream is running.
    """
    fields = message_to_dict(delta)
    for key in _IGNORED_DELTA_KEYS:
        fields.pop(key, None)

    fragments = fields.pop("tool_calls", None) or []
    merge_fields(accumulator, fields)

    tool_calls = accumulator.setdefault("tool_calls", {})
    for fragment in fragments:
        fragment = message_to_dict(fragment)
        index = fragment.pop("index", None)
        if index is None:
            index = len(tool_calls)
        slot = tool_calls.setdefault(index, {})
        _merge_tool_call_fragment(slot, fragment)


def finalize_tool_calls(accumulator: MutableMapping[str, Any]) -> Optional[List[Dict[str, Any]]]:
    """Turn the sparse tool-call map into an index-ordered list.

    Sets and returns ``None`` when no tool call was streamed.
    """
    sparse = accumulator.get("tool_calls") or {}
    if isinstance(sparse, list):
        dense = sparse
    else:
        dense = [sparse[index] for index in sorted(sparse)]

    for tool_call in dense:
        function = tool_call.setdefault("function", {})
        function.setdefault("name", "")
        function.setdefault("arguments", "")

    accumulator["tool_calls"] = dense or None
    return accumulator["tool_calls"]


class MessageAccumulator:
    """Two-phase builder for a streamed assistant message.

    Usage:
        acc = MessageAccumulator(sender="HelperAgent")
        for delta in deltas:
            acc.add(delta)
        message = acc.finalize()
    """

    def __init__(self, sender: str):
        self.message: Dict[str, Any] = {
            "content": "",
            "sender": sender,
            "role": "assistant",
            "function_call": None,
            "tool_calls": {},
        }
        self._finalized = False

    def add(self, delta: Any) -> None:
        if self._finalized:
            raise RuntimeError("Cannot merge into a finalized message")
        merge_chunk(self.message, delta)

    def finalize(self) -> Dict[str, Any]:
        if not self._finalized:
            finalize_tool_calls(self.message)
            self._finalized = True
        return self.message
