"""Message and tool-call shapes exchanged with the completion service.

Messages stay plain dicts (``{"role": ..., "content": ...}``) so they can
be sent back to the API unchanged. Tool calls get a small typed wrapper
because their arguments are untrusted text until decoded.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"
TOOL = "tool"

# Bookkeeping keys kept in history but never sent to the completion service
LOCAL_KEYS = ("sender", "tool_name")


@dataclass
class FunctionCall:
    name: str = ""
    arguments: str = ""


@dataclass
class ToolCall:
    """A model-requested invocation of a named function."""
    id: str = ""
    function: FunctionCall = field(default_factory=FunctionCall)
    type: str = "function"

    @classmethod
    def from_dict(cls, data: Any) -> "ToolCall":
        """Build from a dict or an object with the same attributes."""
        if isinstance(data, ToolCall):
            return data
        if not isinstance(data, Mapping):
            data = data.model_dump() if hasattr(data, "model_dump") else vars(data)
        function = data.get("function") or {}
        if not isinstance(function, Mapping):
            function = {
                "name": getattr(function, "name", ""),
                "arguments": getattr(function, "arguments", ""),
            }
        return cls(
            id=data.get("id") or "",
            function=FunctionCall(
                name=function.get("name") or "",
                arguments=function.get("arguments") or "",
            ),
            type=data.get("type") or "function",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {
                "name": self.function.name,
                "arguments": self.function.arguments,
            },
        }


def system_message(content: str) -> Dict[str, Any]:
    return {"role": SYSTEM, "content": content}


def user_message(content: str) -> Dict[str, Any]:
    return {"role": USER, "content": content}


def tool_message(tool_call_id: str, tool_name: str, content: str) -> Dict[str, Any]:
    """A tool-role reply to exactly one prior tool call."""
    return {
        "role": TOOL,
        "tool_call_id": tool_call_id,
        "tool_name": tool_name,
        "content": content,
    }


def to_wire_message(message: Mapping[str, Any]) -> Dict[str, Any]:
    """Strip local bookkeeping keys and empty fields before sending."""
    return {
        key: value
        for key, value in message.items()
        if key not in LOCAL_KEYS and value is not None
    }


def message_to_dict(message: Any) -> Dict[str, Any]:
    """Copy an API message/delta (pydantic model or mapping) into a plain dict."""
    if isinstance(message, Mapping):
        return copy.deepcopy(dict(message))
    if hasattr(message, "model_dump"):
        return message.model_dump(exclude_none=True)
    return dict(vars(message))
