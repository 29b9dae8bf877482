"""Models package - Data models for the orchestration engine."""

from .agent import Agent, DynamicInstructions, Instructions, StaticInstructions
from .messages import (
    FunctionCall,
    ToolCall,
    system_message,
    tool_message,
    to_wire_message,
    message_to_dict,
    user_message,
)
from .outputs import Response, Result

__all__ = [
    "Agent",
    "DynamicInstructions",
    "Instructions",
    "StaticInstructions",
    "FunctionCall",
    "ToolCall",
    "system_message",
    "tool_message",
    "to_wire_message",
    "message_to_dict",
    "user_message",
    "Response",
    "Result",
]
