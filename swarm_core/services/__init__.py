"""Services for observing and driving runs.

Public API::

    # Chat functions over an AgentSession
    from swarm_core.services import chat, chat_streamed

    # Event types + emitter (used by the orchestrator)
    from swarm_core.services import StreamingHelper, ToolCallEvent, ...
"""

from .events import (
    StreamingHelper,
    BaseEvent,
    TurnStartEvent,
    TurnCompleteEvent,
    ToolCallEvent,
    HandoffEvent,
    ErrorEvent,
)
from .chat import chat, chat_streamed

__all__ = [
    # Chat
    "chat",
    "chat_streamed",
    # Events
    "StreamingHelper",
    "BaseEvent",
    "TurnStartEvent",
    "TurnCompleteEvent",
    "ToolCallEvent",
    "HandoffEvent",
    "ErrorEvent",
]
