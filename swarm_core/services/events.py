"""Run events and event emitter.

Event dataclasses for observing an orchestration run as it happens.
Pass an ``event_callback`` to ``Swarm.run`` / ``Swarm.run_and_stream``;
the orchestrator wraps it in a ``StreamingHelper``.

Usage:
    from swarm_core.services.events import StreamingHelper

    helper = StreamingHelper(event_callback=lambda e: print(e.to_dict()))
    helper.emit_turn_start("HelperAgent", turn=1)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


# -- Event dataclasses -------------------------------------------------------


@dataclass
class BaseEvent:
    """Base for all run events."""

    event_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {"event_type": self.event_type}


@dataclass
class TurnStartEvent(BaseEvent):
    """Emitted before a completion is requested."""

    event_type: str = field(default="turn_start", init=False)
    agent_name: str = ""
    turn: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "agent_name": self.agent_name,
            "turn": self.turn,
        }


@dataclass
class TurnCompleteEvent(BaseEvent):
    """Emitted once a turn's completion (and tool calls, if any) are done."""

    event_type: str = field(default="turn_complete", init=False)
    agent_name: str = ""
    turn: int = 1
    tool_calls: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "agent_name": self.agent_name,
            "turn": self.turn,
            "tool_calls": self.tool_calls,
        }


@dataclass
class ToolCallEvent(BaseEvent):
    """Emitted when a tool is about to be invoked."""

    event_type: str = field(default="tool_call", init=False)
    tool_name: str = ""
    arguments: Dict[str, Any] = field(default_factory=dict)
    agent_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "tool_name": self.tool_name,
            "arguments": self.arguments,
            "agent_name": self.agent_name,
        }


@dataclass
class HandoffEvent(BaseEvent):
    """Emitted when the active agent changes."""

    event_type: str = field(default="handoff", init=False)
    from_agent: str = ""
    to_agent: str = ""
    reason: str = "tool"  # "tool" or "routing"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "from_agent": self.from_agent,
            "to_agent": self.to_agent,
            "reason": self.reason,
        }


@dataclass
class ErrorEvent(BaseEvent):
    """Emitted for a contained tool error."""

    event_type: str = field(default="error", init=False)
    error: str = ""
    agent_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "error": self.error,
            "agent_name": self.agent_name,
        }


# -- Event emitter -----------------------------------------------------------


class StreamingHelper:
    """Emit run events through a callback.

    Pass any sync callable as ``event_callback``; it receives a single
    event dataclass instance. With no callback every emit is a no-op.
    """

    def __init__(self, event_callback: Optional[Callable] = None):
        self.event_callback = event_callback

    def emit_turn_start(self, agent_name: str, turn: int = 1) -> None:
        if self.event_callback:
            self.event_callback(TurnStartEvent(agent_name=agent_name, turn=turn))

    def emit_turn_complete(self, agent_name: str, turn: int = 1, tool_calls: int = 0) -> None:
        if self.event_callback:
            self.event_callback(
                TurnCompleteEvent(agent_name=agent_name, turn=turn, tool_calls=tool_calls)
            )

    def emit_tool_call(
        self,
        tool_name: str,
        arguments: Dict[str, Any],
        agent_name: Optional[str] = None,
    ) -> None:
        if self.event_callback:
            self.event_callback(
                ToolCallEvent(tool_name=tool_name, arguments=arguments, agent_name=agent_name)
            )

    def emit_handoff(self, from_agent: str, to_agent: str, reason: str = "tool") -> None:
        if self.event_callback:
            self.event_callback(
                HandoffEvent(from_agent=from_agent, to_agent=to_agent, reason=reason)
            )

    def emit_error(self, error_msg: str, agent_name: Optional[str] = None) -> None:
        if self.event_callback:
            self.event_callback(ErrorEvent(error=error_msg, agent_name=agent_name))
