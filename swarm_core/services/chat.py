"""Chat functions for front-ends.

Two flavours of chat over an ``AgentSession``:

- ``chat()``: non-streaming, returns a dict
- ``chat_streamed()``: yields event dicts for each delta and notification

Both run the swarm from the session's history plus the new user message.
The session only records the exchange (user message, new messages, agent,
context) once the run has finished; a failed run leaves it untouched and
is reported as data.

Usage:
    from swarm_core import AgentSession, Swarm
    from swarm_core.services.chat import chat, chat_streamed

    swarm = Swarm()
    session = AgentSession("user-123", agent=helper_agent)

    result = await chat(swarm, "What is 2 + 3?", session)

    async for event in chat_streamed(swarm, "Now write a haiku", session):
        print(event)
"""

import logging
from typing import TYPE_CHECKING, Any, AsyncGenerator, Dict, List, Optional, Sequence

from ..models.agent import Agent
from ..models.messages import user_message
from ..models.outputs import Response
from ..session import AgentSession

if TYPE_CHECKING:
    from ..core.runner import Swarm

logger = logging.getLogger(__name__)


def _tools_called(messages: List[Dict[str, Any]]) -> List[str]:
    """Names of the tools requested by assistant messages, in order."""
    names = []
    for message in messages:
        if message.get("role") != "assistant":
            continue
        for tool_call in message.get("tool_calls") or []:
            names.append(tool_call.get("function", {}).get("name", "unknown"))
    return names


def _require_agent(session: AgentSession) -> Agent:
    if session.agent is None:
        raise ValueError(f"Session '{session.session_id}' has no active agent")
    return session.agent


async def chat(
    swarm: "Swarm",
    message: str,
    session: AgentSession,
    model_override: Optional[str] = None,
    max_turns: Optional[int] = None,
    available_agents: Optional[Sequence[Agent]] = None,
) -> Dict[str, Any]:
    """Run a single chat exchange (non-streaming).

    Args:
        swarm: The orchestrator.
        message: User message text.
        session: ``AgentSession`` holding history, agent and context.
        model_override: Use a different model than the agents' own.
        max_turns: Completion budget for this exchange.
        available_agents: Candidates for keyword routing.

    Returns:
        ``{"success": True, "response": str, "agent": str, "session_id": str,
        "tools_called": list, "usage": dict}`` or
        ``{"success": False, "error": str, "session_id": str}`` on failure.
    """
    try:
        agent = _require_agent(session)
        messages = session.get_messages() + [user_message(message)]

        response = await swarm.run(
            agent=agent,
            messages=messages,
            context_variables=session.context_variables,
            model_override=model_override,
            max_turns=max_turns,
            available_agents=available_agents,
        )
        session.add_user_message(message)
        session.apply_response(response)

        return {
            "success": True,
            "response": response.last_content,
            "agent": session.agent.name,
            "session_id": session.session_id,
            "tools_called": _tools_called(response.messages),
            "usage": response.usage,
        }
    except Exception as e:
        logger.error("Chat error: %s", e, exc_info=True)
        return {"success": False, "error": str(e), "session_id": session.session_id}


async def chat_streamed(
    swarm: "Swarm",
    message: str,
    session: AgentSession,
    model_override: Optional[str] = None,
    max_turns: Optional[int] = None,
    available_agents: Optional[Sequence[Agent]] = None,
) -> AsyncGenerator[Dict[str, Any], None]:
    """Chat with token-level streaming via ``Swarm.run_and_stream()``.

    Yields:
        Event dicts::

            {"event": "text_delta",   "data": {"delta": "...", "sender": "..."}}
            {"event": "tool_call",    "data": {"tool": "...", "sender": "..."}}
            {"event": "agent_switch", "data": {"message": "..."}}
            {"event": "answer",       "data": {"response": "...", "agent": "...",
                                               "tools_called": [...], "usage": {...}}}
            {"event": "error",        "data": {"error": "..."}}
    """
    try:
        agent = _require_agent(session)
        messages = session.get_messages() + [user_message(message)]

        stream = swarm.run_and_stream(
            agent=agent,
            messages=messages,
            context_variables=session.context_variables,
            model_override=model_override,
            max_turns=max_turns,
            available_agents=available_agents,
        )

        sender = agent.name
        response: Optional[Response] = None

        async for chunk in stream:
            if "response" in chunk:
                response = chunk["response"]
            elif "agent_switch" in chunk:
                yield {"event": "agent_switch", "data": {"message": chunk["agent_switch"]}}
            elif "delim" in chunk:
                continue
            else:
                sender = chunk.get("sender", sender)
                if chunk.get("content"):
                    yield {
                        "event": "text_delta",
                        "data": {"delta": chunk["content"], "sender": sender},
                    }
                for fragment in chunk.get("tool_calls") or []:
                    name = (fragment.get("function") or {}).get("name")
                    if name:
                        yield {"event": "tool_call", "data": {"tool": name, "sender": sender}}

        session.add_user_message(message)
        session.apply_response(response)

        yield {
            "event": "answer",
            "data": {
                "response": response.last_content,
                "agent": session.agent.name,
                "tools_called": _tools_called(response.messages),
                "usage": response.usage,
            },
        }
    except Exception as e:
        logger.error("Streaming error: %s", e, exc_info=True)
        yield {"event": "error", "data": {"error": str(e)}}
