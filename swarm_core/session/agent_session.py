"""Conversation session - caller-side state carried between runs.

A run never keeps state of its own. ``AgentSession`` is where a chat
front-end keeps the history, the currently active agent and the context
variables, re-feeding them into each ``Swarm.run`` and adopting what the
returned ``Response`` says.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models.agent import Agent
from ..models.messages import user_message
from ..models.outputs import Response

logger = logging.getLogger(__name__)


class ConversationHistory:
    """Ordered list of chat-completions message dicts."""

    def __init__(self, messages: Optional[List[Dict[str, Any]]] = None):
        self.messages: List[Dict[str, Any]] = list(messages or [])

    def to_list_dict(self) -> List[Dict[str, Any]]:
        """Return a shallow copy of the messages."""
        return self.messages.copy()

    def add_message(self, role: str, content: str, **kwargs) -> None:
        """Add a message to history.

        Args:
            role: Message role ('user', 'assistant', 'system', 'tool')
            content: Message content
            **kwargs: Additional fields (sender, tool_call_id, etc.)
        """
        msg = {"role": role, "content": content}
        msg.update(kwargs)
        self.messages.append(msg)

    def extend(self, messages: List[Dict[str, Any]]) -> None:
        self.messages.extend(messages)

    def clear(self) -> None:
        self.messages.clear()


class AgentSession:
    """State of one conversation across runs.

    Usage:
        session = AgentSession("user-123", agent=helper_agent)
        session.add_user_message("Hi!")
        response = await swarm.run(
            agent=session.agent,
            messages=session.get_messages(),
            context_variables=session.context_variables,
        )
        session.apply_response(response)
    """

    def __init__(
        self,
        session_id: str,
        agent: Optional[Agent] = None,
        context_variables: Optional[Dict[str, Any]] = None,
        initial_history: Optional[ConversationHistory] = None,
    ):
        self.session_id = session_id
        self.agent = agent
        self.context_variables: Dict[str, Any] = dict(context_variables or {})
        self.history = initial_history or ConversationHistory()

    def add_user_message(self, content: str) -> None:
        self.history.messages.append(user_message(content))

    def get_messages(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return the history, optionally only the last *limit* messages."""
        items = self.history.to_list_dict()
        if limit:
            return items[-limit:]
        return items

    def apply_response(self, response: Response) -> None:
        """Adopt the outcome of a run: new messages, active agent, context."""
        self.history.extend(response.messages)
        if response.agent is not None and response.agent is not self.agent:
            logger.debug(
                f"Session {self.session_id}: active agent is now {response.agent.name}"
            )
            self.agent = response.agent
        self.context_variables.update(response.context_variables)

    def get_message_count(self) -> int:
        return len(self.history.messages)

    def clear(self) -> None:
        """Forget the conversation but keep the agent and context."""
        self.history.clear()
