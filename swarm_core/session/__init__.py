"""Session package - conversation state carried between runs."""

from .agent_session import AgentSession, ConversationHistory

__all__ = [
    "AgentSession",
    "ConversationHistory",
]
