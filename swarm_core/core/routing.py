"""Keyword-overlap routing between candidate agents.

A best-effort hint the caller opts into by passing ``available_agents``.
An agent is suitable for a message when the message shares at least one
word with the agent's instructions. Tool-driven handoffs take precedence:
the runner skips routing on the turn right after one.
"""

import logging
import re
from typing import Any, Dict, Iterable, Optional, Set

from ..models.agent import Agent

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\w+")


def _words(text: str) -> Set[str]:
    return set(_WORD_RE.findall(text.lower()))


def is_agent_suitable(
    agent: Agent,
    message: str,
    context_variables: Optional[Dict[str, Any]] = None,
) -> bool:
    """True when *message* shares at least one word with the agent's instructions."""
    try:
        instructions = agent.resolve_instructions(context_variables or {})
    except Exception as e:
        logger.warning(f"Could not resolve instructions for '{agent.name}': {e}")
        return False

    if not instructions or not message:
        return False
    return bool(_words(instructions) & _words(message))


def should_switch_agent(
    message: Optional[str],
    current_agent: Agent,
    available_agents: Iterable[Agent],
    context_variables: Optional[Dict[str, Any]] = None,
) -> Optional[Agent]:
    """Return the first other candidate suitable for *message*, if any."""
    if not isinstance(message, str) or not message:
        return None
    for agent in available_agents:
        if agent is current_agent:
            continue
        if is_agent_suitable(agent, message, context_variables):
            return agent
    return None
