"""Output models for tool invocations and orchestration runs.

- Result: normalized outcome of one tool call
- Response: everything a run appended, plus the final agent and context
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .agent import Agent


@dataclass
class Result:
    """Normalized outcome of one tool invocation.

    Attributes:
        value: Text sent back to the model as the tool message content
        agent: Agent to hand control to, if any
        context_variables: Keys to merge into the run's context
    """
    value: str = ""
    agent: Optional["Agent"] = None
    context_variables: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(
                f"Result.value must be a str, got {type(self.value).__name__}"
            )


@dataclass
class Response:
    """Result of one orchestration run.

    Attributes:
        messages: Messages appended during the run (input prefix excluded)
        agent: Agent active when the run ended
        context_variables: Final merged context
        usage: Aggregated token usage, when the service reported it
    """
    messages: List[Dict[str, Any]] = field(default_factory=list)
    agent: Optional["Agent"] = None
    context_variables: Dict[str, Any] = field(default_factory=dict)
    usage: Optional[Dict[str, Any]] = None

    @property
    def last_content(self) -> str:
        """Content of the last assistant message, or an empty string."""
        for message in reversed(self.messages):
            if message.get("role") == "assistant" and message.get("content"):
                return message["content"]
        return ""

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "messages": self.messages,
            "agent": self.agent.name if self.agent else None,
            "context_variables": self.context_variables,
        }
        if self.usage:
            result["usage"] = self.usage
        return result


__all__ = [
    "Result",
    "Response",
]
