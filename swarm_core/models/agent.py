"""Agent model - an immutable pairing of model, instructions and tools.

Instructions are a strategy: ``StaticInstructions`` holds fixed text,
``DynamicInstructions`` wraps a pure function of the context variables.
Both resolve to a string once per turn.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..config import settings
from ..registry.function_registry import AgentFunction, function_from_callable


@dataclass(frozen=True)
class StaticInstructions:
    text: str

    def resolve(self, context_variables: Dict[str, Any]) -> str:
        return self.text


@dataclass(frozen=True)
class DynamicInstructions:
    func: Callable[[Dict[str, Any]], str]

    def resolve(self, context_variables: Dict[str, Any]) -> str:
        # a copy, so instruction functions cannot mutate run state
        text = self.func(copy.deepcopy(dict(context_variables)))
        if not isinstance(text, str):
            raise TypeError(
                f"Instruction function returned {type(text).__name__}, expected str"
            )
        return text


Instructions = Union[StaticInstructions, DynamicInstructions]


def _to_instructions(value: Any) -> Instructions:
    if isinstance(value, (StaticInstructions, DynamicInstructions)):
        return value
    if isinstance(value, str):
        return StaticInstructions(value)
    if callable(value):
        return DynamicInstructions(value)
    raise TypeError(
        f"Agent instructions must be a string or a callable, got {type(value).__name__}"
    )


def _to_agent_function(value: Any) -> AgentFunction:
    if isinstance(value, AgentFunction):
        return value
    if callable(value):
        return function_from_callable(value)
    raise TypeError(f"Agent functions must be AgentFunction or callable, got {value!r}")


@dataclass(frozen=True, eq=False)
class Agent:
    """A named configuration of model, instructions and tools.

    Agents are never mutated; a handoff substitutes a different Agent.
    ``instructions`` accepts a string or a callable of the context
    variables; ``functions`` accepts AgentFunctions or plain callables.

    Example:
        haiku = Agent(name="HaikuAgent", instructions="You only respond in haikus")
        helper = Agent(
            name="HelperAgent",
            instructions="You are a helpful assistant.",
            functions=[add, transfer_to_haiku_agent],
        )
    """
    name: str = "Agent"
    model: str = field(default_factory=lambda: settings.DEFAULT_MODEL)
    instructions: Any = "You are a helpful agent."
    functions: Tuple[AgentFunction, ...] = ()
    tool_choice: Optional[Any] = None
    parallel_tool_calls: bool = True

    def __post_init__(self):
        object.__setattr__(self, "instructions", _to_instructions(self.instructions))
        object.__setattr__(
            self, "functions", tuple(_to_agent_function(f) for f in self.functions)
        )

    def resolve_instructions(self, context_variables: Dict[str, Any]) -> str:
        """Resolve instructions for the current turn."""
        return self.instructions.resolve(context_variables)

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r}, model={self.model!r})"
