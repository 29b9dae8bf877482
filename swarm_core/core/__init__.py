"""Core orchestration components.

- Swarm: the turn loop (runner.py)
- handle_tool_calls / handle_function_result: tool dispatch (dispatch.py)
- merge_chunk / MessageAccumulator: streamed delta folding (merge.py)
- validate_arguments: argument contract checks (validation.py)
- should_switch_agent: opt-in keyword routing (routing.py)
"""

from .dispatch import handle_function_result, handle_tool_calls
from .merge import MessageAccumulator, finalize_tool_calls, merge_chunk, merge_fields
from .routing import is_agent_suitable, should_switch_agent
from .runner import RunStatus, Swarm
from .validation import ValidationError, validate_arguments

__all__ = [
    "Swarm",
    "RunStatus",
    "handle_function_result",
    "handle_tool_calls",
    "MessageAccumulator",
    "finalize_tool_calls",
    "merge_chunk",
    "merge_fields",
    "is_agent_suitable",
    "should_switch_agent",
    "ValidationError",
    "validate_arguments",
]
