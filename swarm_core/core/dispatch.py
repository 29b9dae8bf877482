"""Tool-call dispatch and result normalization.

Tool calls are executed one at a time, in the order the model sent them.
Anything that goes wrong with a single call (unknown tool, bad JSON,
failed validation, an exception in the tool, an unconvertible return
value) becomes an ``Error: ...`` tool message; the run carries on.
"""

import copy
import inspect
import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from ..models.agent import Agent
from ..models.messages import ToolCall, tool_message
from ..models.outputs import Response, Result
from ..registry.function_registry import CTX_VARS_NAME, AgentFunction
from ..services.events import StreamingHelper
from .validation import ValidationError, validate_arguments

logger = logging.getLogger(__name__)


def handle_function_result(result: Any) -> Result:
    """Normalize a tool's return value into a Result.

    - Result: returned unchanged
    - Agent: handoff, value is ``{"assistant": "<name>"}``
    - anything else: its string form (mappings and sequences as JSON)

    Raises:
        TypeError: If the value cannot be represented as a string.
    """
    if isinstance(result, Result):
        return result
    if isinstance(result, Agent):
        return Result(value=json.dumps({"assistant": result.name}), agent=result)

    try:
        if isinstance(result, str):
            value = result
        elif isinstance(result, (Mapping, list, tuple)):
            value = json.dumps(result)
        else:
            value = str(result)
    except Exception as e:
        raise TypeError(
            f"Failed to cast response to string: {type(result).__name__}. "
            f"Make sure agent functions return a string or Result object. Error: {e}"
        ) from e
    return Result(value=value)


def _decode_arguments(raw: str) -> Dict[str, Any]:
    if not raw or not raw.strip():
        return {}
    arguments = json.loads(raw)
    if not isinstance(arguments, dict):
        raise ValueError(f"expected a JSON object, got {type(arguments).__name__}")
    return arguments


async def handle_tool_calls(
    tool_calls: Iterable[Any],
    functions: Sequence[AgentFunction],
    context_variables: Mapping[str, Any],
    agent_name: Optional[str] = None,
    streaming: Optional[StreamingHelper] = None,
) -> Response:
    """Execute a batch of tool calls sequentially.

    Args:
        tool_calls: Tool calls from the assistant message (dicts or ToolCall)
        functions: The active agent's functions
        context_variables: Run context at the start of the batch (not mutated)
        agent_name: Name of the calling agent, for events and logs
        streaming: Optional event emitter

    Returns:
        A partial Response holding the tool messages, the context delta and
        the last agent proposed by a tool (or None).
    """
    streaming = streaming or StreamingHelper()
    function_map = {f.name: f for f in functions}
    partial = Response(messages=[], agent=None, context_variables={})

    def _fail(call: ToolCall, error: str) -> None:
        logger.warning(f"Tool call '{call.function.name}' failed: {error}")
        streaming.emit_error(error, agent_name=agent_name)
        partial.messages.append(
            tool_message(call.id, call.function.name, f"Error: {error}")
        )

    for raw_call in tool_calls:
        call = ToolCall.from_dict(raw_call)
        name = call.function.name

        agent_function = function_map.get(name)
        if agent_function is None:
            _fail(call, f"Tool {name} not found.")
            continue

        try:
            arguments = _decode_arguments(call.function.arguments)
        except ValueError as e:
            _fail(call, f"Invalid arguments for tool {name}: {e}")
            continue

        logger.debug(f"Processing tool call: {name} with arguments {arguments}")
        streaming.emit_tool_call(name, dict(arguments), agent_name=agent_name)

        if agent_function.descriptor.declares(CTX_VARS_NAME):
            arguments[CTX_VARS_NAME] = copy.deepcopy(
                {**context_variables, **partial.context_variables}
            )

        try:
            validated = validate_arguments(arguments, agent_function.descriptor)
        except ValidationError as e:
            _fail(call, str(e))
            continue

        try:
            raw_result = agent_function(**validated)
            if inspect.isawaitable(raw_result):
                raw_result = await raw_result
            result = handle_function_result(raw_result)
        except Exception as e:
            _fail(call, f"Tool {name} raised {type(e).__name__}: {e}")
            continue

        partial.messages.append(tool_message(call.id, name, result.value))
        partial.context_variables.update(result.context_variables)
        if result.agent is not None:
            partial.agent = result.agent

    return partial
