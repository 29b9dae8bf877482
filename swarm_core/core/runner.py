"""Turn orchestrator for multi-agent conversations.

``Swarm`` drives the loop: ask the completion service for the active
agent's next message, execute any tool calls it requests, fold context
updates and handoffs back into the run, repeat.

Two entry points share the same turn logic:
- run(): returns a Response (or the event stream when ``stream=True``)
- run_and_stream(): async generator of deltas and run notifications
"""

import copy
import logging
from enum import Enum
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Sequence

from agents import Usage

from ..config import get_client, settings
from ..models.agent import Agent
from ..models.messages import message_to_dict, system_message, to_wire_message
from ..models.outputs import Response
from ..registry.schema import to_wire_schema
from ..services.events import StreamingHelper
from .dispatch import handle_tool_calls
from .merge import MessageAccumulator
from .routing import should_switch_agent

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    RUNNING = "running"
    AWAITING_COMPLETION = "awaiting_completion"
    EXECUTING_TOOLS = "executing_tools"
    DONE = "done"


def _to_usage(completion_usage: Any) -> Usage:
    """Convert a chat-completions usage block into an SDK Usage for one request."""
    if completion_usage is None:
        return Usage(requests=1)

    usage = Usage(
        requests=1,
        input_tokens=completion_usage.prompt_tokens or 0,
        output_tokens=completion_usage.completion_tokens or 0,
        total_tokens=completion_usage.total_tokens or 0,
    )
    # detail models are the SDK defaults, updated rather than constructed
    prompt_details = getattr(completion_usage, "prompt_tokens_details", None)
    completion_details = getattr(completion_usage, "completion_tokens_details", None)
    usage.input_tokens_details = usage.input_tokens_details.model_copy(
        update={"cached_tokens": getattr(prompt_details, "cached_tokens", None) or 0}
    )
    usage.output_tokens_details = usage.output_tokens_details.model_copy(
        update={"reasoning_tokens": getattr(completion_details, "reasoning_tokens", None) or 0}
    )
    return usage


def _usage_to_dict(usage: Usage) -> Dict[str, Any]:
    return {
        "requests": usage.requests,
        "input_tokens": usage.input_tokens,
        "output_tokens": usage.output_tokens,
        "total_tokens": usage.total_tokens,
        "input_tokens_details": {
            "cached_tokens": usage.input_tokens_details.cached_tokens,
        },
        "output_tokens_details": {
            "reasoning_tokens": usage.output_tokens_details.reasoning_tokens,
        },
    }


class _RunState:
    """Mutable state owned by a single in-flight run."""

    def __init__(
        self,
        agent: Agent,
        messages: Sequence[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]],
        max_turns: Optional[int],
    ):
        self.active_agent = agent
        self.history: List[Dict[str, Any]] = copy.deepcopy(list(messages))
        self.context_variables: Dict[str, Any] = copy.deepcopy(dict(context_variables or {}))
        self.init_len = len(self.history)
        self.max_turns = max_turns
        self.turn = 0
        self.handed_off = False
        self.usage = Usage()
        self.status = RunStatus.RUNNING

    def set_status(self, status: RunStatus) -> None:
        logger.debug(f"Run status {self.status.value} -> {status.value} (turn {self.turn})")
        self.status = status

    def has_turns_left(self) -> bool:
        return self.max_turns is None or self.turn < self.max_turns

    def response(self) -> Response:
        return Response(
            messages=self.history[self.init_len:],
            agent=self.active_agent,
            context_variables=self.context_variables,
            usage=_usage_to_dict(self.usage),
        )


class Swarm:
    """Multi-agent orchestration engine.

    Usage:
        swarm = Swarm()  # reads OPENAI_API_KEY
        response = await swarm.run(
            agent=helper_agent,
            messages=[{"role": "user", "content": "What is 2 + 3?"}],
        )
        print(response.messages[-1]["content"])

    Any object exposing ``chat.completions.create`` can be passed as
    ``client`` (e.g. a preconfigured ``AsyncOpenAI`` or a test double).
    """

    def __init__(
        self,
        client: Any = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        """
        Raises:
            ConfigurationError: If no client is given and no API key is available.
        """
        self.client = client if client is not None else get_client(api_key, base_url)

    # ------------------------------------------------------------------ #
    # Completion request
    # ------------------------------------------------------------------ #

    async def get_chat_completion(
        self,
        agent: Agent,
        history: List[Dict[str, Any]],
        context_variables: Dict[str, Any],
        model_override: Optional[str] = None,
        stream: bool = False,
    ) -> Any:
        """Request the next assistant message for *agent*.

        The agent's resolved instructions are sent as the system message,
        followed by the history. Tools are omitted when the agent has none.
        """
        instructions = agent.resolve_instructions(context_variables)
        messages = [system_message(instructions)]
        messages.extend(to_wire_message(m) for m in history)
        logger.debug(f"Getting chat completion for {agent.name} with {len(messages)} messages")

        tools = [to_wire_schema(f.descriptor) for f in agent.functions]

        create_params: Dict[str, Any] = {
            "model": model_override or agent.model,
            "messages": messages,
            "stream": stream,
        }
        if stream:
            create_params["stream_options"] = {"include_usage": True}
        if tools:
            create_params["tools"] = tools
            create_params["parallel_tool_calls"] = agent.parallel_tool_calls
        if agent.tool_choice is not None:
            create_params["tool_choice"] = agent.tool_choice

        return await self.client.chat.completions.create(**create_params)

    # ------------------------------------------------------------------ #
    # Turn helpers
    # ------------------------------------------------------------------ #

    def _route(
        self,
        state: _RunState,
        available_agents: Sequence[Agent],
        streaming: StreamingHelper,
    ) -> Optional[str]:
        """Apply the keyword routing hint; returns a notice when the agent changed."""
        if not available_agents or not state.history or state.handed_off:
            return None

        last_content = state.history[-1].get("content")
        new_agent = should_switch_agent(
            last_content, state.active_agent, available_agents, state.context_variables
        )
        if new_agent is None:
            return None

        notice = f"Switching from {state.active_agent.name} to {new_agent.name}"
        logger.info(notice)
        streaming.emit_handoff(state.active_agent.name, new_agent.name, reason="routing")
        state.active_agent = new_agent
        return notice

    async def _execute_tools(
        self,
        state: _RunState,
        message: Dict[str, Any],
        streaming: StreamingHelper,
    ) -> None:
        state.set_status(RunStatus.EXECUTING_TOOLS)
        partial = await handle_tool_calls(
            message["tool_calls"],
            state.active_agent.functions,
            state.context_variables,
            agent_name=state.active_agent.name,
            streaming=streaming,
        )
        state.history.extend(partial.messages)
        state.context_variables.update(partial.context_variables)

        state.handed_off = partial.agent is not None
        if partial.agent is not None:
            logger.info(f"Handoff from {state.active_agent.name} to {partial.agent.name}")
            streaming.emit_handoff(state.active_agent.name, partial.agent.name, reason="tool")
            state.active_agent = partial.agent

    def _should_stop(self, message: Dict[str, Any], execute_tools: bool) -> bool:
        if not message.get("tool_calls") or not execute_tools:
            logger.debug("Ending turn.")
            return True
        return False

    # ------------------------------------------------------------------ #
    # Entry points
    # ------------------------------------------------------------------ #

    async def run(
        self,
        agent: Agent,
        messages: Sequence[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]] = None,
        model_override: Optional[str] = None,
        stream: bool = False,
        max_turns: Optional[int] = None,
        execute_tools: bool = True,
        available_agents: Optional[Sequence[Agent]] = None,
        event_callback: Optional[Callable] = None,
    ) -> Any:
        """Run the conversation until the agent stops calling tools.

        Args:
            agent: Starting agent
            messages: Conversation so far (not mutated)
            context_variables: Initial context (not mutated)
            model_override: Model to use instead of each agent's own
            stream: Return the ``run_and_stream`` generator instead
            max_turns: Completion budget; None means unbounded
                (or ``DEFAULT_MAX_TURNS`` when configured)
            execute_tools: When False, stop at the first assistant message
            available_agents: Candidates for keyword routing (opt-in)
            event_callback: Receives run events (see services.events)

        Returns:
            A Response, or an async iterator of stream events when
            ``stream=True``.
        """
        if stream:
            return self.run_and_stream(
                agent=agent,
                messages=messages,
                context_variables=context_variables,
                model_override=model_override,
                max_turns=max_turns,
                execute_tools=execute_tools,
                available_agents=available_agents,
                event_callback=event_callback,
            )

        if max_turns is None:
            max_turns = settings.DEFAULT_MAX_TURNS
        state = _RunState(agent, messages, context_variables, max_turns)
        streaming = StreamingHelper(event_callback)
        available_agents = available_agents or []

        while state.has_turns_left():
            self._route(state, available_agents, streaming)

            state.turn += 1
            active_agent = state.active_agent
            streaming.emit_turn_start(active_agent.name, state.turn)

            state.set_status(RunStatus.AWAITING_COMPLETION)
            completion = await self.get_chat_completion(
                active_agent,
                state.history,
                state.context_variables,
                model_override=model_override,
                stream=False,
            )
            state.usage.add(_to_usage(getattr(completion, "usage", None)))

            message = message_to_dict(completion.choices[0].message)
            message["sender"] = active_agent.name
            logger.debug(f"Received completion: {message}")
            state.history.append(message)

            if self._should_stop(message, execute_tools):
                streaming.emit_turn_complete(active_agent.name, state.turn)
                break

            await self._execute_tools(state, message, streaming)
            streaming.emit_turn_complete(
                active_agent.name, state.turn, tool_calls=len(message["tool_calls"])
            )
            state.set_status(RunStatus.RUNNING)

        state.set_status(RunStatus.DONE)
        logger.info(f"Run finished after {state.turn} turn(s) with agent {state.active_agent.name}")
        return state.response()

    async def run_and_stream(
        self,
        agent: Agent,
        messages: Sequence[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]] = None,
        model_override: Optional[str] = None,
        max_turns: Optional[int] = None,
        execute_tools: bool = True,
        available_agents: Optional[Sequence[Agent]] = None,
        event_callback: Optional[Callable] = None,
    ) -> AsyncIterator[Dict[str, Any]]:
        """Run the conversation, yielding as it goes.

        Yields, in order per turn:

            {"agent_switch": "Switching from A to B"}   # routing only
            {"delim": "start"}
            {...delta..., "sender": "A"}                # one per chunk
            {"delim": "end"}

        and finally ``{"response": Response}``.
        """
        if max_turns is None:
            max_turns = settings.DEFAULT_MAX_TURNS
        state = _RunState(agent, messages, context_variables, max_turns)
        streaming = StreamingHelper(event_callback)
        available_agents = available_agents or []

        while state.has_turns_left():
            notice = self._route(state, available_agents, streaming)
            if notice:
                yield {"agent_switch": notice}

            state.turn += 1
            active_agent = state.active_agent
            streaming.emit_turn_start(active_agent.name, state.turn)
            accumulator = MessageAccumulator(sender=active_agent.name)

            state.set_status(RunStatus.AWAITING_COMPLETION)
            completion = await self.get_chat_completion(
                active_agent,
                state.history,
                state.context_variables,
                model_override=model_override,
                stream=True,
            )

            stream_usage = None
            yield {"delim": "start"}
            async for chunk in completion:
                if getattr(chunk, "usage", None) is not None:
                    stream_usage = chunk.usage
                if not chunk.choices:
                    continue
                delta = message_to_dict(chunk.choices[0].delta)
                if delta.get("role") == "assistant":
                    delta["sender"] = active_agent.name
                accumulator.add(delta)
                yield delta
            yield {"delim": "end"}
            state.usage.add(_to_usage(stream_usage))

            message = accumulator.finalize()
            logger.debug(f"Received completion: {message}")
            state.history.append(message)

            if self._should_stop(message, execute_tools):
                streaming.emit_turn_complete(active_agent.name, state.turn)
                break

            await self._execute_tools(state, message, streaming)
            streaming.emit_turn_complete(
                active_agent.name, state.turn, tool_calls=len(message["tool_calls"])
            )
            state.set_status(RunStatus.RUNNING)

        state.set_status(RunStatus.DONE)
        yield {"response": state.response()}
