"""Swarm Core - multi-agent orchestration over chat completions.

Agents pair a model with instructions and tools. A ``Swarm`` run asks the
completion service for the active agent's next message, executes the tool
calls it requests, and lets a tool hand the conversation to another agent
simply by returning that Agent.

Core Components:
- Agent: model + instructions + functions (immutable)
- AgentFunction / FunctionDescriptor: tools and their parameter contract
- Swarm: the turn loop (run / run_and_stream)
- Result / Response: tool outcome and run outcome
- AgentSession: conversation state carried between runs

Quick Start:
    from swarm_core import Agent, Swarm

    def transfer_to_haiku_agent():
        return haiku_agent

    def add(a: float, b: float) -> str:
        return str(a + b)

    haiku_agent = Agent(name="HaikuAgent", instructions="You only respond in haikus")
    helper = Agent(
        name="HelperAgent",
        instructions="You are a helpful assistant.",
        functions=[transfer_to_haiku_agent, add],
    )

    swarm = Swarm()
    response = await swarm.run(
        agent=helper,
        messages=[{"role": "user", "content": "Add 2 and 3, then pass me to the poet"}],
    )
"""

from .config import ConfigurationError, Settings, configure_logging, get_client, settings
from .models import (
    Agent,
    DynamicInstructions,
    StaticInstructions,
    FunctionCall,
    ToolCall,
    Response,
    Result,
)
from .registry import (
    CTX_VARS_NAME,
    AgentFunction,
    FunctionDescriptor,
    FunctionRegistry,
    ParameterSpec,
    function_from_callable,
    get_function_registry,
    register_function,
    to_wire_schema,
)
from .core import (
    Swarm,
    ValidationError,
    handle_function_result,
    handle_tool_calls,
    merge_chunk,
    validate_arguments,
)
from .session import AgentSession, ConversationHistory
from .services import StreamingHelper, chat, chat_streamed

__all__ = [
    # Config
    "ConfigurationError",
    "Settings",
    "configure_logging",
    "get_client",
    "settings",
    # Models
    "Agent",
    "DynamicInstructions",
    "StaticInstructions",
    "FunctionCall",
    "ToolCall",
    "Response",
    "Result",
    # Registry
    "CTX_VARS_NAME",
    "AgentFunction",
    "FunctionDescriptor",
    "FunctionRegistry",
    "ParameterSpec",
    "function_from_callable",
    "get_function_registry",
    "register_function",
    "to_wire_schema",
    # Core
    "Swarm",
    "ValidationError",
    "handle_function_result",
    "handle_tool_calls",
    "merge_chunk",
    "validate_arguments",
    # Session
    "AgentSession",
    "ConversationHistory",
    # Services
    "StreamingHelper",
    "chat",
    "chat_streamed",
]
