"""Example: Simple Chat Agent with a handoff

A helper agent that can add and subtract, and that hands the
conversation to a haiku-only agent when asked.

Usage:
    export OPENAI_API_KEY="your-key"
    python examples/simple_chat_agent.py
"""

import asyncio

from swarm_core import (
    Agent,
    AgentSession,
    ConfigurationError,
    Swarm,
    chat,
    configure_logging,
    get_function_registry,
    register_function,
)


# =============================================================================
# Step 1: Define Tools
# =============================================================================

@register_function(
    description="Adds two numbers together.",
    parameters={
        "a": {"type": "number", "required": True, "description": "The first number to add."},
        "b": {"type": "number", "required": True, "description": "The second number to add."},
    },
)
def add(a, b):
    return str(a + b)


@register_function(
    description="Subtracts two numbers.",
    parameters={
        "a": {"type": "number", "required": True, "description": "The first number."},
        "b": {"type": "number", "required": True, "description": "The second number."},
    },
)
def sub(a, b):
    return str(a - b)


haiku_agent = Agent(
    name="HaikuAgent",
    model="gpt-4o-mini",
    instructions="You only respond in haikus.",
)


@register_function(description="Transfers the conversation to the Haiku Agent.")
def transfer_to_haiku_agent():
    return haiku_agent


# =============================================================================
# Step 2: Define Agent
# =============================================================================

helper_agent = Agent(
    name="HelperAgent",
    model="gpt-4o-mini",
    instructions="You are a helpful assistant.",
    functions=get_function_registry().get_functions(
        ["transfer_to_haiku_agent", "add", "sub"]
    ),
)


# =============================================================================
# Step 3: Run the Agent
# =============================================================================

async def run_chat(swarm: Swarm):
    """Run an interactive chat session."""
    session = AgentSession(session_id="chat-session-1", agent=helper_agent)

    print("Type 'quit' to exit")
    while True:
        user_input = input("You: ").strip()
        if not user_input:
            continue
        if user_input.lower() == "quit":
            break

        result = await chat(swarm, user_input, session)
        if result["success"]:
            for tool in result["tools_called"]:
                print(f"{result['agent']}: {tool}()")
            print(f"{result['agent']}: {result['response']}\n")
        else:
            print(f"Error: {result['error']}\n")


async def main():
    configure_logging()
    try:
        swarm = Swarm()
    except ConfigurationError as e:
        print(e)
        return
    await run_chat(swarm)


if __name__ == "__main__":
    asyncio.run(main())
