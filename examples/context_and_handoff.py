"""Example: context variables, dynamic instructions and streaming

Shows a tool that reads the run's context variables, a tool that
updates them through a Result, and instructions computed from context.

Usage:
    export OPENAI_API_KEY="your-key"
    python examples/context_and_handoff.py
"""

import asyncio

from swarm_core import Agent, Result, Swarm, configure_logging


def greeting_instructions(context_variables):
    name = context_variables.get("user_name", "there")
    return f"You are a concierge. Greet the user as {name} and help them book a table."


def lookup_reservation(context_variables):
    """Look up the user's current reservation."""
    reservation = context_variables.get("reservation")
    return reservation or "No reservation on file."


def book_table(time: str, guests: int):
    """Book a table for the given time and party size."""
    booking = f"{guests} guests at {time}"
    return Result(
        value=f"Booked: {booking}",
        context_variables={"reservation": booking},
    )


concierge = Agent(
    name="Concierge",
    instructions=greeting_instructions,
    functions=[lookup_reservation, book_table],
)


async def main():
    configure_logging("WARNING")
    swarm = Swarm()

    stream = swarm.run_and_stream(
        agent=concierge,
        messages=[{"role": "user", "content": "Book me a table for 2 at 8pm"}],
        context_variables={"user_name": "Sam"},
    )
    async for chunk in stream:
        if chunk.get("content"):
            print(chunk["content"], end="", flush=True)
        if "response" in chunk:
            response = chunk["response"]
            print(f"\n\ncontext: {response.context_variables}")


if __name__ == "__main__":
    asyncio.run(main())
