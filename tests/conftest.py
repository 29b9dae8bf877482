"""Shared fixtures for swarm_core tests."""

import json
from unittest.mock import AsyncMock, Mock

import pytest
from openai.types.chat import ChatCompletion, ChatCompletionChunk

from swarm_core.core.runner import Swarm
from swarm_core.models.agent import Agent
from swarm_core.session.agent_session import AgentSession


def _tool_call(name, arguments=None, call_id="call_1"):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments or {})
    return {
        "id": call_id,
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def _completion(content=None, tool_calls=None, usage=None):
    message = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    data = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "finish_reason": "tool_calls" if tool_calls else "stop",
                "message": message,
            }
        ],
    }
    if usage:
        data["usage"] = usage
    return ChatCompletion.model_validate(data)


def _chunk(delta=None, usage=None):
    data = {
        "id": "chatcmpl-chunk",
        "object": "chat.completion.chunk",
        "created": 0,
        "model": "gpt-4o",
        "choices": [] if delta is None else [
            {"index": 0, "delta": delta, "finish_reason": None}
        ],
    }
    if usage:
        data["usage"] = usage
    return ChatCompletionChunk.model_validate(data)


async def _stream(chunks):
    for chunk in chunks:
        yield chunk


@pytest.fixture
def make_tool_call():
    """Factory for tool-call dicts as the API returns them."""
    return _tool_call


@pytest.fixture
def make_completion():
    """Factory for real ChatCompletion objects."""
    return _completion


@pytest.fixture
def make_chunk():
    """Factory for real ChatCompletionChunk objects."""
    return _chunk


@pytest.fixture
def make_stream():
    """Wrap chunks in an async iterator, like AsyncStream."""
    return _stream


@pytest.fixture
def mock_client():
    """A stand-in for AsyncOpenAI with an awaitable completions.create."""
    client = Mock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def swarm(mock_client):
    """Swarm wired to the mock client."""
    return Swarm(client=mock_client)


@pytest.fixture
def basic_agent():
    """An agent without tools."""
    return Agent(name="HelperAgent", model="gpt-4o-mini", instructions="You are a helpful assistant.")


@pytest.fixture
def session(basic_agent):
    """Create a fresh AgentSession."""
    return AgentSession(session_id="test-session", agent=basic_agent)
