"""Tests for agents, messages and run outputs."""

import pytest

from swarm_core.models.agent import Agent, DynamicInstructions, StaticInstructions
from swarm_core.models.messages import (
    ToolCall,
    message_to_dict,
    to_wire_message,
    tool_message,
    user_message,
)
from swarm_core.models.outputs import Response, Result
from swarm_core.registry.function_registry import AgentFunction


# -- Agent --------------------------------------------------------------------


class TestAgent:
    def test_defaults(self):
        agent = Agent()
        assert agent.name == "Agent"
        assert agent.model == "gpt-4o"
        assert agent.resolve_instructions({}) == "You are a helpful agent."
        assert agent.functions == ()
        assert agent.tool_choice is None
        assert agent.parallel_tool_calls is True

    def test_string_instructions_are_static(self):
        agent = Agent(instructions="Be brief.")
        assert isinstance(agent.instructions, StaticInstructions)

    def test_callable_instructions_are_dynamic(self):
        agent = Agent(instructions=lambda ctx: f"User is {ctx['user']}")
        assert isinstance(agent.instructions, DynamicInstructions)
        assert agent.resolve_instructions({"user": "ada"}) == "User is ada"

    def test_dynamic_instructions_get_a_copy(self):
        def sneaky(ctx):
            ctx["mutated"] = True
            return "ok"

        ctx = {}
        Agent(instructions=sneaky).resolve_instructions(ctx)
        assert ctx == {}

    def test_dynamic_instructions_get_a_deep_copy(self):
        def sneaky(ctx):
            ctx["prefs"]["theme"] = "dark"
            return "ok"

        ctx = {"prefs": {"theme": "light"}}
        Agent(instructions=sneaky).resolve_instructions(ctx)
        assert ctx == {"prefs": {"theme": "light"}}

    def test_dynamic_instructions_must_return_str(self):
        agent = Agent(instructions=lambda ctx: 42)
        with pytest.raises(TypeError, match="expected str"):
            agent.resolve_instructions({})

    def test_invalid_instructions(self):
        with pytest.raises(TypeError):
            Agent(instructions=42)

    def test_callables_wrapped_as_functions(self):
        def greet(name: str):
            return f"hi {name}"

        agent = Agent(functions=[greet])
        assert isinstance(agent.functions[0], AgentFunction)
        assert agent.functions[0].name == "greet"

    def test_invalid_function(self):
        with pytest.raises(TypeError):
            Agent(functions=["not callable"])

    def test_immutable(self):
        agent = Agent(name="A")
        with pytest.raises(AttributeError):
            agent.name = "B"

    def test_identity_equality(self):
        assert Agent(name="A") != Agent(name="A")


# -- Messages -----------------------------------------------------------------


class TestMessages:
    def test_tool_call_from_dict(self):
        call = ToolCall.from_dict(
            {"id": "c1", "type": "function", "function": {"name": "add", "arguments": "{}"}}
        )
        assert call.id == "c1"
        assert call.function.name == "add"
        assert call.to_dict() == {
            "id": "c1",
            "type": "function",
            "function": {"name": "add", "arguments": "{}"},
        }

    def test_tool_call_from_object(self, make_completion, make_tool_call):
        completion = make_completion(tool_calls=[make_tool_call("add", {"a": 1})])
        call = ToolCall.from_dict(completion.choices[0].message.tool_calls[0])
        assert call.function.name == "add"
        assert call.function.arguments == '{"a": 1}'

    def test_tool_message(self):
        assert tool_message("c1", "add", "3") == {
            "role": "tool",
            "tool_call_id": "c1",
            "tool_name": "add",
            "content": "3",
        }

    def test_to_wire_message_strips_local_keys(self):
        message = {"role": "assistant", "content": "hi", "sender": "A", "function_call": None}
        assert to_wire_message(message) == {"role": "assistant", "content": "hi"}

    def test_message_to_dict_copies_mapping(self):
        original = user_message("hi")
        copied = message_to_dict(original)
        copied["content"] = "changed"
        assert original["content"] == "hi"

    def test_message_to_dict_from_pydantic(self, make_completion):
        message = message_to_dict(make_completion("Hello").choices[0].message)
        assert message == {"role": "assistant", "content": "Hello"}


# -- Outputs ------------------------------------------------------------------


class TestResult:
    def test_defaults(self):
        result = Result()
        assert result.value == ""
        assert result.agent is None
        assert result.context_variables == {}

    def test_value_must_be_str(self):
        with pytest.raises(TypeError):
            Result(value=5)


class TestResponse:
    def test_last_content(self):
        response = Response(messages=[
            {"role": "assistant", "content": "first"},
            {"role": "tool", "content": "x"},
            {"role": "assistant", "content": "second"},
            {"role": "assistant", "content": None, "tool_calls": []},
        ])
        assert response.last_content == "second"

    def test_last_content_empty(self):
        assert Response().last_content == ""

    def test_to_dict(self):
        agent = Agent(name="A")
        response = Response(messages=[], agent=agent, context_variables={"k": 1})
        assert response.to_dict() == {
            "messages": [],
            "agent": "A",
            "context_variables": {"k": 1},
        }

    def test_to_dict_with_usage(self):
        response = Response(usage={"requests": 1})
        assert response.to_dict()["usage"] == {"requests": 1}
