"""Function registry and wire-schema conversion."""

from .function_registry import (
    CTX_VARS_NAME,
    AgentFunction,
    FunctionDescriptor,
    FunctionRegistry,
    ParameterSpec,
    function_from_callable,
    get_function_registry,
    register_function,
)
from .schema import hide_context_variables, to_wire_schema

__all__ = [
    "CTX_VARS_NAME",
    "AgentFunction",
    "FunctionDescriptor",
    "FunctionRegistry",
    "ParameterSpec",
    "function_from_callable",
    "get_function_registry",
    "register_function",
    "hide_context_variables",
    "to_wire_schema",
]
