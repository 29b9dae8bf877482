"""Wire schema conversion for tool descriptors.

Produces the ``{"type": "function", "function": {...}}`` shape the
chat-completions API expects, with the context-variables parameter
removed.
"""

import copy
from typing import Any, Dict

from .function_registry import CTX_VARS_NAME, FunctionDescriptor


def hide_context_variables(tool_schema: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of *tool_schema* without the context-variables parameter.

    The key is removed from both ``properties`` and ``required``.
    """
    hidden = copy.deepcopy(tool_schema)
    parameters = hidden.get("function", {}).get("parameters", {})
    parameters.get("properties", {}).pop(CTX_VARS_NAME, None)
    if "required" in parameters:
        parameters["required"] = [
            name for name in parameters["required"] if name != CTX_VARS_NAME
        ]
    return hidden


def to_wire_schema(descriptor: FunctionDescriptor) -> Dict[str, Any]:
    """Convert a FunctionDescriptor to the model-visible tool schema."""
    properties = {
        name: {"type": spec.type, "description": spec.description}
        for name, spec in descriptor.parameters.items()
    }
    tool_schema = {
        "type": "function",
        "function": {
            "name": descriptor.name,
            "description": descriptor.description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": descriptor.required_parameters,
            },
        },
    }
    return hide_context_variables(tool_schema)
