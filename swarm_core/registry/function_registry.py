"""Function Registry - Descriptors and registration for agent-callable tools.

A tool is an ``AgentFunction``: a callable paired with the
``FunctionDescriptor`` that is the only source of the parameter schema the
model sees. Descriptors can be written by hand or derived from a Python
signature with ``function_from_callable``.
"""

import inspect
import logging
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

# Parameter name through which the live context variables reach a tool.
# It is never shown to the model (see schema.hide_context_variables).
CTX_VARS_NAME = "context_variables"

_PY_TO_JSON_TYPE = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    dict: "object",
    list: "array",
    tuple: "array",
    type(None): "null",
}


@dataclass
class ParameterSpec:
    """Contract for a single tool parameter."""
    type: str = "string"
    required: bool = False
    description: str = ""


@dataclass
class FunctionDescriptor:
    """Static metadata describing a callable tool.

    ``parameters`` maps a parameter name to a ``ParameterSpec``. Plain
    dicts of the form ``{"type": ..., "required": ..., "description": ...}``
    are accepted and converted.
    """
    name: str
    description: str = ""
    parameters: Dict[str, ParameterSpec] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("FunctionDescriptor requires a name")

        converted: Dict[str, ParameterSpec] = {}
        for param_name, spec in self.parameters.items():
            if isinstance(spec, Mapping):
                if "type" not in spec:
                    raise ValueError(
                        f"Parameter '{param_name}' of '{self.name}' has no type"
                    )
                spec = ParameterSpec(
                    type=spec["type"],
                    required=bool(spec.get("required", False)),
                    description=spec.get("description", ""),
                )
            elif not isinstance(spec, ParameterSpec):
                raise ValueError(
                    f"Parameter '{param_name}' of '{self.name}' must be a "
                    f"ParameterSpec or a mapping, got {type(spec).__name__}"
                )
            converted[param_name] = spec
        self.parameters = converted

    @property
    def required_parameters(self) -> List[str]:
        return [name for name, spec in self.parameters.items() if spec.required]

    def declares(self, param_name: str) -> bool:
        return param_name in self.parameters


@dataclass
class AgentFunction:
    """A named callable exposed to the model.

    The callable is invoked with the validated arguments as keyword
    arguments. Its signature is checked against the descriptor at
    construction time.
    """
    func: Callable[..., Any]
    descriptor: FunctionDescriptor
    name: Optional[str] = None

    def __post_init__(self):
        if self.name is None:
            self.name = self.descriptor.name
        elif self.name != self.descriptor.name:
            raise ValueError(
                f"AgentFunction name '{self.name}' does not match "
                f"descriptor name '{self.descriptor.name}'"
            )
        _check_signature(self.func, self.descriptor)

    def __call__(self, **kwargs) -> Any:
        return self.func(**kwargs)


def _check_signature(func: Callable, descriptor: FunctionDescriptor) -> None:
    """Raise ValueError if *func* cannot be called with the descriptor's keys."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins and some C callables expose no signature
        return

    accepts_kwargs = False
    named: Dict[str, inspect.Parameter] = {}
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            accepts_kwargs = True
        elif param.kind in (
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        ):
            named[param.name] = param
        elif (
            param.kind is inspect.Parameter.POSITIONAL_ONLY
            and param.default is param.empty
        ):
            raise ValueError(
                f"Function '{descriptor.name}' has positional-only parameter "
                f"'{param.name}'; tools are called with keyword arguments"
            )

    for param_name in descriptor.parameters:
        if param_name not in named and not accepts_kwargs:
            raise ValueError(
                f"Function '{descriptor.name}' does not accept declared "
                f"parameter '{param_name}'"
            )

    for param_name, param in named.items():
        if param_name == CTX_VARS_NAME:
            if param.default is param.empty and not descriptor.declares(CTX_VARS_NAME):
                raise ValueError(
                    f"Function '{descriptor.name}' requires '{CTX_VARS_NAME}' "
                    f"but the descriptor does not declare it"
                )
            continue
        if param.default is not param.empty:
            continue
        spec = descriptor.parameters.get(param_name)
        if spec is None or not spec.required:
            raise ValueError(
                f"Function '{descriptor.name}' requires parameter "
                f"'{param_name}' which the descriptor does not mark as required"
            )


def _json_type(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "string"
    origin = typing.get_origin(annotation)
    if origin is Union:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _json_type(args[0])
        return "string"
    return _PY_TO_JSON_TYPE.get(origin or annotation, "string")


def function_from_callable(
    func: Callable,
    description: Optional[str] = None,
    name: Optional[str] = None,
) -> AgentFunction:
    """Build an AgentFunction by introspecting a Python callable.

    Args:
        func: The tool implementation.
        description: Overrides the docstring-derived description.
        name: Overrides ``func.__name__``.

    Returns:
        An ``AgentFunction`` whose descriptor mirrors the signature.
    """
    try:
        hints = typing.get_type_hints(func)
    except Exception:
        hints = {}

    parameters: Dict[str, ParameterSpec] = {}
    for param in inspect.signature(func).parameters.values():
        if param.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue
        if param.name == CTX_VARS_NAME:
            json_type = "object"
        else:
            json_type = _json_type(hints.get(param.name, param.annotation))
        parameters[param.name] = ParameterSpec(
            type=json_type,
            required=param.default is param.empty,
        )

    if description is None:
        doc = inspect.getdoc(func) or ""
        description = doc.split("\n\n")[0].strip()

    descriptor = FunctionDescriptor(
        name=name or func.__name__,
        description=description,
        parameters=parameters,
    )
    return AgentFunction(func=func, descriptor=descriptor)


@dataclass
class FunctionRegistry:
    """Central registry of tools available to agents."""

    _functions: Dict[str, AgentFunction] = field(default_factory=dict)

    def register(self, agent_function: AgentFunction):
        """Register a tool, replacing any tool of the same name."""
        if agent_function.name in self._functions:
            logger.debug(f"Replacing registered function '{agent_function.name}'")
        self._functions[agent_function.name] = agent_function

    def get(self, name: str) -> Optional[AgentFunction]:
        return self._functions.get(name)

    def get_functions(self, names: List[str]) -> List[AgentFunction]:
        """Resolve names to AgentFunctions, skipping unknown names."""
        functions = []
        for name in names:
            agent_function = self._functions.get(name)
            if agent_function is None:
                logger.warning(f"Function '{name}' not found in registry")
                continue
            functions.append(agent_function)
        return functions

    def list_all(self) -> List[str]:
        return list(self._functions.keys())


# Global function registry
_global_registry = FunctionRegistry()


def get_function_registry() -> FunctionRegistry:
    """Get the global function registry."""
    return _global_registry


def register_function(
    name: Optional[str] = None,
    description: Optional[str] = None,
    parameters: Optional[Dict[str, Any]] = None,
):
    """Decorator to register a tool in the global registry.

    Without ``parameters`` the descriptor is derived from the signature.

    Usage:
        @register_function(
            description="Adds two numbers together.",
            parameters={
                "a": {"type": "number", "required": True, "description": "First"},
                "b": {"type": "number", "required": True, "description": "Second"},
            },
        )
        def add(a, b):
            return str(a + b)
    """
    def decorator(func):
        if parameters is None:
            agent_function = function_from_callable(func, description, name)
        else:
            descriptor = FunctionDescriptor(
                name=name or func.__name__,
                description=description or "",
                parameters=dict(parameters),
            )
            agent_function = AgentFunction(func=func, descriptor=descriptor)
        _global_registry.register(agent_function)
        return func
    return decorator
