"""Argument validation against a FunctionDescriptor.

Only declared parameters pass through; unknown keys are dropped.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict

from ..registry.function_registry import FunctionDescriptor

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when tool-call arguments do not satisfy the descriptor."""

    def __init__(self, message: str, parameter: str = ""):
        super().__init__(message)
        self.parameter = parameter


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": _is_number,
    "integer": _is_integer,
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, Mapping),
    "array": lambda v: isinstance(v, (list, tuple)),
    "null": lambda v: v is None,
}


def validate_arguments(
    arguments: Mapping[str, Any],
    descriptor: FunctionDescriptor,
) -> Dict[str, Any]:
    """Check decoded arguments against a descriptor.

    Args:
        arguments: Decoded JSON arguments (possibly with context injected)
        descriptor: The function's parameter contract

    Returns:
        A new dict restricted to the descriptor's parameters.

    Raises:
        ValidationError: On a missing required parameter or a type mismatch.
    """
    validated: Dict[str, Any] = {}

    for name, spec in descriptor.parameters.items():
        value = arguments.get(name)
        # an optional parameter sent as null counts as absent
        if name not in arguments or (value is None and not spec.required):
            if spec.required:
                raise ValidationError(
                    f"Missing required parameter: {name}", parameter=name
                )
            continue

        check = _TYPE_CHECKS.get(spec.type)
        if check is None:
            logger.debug(f"No type check for '{spec.type}' on parameter '{name}'")
        elif not check(value):
            raise ValidationError(
                f"Invalid type for parameter: {name}. "
                f"Expected {spec.type}, got {type(value).__name__}",
                parameter=name,
            )
        validated[name] = value

    dropped = set(arguments) - set(descriptor.parameters)
    if dropped:
        logger.debug(f"Dropping undeclared arguments for '{descriptor.name}': {sorted(dropped)}")

    return validated
