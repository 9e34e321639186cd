"""Argument coercion helpers shared by DSL functions.

The host DSL represents most scalars as strings, so numbers and booleans
often arrive as ``"42"`` or ``"yes"``. These helpers are the single place
where such loosely typed values are validated and converted; functions call
them at their boundary and work with native Python values afterwards.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Type, Union

from cmfuncs.errors import ArgumentTypeError, FunctionError, InvalidArgumentError

__all__ = [
    "FLOAT_REGEX",
    "INTEGER_REGEX",
    "is_numeric",
    "is_array",
    "is_hash",
    "looks_numeric",
    "parse_boolean",
    "parse_integer",
    "parse_number",
    "require_array",
    "require_hash",
    "require_string",
    "to_dsl_string",
]

FLOAT_REGEX = re.compile(r"^-?(?:[0-9]+)(?:\.[0-9]+)$")
INTEGER_REGEX = re.compile(r"^-?[0-9]+$")

_TRUE_WORDS = frozenset({"1", "t", "y", "true", "yes"})
_FALSE_WORDS = frozenset({"", "0", "f", "n", "false", "no", "undef", "undefined"})

Number = Union[int, float]


def is_numeric(value: Any) -> bool:
    """Return True for ints and floats, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def is_hash(value: Any) -> bool:
    return isinstance(value, dict)


def looks_numeric(value: str) -> bool:
    """Return True if a string would be read as a number by the DSL."""
    return bool(FLOAT_REGEX.match(value) or INTEGER_REGEX.match(value))


def require_string(function: str, value: Any, what: str = "a string type") -> str:
    if not isinstance(value, str):
        raise ArgumentTypeError(function, f"Requires {what} to work with")
    return value


def require_array(function: str, value: Any, what: str = "an array type") -> List[Any]:
    if not is_array(value):
        raise ArgumentTypeError(function, f"Requires {what} to work with")
    return value


def require_hash(function: str, value: Any, what: str = "a hash type") -> Dict[Any, Any]:
    if not is_hash(value):
        raise ArgumentTypeError(function, f"Requires {what} to work with")
    return value


def parse_boolean(function: str, value: Any) -> bool:
    """Convert a boolean or boolean-alike string into ``bool``.

    Accepted true forms are ``1``, ``t``, ``y``, ``true`` and ``yes``; false
    forms are ``0``, ``f``, ``n``, ``false``, ``no``, the empty string and
    ``undef``/``undefined``. Matching is case-insensitive.

    Raises:
        ArgumentTypeError: If ``value`` is neither a bool nor a string.
        InvalidArgumentError: If the string is not a recognised boolean word.
    """
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise ArgumentTypeError(
            function, "Requires either boolean type or string value to work with"
        )
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise InvalidArgumentError(function, "Unknown type of boolean given")


def parse_integer(
    function: str,
    value: Any,
    error: Type[FunctionError] = InvalidArgumentError,
    non_negative: bool = False,
) -> int:
    """Convert an int or an integer-looking string into ``int``.

    Args:
        function: DSL name used in error messages.
        value: Value to convert.
        error: Error class raised for a value that is not an integer.
        non_negative: Reject values below zero with ``error``.

    Raises:
        ArgumentTypeError: If ``value`` is neither numeric nor a string.
    """
    if isinstance(value, bool) or not (is_numeric(value) or isinstance(value, str)):
        raise ArgumentTypeError(function, "Requires a numeric type to work with")
    if isinstance(value, float):
        raise error(function, "Requires an integer value to work with")
    if isinstance(value, str):
        if not INTEGER_REGEX.match(value.strip()):
            raise error(function, "Requires an integer value to work with")
        value = int(value.strip())
    if non_negative and value < 0:
        raise error(function, "Requires a non-negative integer value to work with")
    return value


def parse_number(function: str, value: Any) -> Number:
    """Convert a number or a numeric string into ``int`` or ``float``.

    Raises:
        ArgumentTypeError: If ``value`` is neither numeric nor a string.
        InvalidArgumentError: If the string is not an integer or a float.
    """
    if is_numeric(value):
        return value
    if not isinstance(value, str):
        raise ArgumentTypeError(function, "Requires a numeric type to work with")
    text = value.strip()
    if FLOAT_REGEX.match(text):
        return float(text)
    if INTEGER_REGEX.match(text):
        return int(text)
    raise InvalidArgumentError(
        function, "Requires either integer or float value to work with"
    )


def to_dsl_string(value: Any) -> str:
    """Render a value the way the DSL prints scalars.

    ``None`` becomes the empty string and booleans become ``true``/``false``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
