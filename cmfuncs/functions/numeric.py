"""Numeric conversion functions.

Conversions between numbers, booleans and their string forms. Numbers that
arrive as strings (``"42"``, ``"-1.5"``) are accepted wherever a number is.
"""

from __future__ import annotations

import re
from typing import Any, Union

from cmfuncs.coerce import (
    FLOAT_REGEX,
    INTEGER_REGEX,
    is_numeric,
    parse_boolean,
    parse_number,
    require_string,
)
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError
from cmfuncs.registry import register_function

FUNCTION_GROUP = "numeric"

Number = Union[int, float]

_HEX_REGEX = re.compile(r"^0[xX][0-9a-fA-F]+$")
_OCTAL_REGEX = re.compile(r"^0[0-7]+$")
_FIRST_NUMBER_REGEX = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


@register_function(FUNCTION_GROUP, name="abs")
def absolute(value: Any) -> Number:
    """Return the absolute value of a number or numeric string."""
    return abs(parse_number("abs", value))


@register_function(FUNCTION_GROUP)
def bool2num(value: Any) -> int:
    """Convert a boolean or boolean-alike string into 1 or 0."""
    return 1 if parse_boolean("bool2num", value) else 0


@register_function(FUNCTION_GROUP)
def num2bool(value: Any) -> bool:
    """Return True for numbers greater than zero."""
    if isinstance(value, bool):
        return value
    return parse_number("num2bool", value) > 0


@register_function(FUNCTION_GROUP)
def num2str(value: Any) -> str:
    """Return the string form of a number."""
    if not is_numeric(value):
        raise ArgumentTypeError("num2str", "Requires a numeric type to work with")
    return str(value)


@register_function(FUNCTION_GROUP)
def str2bool(value: Any) -> bool:
    """Convert a boolean-alike string into a boolean."""
    return parse_boolean("str2bool", value)


@register_function(FUNCTION_GROUP)
def str2num(value: Any) -> Number:
    """Return the first integer or float found in a string, or 0."""
    require_string("str2num", value)
    match = _FIRST_NUMBER_REGEX.search(value)
    if match is None:
        return 0
    text = match.group(0)
    return float(text) if "." in text else int(text)


@register_function(FUNCTION_GROUP)
def to_numeric(value: Any) -> Number:
    """Convert a value into a number.

    Strings may hold a float, an integer, a hexadecimal ``0x..`` or an octal
    ``0..`` literal; the empty string converts to 0.

    Raises:
        InvalidArgumentError: If the value cannot be converted.
    """
    if is_numeric(value):
        return value
    if not isinstance(value, str):
        raise InvalidArgumentError(
            "to_numeric", "Requires a numeric or string value to work with"
        )
    text = value.strip()
    if text == "":
        return 0
    if FLOAT_REGEX.match(text):
        return float(text)
    if _HEX_REGEX.match(text):
        return int(text, 16)
    if _OCTAL_REGEX.match(text):
        return int(text, 8)
    if INTEGER_REGEX.match(text):
        return int(text)
    raise InvalidArgumentError(
        "to_numeric", f"Unable to convert value to a number: {value!r}"
    )


__all__ = [
    "absolute",
    "bool2num",
    "num2bool",
    "num2str",
    "str2bool",
    "str2num",
    "to_numeric",
]
