"""Type predicates and introspection."""

from __future__ import annotations

import pprint
from typing import Any

from cmfuncs.coerce import (
    FLOAT_REGEX,
    INTEGER_REGEX,
    is_array as _is_array,
    is_hash as _is_hash,
    looks_numeric,
    parse_boolean,
    require_string,
)
from cmfuncs.config import FUNCTION_CONFIG
from cmfuncs.errors import ArgumentTypeError
from cmfuncs.registry import register_function

FUNCTION_GROUP = "types"


@register_function(FUNCTION_GROUP)
def is_array(value: Any) -> bool:
    return _is_array(value)


@register_function(FUNCTION_GROUP)
def is_hash(value: Any) -> bool:
    return _is_hash(value)


@register_function(FUNCTION_GROUP)
def is_string(value: Any) -> bool:
    """Return True for a string that does not look like a number."""
    return isinstance(value, str) and not looks_numeric(value)


@register_function(FUNCTION_GROUP)
def is_float(value: Any) -> bool:
    """Return True for a float or a string holding one (``"3.14"``)."""
    if isinstance(value, float):
        return True
    return isinstance(value, str) and bool(FLOAT_REGEX.match(value))


@register_function(FUNCTION_GROUP)
def is_downcase(value: Any) -> bool:
    """Return True if the string has no upper-case characters."""
    require_string("is_downcase", value)
    return value == value.lower()


@register_function(FUNCTION_GROUP, name="type")
def type_of(value: Any) -> str:
    """Return the DSL type name of a value.

    Strings that look like numbers report ``Integer`` or ``Float``.

    Raises:
        ArgumentTypeError: For values without a DSL type (e.g. None).
    """
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, int):
        return "Integer"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, str):
        if INTEGER_REGEX.match(value):
            return "Integer"
        if FLOAT_REGEX.match(value):
            return "Float"
        return "String"
    if _is_array(value):
        return "Array"
    if _is_hash(value):
        return "Hash"
    raise ArgumentTypeError("type", "Unknown type given")


@register_function(FUNCTION_GROUP, name="dump")
def dump_value(value: Any, indent: Any = False) -> str:
    """Return a debug rendering of a value.

    With ``indent`` set, nested structures are laid out one item per line
    wrapped at ``FUNCTION_CONFIG.dump_width``.
    """
    if parse_boolean("dump", indent):
        return pprint.pformat(value, indent=1, width=FUNCTION_CONFIG.dump_width)
    return pprint.saferepr(value)


__all__ = [
    "is_array",
    "is_hash",
    "is_string",
    "is_float",
    "is_downcase",
    "type_of",
    "dump_value",
]
