"""Array and hash manipulation functions."""

from __future__ import annotations

import random
import re
from typing import Any, Dict, List, Optional

from cmfuncs.coerce import (
    FLOAT_REGEX,
    INTEGER_REGEX,
    is_array,
    is_hash,
    is_numeric,
    parse_boolean,
    parse_number,
    require_array,
    require_hash,
    require_string,
    to_dsl_string,
)
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError
from cmfuncs.expansion.ranges import parse_index_range
from cmfuncs.registry import register_function

FUNCTION_GROUP = "collections"

# Random source for shuffle(); tests may reseed it
_random = random.Random()


def _flatten(values: List[Any]) -> List[Any]:
    result: List[Any] = []
    for item in values:
        if is_array(item):
            result.extend(_flatten(item))
        else:
            result.append(item)
    return result


def _splice(values: tuple) -> List[Any]:
    """Splice array arguments and hash pairs into a single flat list."""
    result: List[Any] = []
    for value in values:
        if is_array(value):
            result.extend(value)
        elif is_hash(value):
            for key, item in value.items():
                result.extend([key, item])
        else:
            result.append(value)
    return result


@register_function(FUNCTION_GROUP, name="array")
def to_array(value: Any, *values: Any) -> List[Any]:
    """Concatenate values into one array, splicing arrays and hash pairs."""
    return _splice((value,) + values)


@register_function(FUNCTION_GROUP)
def array_intersection(one: Any, two: Any) -> List[Any]:
    """Return items present in both arrays, without duplicates.

    Order follows the first array.
    """
    require_array("array_intersection", one)
    require_array("array_intersection", two)
    result: List[Any] = []
    for item in one:
        if item in two and item not in result:
            result.append(item)
    return result


@register_function(FUNCTION_GROUP)
def compact(array: Any) -> List[Any]:
    """Return an array with empty strings and undefined elements removed."""
    require_array("compact", array)
    return [item for item in array if item is not None and item != ""]


def _character_set(text: str) -> tuple[set, bool]:
    """Parse a character set like ``a-z0`` or ``^aeiou`` into (chars, negated)."""
    negated = len(text) > 1 and text.startswith("^")
    if negated:
        text = text[1:]
    chars = set()
    i = 0
    while i < len(text):
        if i + 2 < len(text) and text[i + 1] == "-":
            low, high = ord(text[i]), ord(text[i + 2])
            chars.update(chr(c) for c in range(low, high + 1))
            i += 3
        else:
            chars.add(text[i])
            i += 1
    return chars, negated


@register_function(FUNCTION_GROUP, name="count")
def count_items(value: Any, *items: Any) -> int:
    """Return the size of a value, or how often given items occur in it.

    For strings every item is a character set (``a-z`` ranges and a leading
    ``^`` for negation are supported) and a character is counted when it
    belongs to all of them.
    """
    if not isinstance(value, (list, dict, str)):
        raise ArgumentTypeError(
            "count", "Requires either array, hash or string type to work with"
        )
    if not items:
        return len(value)
    if is_array(value):
        return value.count(items[0])
    if is_hash(value):
        return 1 if items[0] in value else 0

    sets = []
    for item in items:
        require_string("count", item, "a string character set")
        sets.append(_character_set(item))
    return sum(
        1
        for char in value
        if all((char in chars) != negated for chars, negated in sets)
    )


def _merge(base: Dict[Any, Any], override: Dict[Any, Any]) -> Dict[Any, Any]:
    merged = dict(base)
    for key, value in override.items():
        if is_hash(merged.get(key)) and is_hash(value):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@register_function(FUNCTION_GROUP)
def deep_merge(this: Any, other: Any, *others: Any) -> Dict[Any, Any]:
    """Recursively merge hashes; values from later hashes take precedence."""
    result: Dict[Any, Any] = {}
    for value in (this, other) + others:
        result = _merge(result, require_hash("deep_merge", value))
    return result


@register_function(FUNCTION_GROUP)
def delete_at(array: Any, index: Any) -> List[Any]:
    """Return a copy of the array without the element at ``index``."""
    require_array("delete_at", array, "an array")
    position = int(parse_number("delete_at", index))
    result = list(array)
    if -len(result) <= position < len(result):
        del result[position]
    return result


@register_function(FUNCTION_GROUP)
def empty(value: Any) -> bool:
    """Return True when an array, hash or string has no elements."""
    if not isinstance(value, (list, dict, str)):
        raise ArgumentTypeError(
            "empty", "Requires either array, hash or string type to work with"
        )
    return len(value) == 0


@register_function(FUNCTION_GROUP)
def flatten(array: Any) -> List[Any]:
    """Return a one-dimensional array by recursively merging sub-arrays."""
    return _flatten(require_array("flatten", array))


@register_function(FUNCTION_GROUP, name="hash")
def to_hash(value: Any, *values: Any) -> Dict[Any, Any]:
    """Build a hash from alternating keys and values."""
    items = _flatten(_splice((value,) + values))
    if len(items) % 2:
        raise InvalidArgumentError(
            "hash", "Unable to compute hash with odd number of arguments given"
        )
    try:
        return dict(zip(items[::2], items[1::2]))
    except TypeError as exc:
        raise InvalidArgumentError(
            "hash", "Unable to compute hash from arguments given"
        ) from exc


@register_function(FUNCTION_GROUP)
def invert(value: Any) -> Dict[Any, Any]:
    """Return a hash with keys and values swapped."""
    require_hash("invert", value)
    try:
        return {item: key for key, item in value.items()}
    except TypeError as exc:
        raise InvalidArgumentError(
            "invert", "Hash values must be usable as keys"
        ) from exc


@register_function(FUNCTION_GROUP)
def keys(value: Any) -> List[Any]:
    """Return the keys of a hash."""
    return list(require_hash("keys", value))


@register_function(FUNCTION_GROUP)
def last(array: Any) -> Any:
    """Return the last element of an array, or None when it is empty."""
    require_array("last", array)
    return array[-1] if array else None


@register_function(FUNCTION_GROUP)
def member(array: Any, item: Any) -> bool:
    """Return True if ``item`` is an element of the array."""
    require_array("member", array, "an array")
    if item == "":
        raise InvalidArgumentError(
            "member", "You must provide item to search for within an array given"
        )
    return item in array


def _compile(function: str, pattern: Any) -> re.Pattern:
    require_string(function, pattern)
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidArgumentError(
            function, f"An invalid regular expression pattern: {exc}"
        ) from exc


@register_function(FUNCTION_GROUP)
def reject(array: Any, pattern: Any) -> List[Any]:
    """Return elements that are not strings matching the regular expression."""
    require_array("reject", array)
    regex = _compile("reject", pattern)
    return [
        item for item in array if not (isinstance(item, str) and regex.search(item))
    ]


@register_function(FUNCTION_GROUP, name="select")
def select_matching(array: Any, pattern: Any) -> List[Any]:
    """Return string elements matching the regular expression."""
    require_array("select", array)
    regex = _compile("select", pattern)
    return [item for item in array if isinstance(item, str) and regex.search(item)]


@register_function(FUNCTION_GROUP)
def reverse(value: Any) -> Any:
    """Return an array or string with its elements in reverse order."""
    if not isinstance(value, (list, str)):
        raise ArgumentTypeError(
            "reverse", "Requires either array or string type to work with"
        )
    return value[::-1]


@register_function(FUNCTION_GROUP)
def shuffle(value: Any) -> Any:
    """Return an array or string with its elements in random order."""
    if not isinstance(value, (list, str)):
        raise ArgumentTypeError(
            "shuffle", "Requires either array or string type to work with"
        )
    items = list(value)
    _random.shuffle(items)
    return "".join(items) if isinstance(value, str) else items


@register_function(FUNCTION_GROUP, name="size")
def size_of(value: Any) -> int:
    """Return the number of elements of an array or hash, or a string's length."""
    if not isinstance(value, (list, dict, str)):
        raise ArgumentTypeError(
            "size", "Requires either array, hash or string type to work with"
        )
    return len(value)


def _indices(function: str, index: Any) -> List[int]:
    if isinstance(index, bool) or not (is_numeric(index) or isinstance(index, str)):
        raise ArgumentTypeError(
            function, "Requires a numeric value or range to work with"
        )
    if is_numeric(index):
        return [int(index)]
    text = index.strip()
    span = parse_index_range(text)
    if span is not None:
        return list(span)
    if FLOAT_REGEX.match(text):
        return [int(float(text))]
    if INTEGER_REGEX.match(text):
        return [int(text)]
    raise InvalidArgumentError(
        function, "Requires either integer or float to work with"
    )


@register_function(FUNCTION_GROUP)
def values_at(array: Any, index: Any, *indices: Any) -> List[Any]:
    """Return the elements at the given indices or index ranges.

    Indices outside the array yield None.
    """
    require_array("values_at", array, "an array")
    positions: List[int] = []
    for value in (index,) + indices:
        positions.extend(_indices("values_at", value))
    size = len(array)
    return [array[i] if -size <= i < size else None for i in positions]


@register_function(FUNCTION_GROUP, name="zip")
def zip_arrays(one: Any, two: Any, flatten: Any = False) -> List[Any]:
    """Merge two arrays by pairing elements at the same position.

    The second array is padded with None (or truncated) to the length of the
    first. With ``flatten`` set, the pairs are flattened into one array.
    """
    if not (is_array(one) and is_array(two)):
        raise ArgumentTypeError("zip", "Requires a set of two arrays to work with")
    pairs = [[item, two[i] if i < len(two) else None] for i, item in enumerate(one)]
    return _flatten(pairs) if parse_boolean("zip", flatten) else pairs


@register_function(FUNCTION_GROUP, name="join")
def join_array(array: Any, separator: Optional[Any] = None) -> str:
    """Concatenate array elements into a string using an optional separator."""
    require_array("join", array, "an array")
    if separator is not None:
        require_string("join", separator, "separator to be a string")
    return (separator or "").join(to_dsl_string(item) for item in _flatten(array))


@register_function(FUNCTION_GROUP)
def join_with_prefix(
    array: Any, prefix: Optional[Any] = None, suffix: Optional[Any] = None
) -> Any:
    """Join array elements, prefixing each one and separating them with ``suffix``.

    With only a prefix the result is an array of prefixed elements; with only a
    suffix it is a plain join.
    """
    require_array("join_with_prefix", array, "an array")
    for value in (prefix, suffix):
        if value is not None:
            require_string("join_with_prefix", value, "prefix and suffix to be strings")
    items = [to_dsl_string(item) for item in _flatten(array)]
    if prefix and suffix:
        return prefix + (suffix + prefix).join(items)
    if prefix:
        return [prefix + item for item in items]
    return (suffix or "").join(items)


def reseed(seed: Optional[int]) -> None:
    """Reseed the random source used by ``shuffle``."""
    _random.seed(seed)


__all__ = [
    "to_array",
    "array_intersection",
    "compact",
    "count_items",
    "deep_merge",
    "delete_at",
    "empty",
    "flatten",
    "to_hash",
    "invert",
    "keys",
    "last",
    "member",
    "reject",
    "select_matching",
    "reverse",
    "shuffle",
    "size_of",
    "values_at",
    "zip_arrays",
    "join_array",
    "join_with_prefix",
    "reseed",
]
