"""Range generation for the ``range`` and ``values_at`` functions.

Ranges are written ``a..b`` (inclusive), ``a...b`` (exclusive) or ``a-b``
(inclusive). Digit-only endpoints produce integers; anything else produces a
sequence of strings where each element is the successor of the previous one
(``"a".."e"``, ``"x8".."y1"``).
"""

from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple, Union

from cmfuncs.coerce import is_numeric
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError
from cmfuncs.registry import register_function

__all__ = [
    "string_successor",
    "string_range",
    "parse_range",
    "parse_index_range",
    "expand_range",
]

_RANGE_REGEX = re.compile(r"^(\w+)(\.\.\.?|-)(\w+)$")
_INDEX_RANGE_REGEX = re.compile(r"^(-?[0-9]+)(\.{2,3}|-)(-?[0-9]+)$")

RangeValue = Union[int, str]


def _bump(char: str) -> Tuple[str, bool]:
    """Return the next character within its class and whether it wrapped."""
    if char == "z":
        return "a", True
    if char == "Z":
        return "A", True
    if char == "9":
        return "0", True
    return chr(ord(char) + 1), False


def string_successor(value: str) -> str:
    """Return the successor of ``value`` by incrementing its rightmost alphanumeric.

    Carries propagate leftwards across alphanumerics (``"az"`` -> ``"ba"``,
    ``"zz"`` -> ``"aaa"``, ``"a9"`` -> ``"b0"``). A string without any
    alphanumeric increments its last character.
    """
    if not value:
        return ""
    chars = list(value)
    positions = [i for i, c in enumerate(chars) if c.isascii() and c.isalnum()]
    if not positions:
        chars[-1] = chr(ord(chars[-1]) + 1)
        return "".join(chars)

    for index in reversed(positions):
        chars[index], wrapped = _bump(chars[index])
        if not wrapped:
            return "".join(chars)
        leftmost = index

    # Every alphanumeric wrapped: grow at the leftmost one
    first = chars[leftmost]
    chars.insert(leftmost, "1" if first == "0" else first)
    return "".join(chars)


def string_range(start: str, stop: str, exclusive: bool = False) -> List[str]:
    """Enumerate strings from ``start`` to ``stop`` by successive successors.

    Enumeration ends once ``stop`` is reached or the current value grows
    longer than ``stop``. A ``start`` sorting after a same-length ``stop``
    yields an empty list.
    """
    if len(start) == len(stop) and start > stop:
        return []
    if len(start) > len(stop):
        return []
    result: List[str] = []
    current = start
    while len(current) <= len(stop):
        if current == stop:
            if not exclusive:
                result.append(current)
            break
        result.append(current)
        current = string_successor(current)
    return result


def parse_range(text: str) -> Optional[Tuple[str, str, bool]]:
    """Split ``text`` into (start, stop, exclusive) or return None."""
    match = _RANGE_REGEX.match(text)
    if match is None:
        return None
    start, operator, stop = match.groups()
    return start, stop, operator == "..."


def parse_index_range(text: str) -> Optional[range]:
    """Parse an index range such as ``1-3``, ``-3..-1`` or ``0...2``."""
    match = _INDEX_RANGE_REGEX.match(text)
    if match is None:
        return None
    start, operator, stop = int(match.group(1)), match.group(2), int(match.group(3))
    return range(start, stop if operator == "..." else stop + 1)


def _is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _enumerate(start: Any, stop: Any, exclusive: bool) -> List[RangeValue]:
    if is_numeric(start) and is_numeric(stop):
        return list(range(int(start), int(stop) + (0 if exclusive else 1)))
    start_text, stop_text = str(start), str(stop)
    if _is_ascii_digits(start_text) and _is_ascii_digits(stop_text):
        return list(range(int(start_text), int(stop_text) + (0 if exclusive else 1)))
    return list(string_range(start_text, stop_text, exclusive))


@register_function("collections", name="range")
def expand_range(value: Any, stop: Any = None) -> List[RangeValue]:
    """Return every element between two endpoints.

    Called either with a single range string (``"1..5"``, ``"a...e"``,
    ``"1-5"``) or with explicit ``start`` and ``stop`` values, which are
    always inclusive.

    Raises:
        ArgumentTypeError: If an endpoint is neither a string nor a number.
        InvalidArgumentError: If a single argument is not a range string.
    """
    if stop is not None:
        start = value
        for endpoint in (start, stop):
            if not (isinstance(endpoint, str) or is_numeric(endpoint)):
                raise ArgumentTypeError(
                    "range", "Requires either string or numeric endpoints"
                )
        return _enumerate(start, stop, exclusive=False)

    if not isinstance(value, str):
        raise ArgumentTypeError("range", "Requires a string type to work with")
    parsed = parse_range(value.strip())
    if parsed is None:
        raise InvalidArgumentError(
            "range", "Unable to compute range from the value given"
        )
    start, stop, exclusive = parsed
    return _enumerate(start, stop, exclusive)
