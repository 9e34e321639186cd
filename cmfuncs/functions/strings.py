"""String functions."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cmfuncs.coerce import is_numeric, parse_boolean, parse_integer, require_string
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError
from cmfuncs.registry import register_function

FUNCTION_GROUP = "strings"

StringOrArray = Union[str, List[Any]]


def _map_strings(
    function: str, value: Any, transform: Callable[[str], str]
) -> StringOrArray:
    """Apply ``transform`` to a string or to each string item of an array."""
    if isinstance(value, str):
        return transform(value)
    if isinstance(value, list):
        return [transform(item) if isinstance(item, str) else item for item in value]
    raise ArgumentTypeError(
        function, "Requires either array or string type to work with"
    )


@register_function(FUNCTION_GROUP)
def downcase(value: Any) -> StringOrArray:
    """Convert a string, or each string in an array, to lower case."""
    return _map_strings("downcase", value, str.lower)


@register_function(FUNCTION_GROUP)
def upcase(value: Any) -> StringOrArray:
    """Convert a string, or each string in an array, to upper case."""
    return _map_strings("upcase", value, str.upper)


@register_function(FUNCTION_GROUP)
def swapcase(value: Any) -> StringOrArray:
    """Swap the case of a string, or of each string in an array."""
    return _map_strings("swapcase", value, str.swapcase)


@register_function(FUNCTION_GROUP)
def lstrip(value: Any) -> StringOrArray:
    """Strip leading whitespace."""
    return _map_strings("lstrip", value, str.lstrip)


@register_function(FUNCTION_GROUP)
def rstrip(value: Any) -> StringOrArray:
    """Strip trailing whitespace."""
    return _map_strings("rstrip", value, str.rstrip)


@register_function(FUNCTION_GROUP)
def strip(value: Any) -> StringOrArray:
    """Strip leading and trailing whitespace."""
    return _map_strings("strip", value, str.strip)


@register_function(FUNCTION_GROUP)
def repeat(value: Any, count: Any, as_array: Any = False) -> StringOrArray:
    """Repeat a string or number ``count`` times.

    Args:
        value: String or number to repeat.
        count: Non-negative integer, or a string holding one.
        as_array: Return a list of copies instead of a joined string.

    Returns:
        Joined string, or a list when ``as_array`` is true.
    """
    if not (isinstance(value, str) or is_numeric(value)):
        raise ArgumentTypeError(
            "repeat", "Requires either string or numeric type to work with"
        )
    times = parse_integer("repeat", count, non_negative=True)
    text = str(value)
    if parse_boolean("repeat", as_array):
        return [text] * times
    return text * times


@register_function(FUNCTION_GROUP)
def strftime(format: Any, time_zone: Optional[Any] = None) -> str:
    """Format the current time.

    Args:
        format: ``strftime`` format string.
        time_zone: IANA zone name such as ``"Europe/Warsaw"``. Empty or
            omitted means UTC.

    Raises:
        InvalidArgumentError: If the zone is unknown or the format is empty.
    """
    require_string("strftime", format)
    if not format:
        raise InvalidArgumentError(
            "strftime", "An empty format string given"
        )
    if time_zone:
        require_string("strftime", time_zone, "time zone to be a string")
        try:
            zone = ZoneInfo(time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise InvalidArgumentError(
                "strftime", f"Unknown time zone given: {time_zone!r}"
            ) from exc
    else:
        zone = timezone.utc
    return datetime.now(zone).strftime(format)


__all__ = [
    "downcase",
    "upcase",
    "swapcase",
    "lstrip",
    "rstrip",
    "strip",
    "repeat",
    "strftime",
]
