"""Bracket expansion for name patterns.

Provides ``expand()`` for expanding templates such as ``"web[01-03].lan"``
into ``["web01.lan", "web02.lan", "web03.lan"]``.

A template holds one or more bracket groups. Each group is a comma-separated
list of integer literals and ``start-stop`` ranges. Groups are resolved left
to right; every group multiplies the candidate set by the number of values it
produces, so the output size is the product of the per-group value counts.

Zero-padding is inferred per group from the widest literal or range endpoint
written with a leading zero (``[001-3]`` renders ``001, 002, 003``). Negative
values keep their sign in front of the padded magnitude, so ``-5`` in a
width-2 group renders as ``-05``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, Union

from cmfuncs.coerce import parse_integer
from cmfuncs.config import FUNCTION_CONFIG
from cmfuncs.errors import (
    ArgumentTypeError,
    ExpansionLimitError,
    InvalidExpressionError,
    InvalidPatternError,
    InvalidRangeError,
    InvalidStepError,
)
from cmfuncs.logging import get_logger
from cmfuncs.registry import register_function

__all__ = [
    "Literal",
    "Range",
    "BracketExpression",
    "scan_brackets",
    "parse_bracket",
    "count_values",
    "materialize",
    "render_value",
    "expand_candidates",
    "expand",
]

logger = get_logger(__name__)

FUNCTION_NAME = "bracket_expansion"

_BRACKET_REGEX = re.compile(r"\[.+?\]")
_LITERAL_REGEX = re.compile(r"^(-?[0-9]+)$")
_RANGE_REGEX = re.compile(r"^(-?[0-9]+)-(-?[0-9]+)$")


@dataclass(frozen=True)
class Literal:
    """A single integer inside a bracket."""

    value: int
    zero_padding_width: int = 0


@dataclass(frozen=True)
class Range:
    """An inclusive ``start-stop`` range inside a bracket."""

    start: int
    stop: int
    zero_padding_width: int = 0


BracketExpression = Union[Literal, Range]


def _padding_width(text: str) -> int:
    """Return the padding width implied by a number as written."""
    return len(text) if text.startswith("0") else 0


def scan_brackets(pattern: str) -> Iterator[str]:
    """Yield every ``[...]`` group in ``pattern`` from left to right.

    Args:
        pattern: Template string.

    Yields:
        Bracket groups including the brackets themselves.
    """
    for match in _BRACKET_REGEX.finditer(pattern):
        yield match.group(0)


def parse_bracket(content: str) -> List[BracketExpression]:
    """Parse the inner text of one bracket group.

    Args:
        content: Bracket content without the surrounding ``[`` and ``]``.

    Returns:
        Expressions in the order written.

    Raises:
        InvalidExpressionError: If a piece is neither an integer nor a range.
        InvalidRangeError: If a range has ``start > stop``.
    """
    expressions: List[BracketExpression] = []
    for piece in (part.strip() for part in content.split(",")):
        range_match = _RANGE_REGEX.match(piece)
        if range_match:
            start_text, stop_text = range_match.groups()
            start, stop = int(start_text), int(stop_text)
            if start > stop:
                raise InvalidRangeError(
                    FUNCTION_NAME, f"An invalid start or stop value given: {piece!r}"
                )
            width = max(_padding_width(start_text), _padding_width(stop_text))
            expressions.append(Range(start, stop, width))
            continue

        literal_match = _LITERAL_REGEX.match(piece)
        if literal_match:
            text = literal_match.group(1)
            expressions.append(Literal(int(text), _padding_width(text)))
            continue

        raise InvalidExpressionError(
            FUNCTION_NAME,
            f"An incompatible value given in bracket expansion pattern: {piece!r}",
        )
    return expressions


def count_values(expressions: List[BracketExpression], step: int = 1) -> int:
    """Return how many values ``materialize`` would produce, without building them."""
    return sum(
        len(range(e.start, e.stop + 1, step)) if isinstance(e, Range) else 1
        for e in expressions
    )


def materialize(
    expressions: List[BracketExpression], step: int = 1
) -> Tuple[List[int], int]:
    """Expand parsed expressions into integers and the group padding width.

    Args:
        expressions: Expressions of one bracket group.
        step: Increment applied to every range. Literals ignore it.

    Returns:
        Tuple of (values in production order, zero-padding width).

    Raises:
        InvalidStepError: If ``step`` is not positive.
    """
    if step <= 0:
        raise InvalidStepError(
            FUNCTION_NAME, "Requires a positive integer step to work with"
        )

    values: List[int] = []
    width = 0
    for expression in expressions:
        if isinstance(expression, Range):
            values.extend(range(expression.start, expression.stop + 1, step))
        else:
            values.append(expression.value)
        width = max(width, expression.zero_padding_width)
    return values, width


def render_value(value: int, width: int) -> str:
    """Render ``value`` zero-padded to ``width`` digits.

    The sign is kept outside the padding: ``render_value(-5, 3) == "-005"``.
    """
    if value < 0:
        return "-" + str(-value).zfill(width)
    return str(value).zfill(width)


def expand_candidates(
    candidates: List[str], values: List[int], width: int
) -> List[str]:
    """Substitute the first remaining bracket of each candidate with each value.

    Args:
        candidates: Current candidate strings, each with a bracket left.
        values: Values produced by the bracket being resolved.
        width: Zero-padding width of that bracket.

    Returns:
        New candidate list; candidate order is the outer loop and value
        order the inner loop.
    """
    rendered = [render_value(value, width) for value in values]
    return [
        _BRACKET_REGEX.sub(lambda _m, text=text: text, candidate, count=1)
        for candidate in candidates
        for text in rendered
    ]


def _coerce_step(step: Any) -> int:
    if step is None:
        return 1
    if isinstance(step, bool) or not isinstance(step, (int, float, str)):
        raise ArgumentTypeError(FUNCTION_NAME, "Requires a numeric type to work with")
    step = parse_integer(FUNCTION_NAME, step, error=InvalidStepError, non_negative=True)
    if step == 0:
        raise InvalidStepError(
            FUNCTION_NAME, "Requires a positive integer step to work with"
        )
    return step


@register_function("expansion", name=FUNCTION_NAME)
def expand(
    pattern: Any, step: Any = 1, *, limit: Optional[int] = None
) -> List[str]:
    """Expand every bracket group of a template into concrete strings.

    Args:
        pattern: Template with at least one bracket group, e.g. ``"abc[1-3]"``.
        step: Increment for ranges; an int or an integer string. Defaults to 1.
        limit: Maximum number of results. Defaults to
            ``FUNCTION_CONFIG.max_expansions``.

    Returns:
        Expanded strings in bracket-major, value-minor order.

    Raises:
        ArgumentTypeError: If ``pattern`` is not a string or ``step`` is not
            numeric.
        InvalidPatternError: If ``pattern`` is empty or has no bracket group.
        InvalidExpressionError: If a bracket piece is malformed.
        InvalidRangeError: If a bracket range is reversed.
        InvalidStepError: If ``step`` is negative, zero or non-integer.
        ExpansionLimitError: If the output would exceed ``limit``.

    Examples:
        >>> expand("def[001-3]")
        ['def001', 'def002', 'def003']
        >>> expand("xyz[1-10]", 2)
        ['xyz1', 'xyz3', 'xyz5', 'xyz7', 'xyz9']
    """
    if not isinstance(pattern, str):
        raise ArgumentTypeError(FUNCTION_NAME, "Requires a string type to work with")
    if not pattern:
        raise InvalidPatternError(
            FUNCTION_NAME, "An argument given cannot be an empty string value"
        )

    brackets = list(scan_brackets(pattern))
    if not brackets:
        raise InvalidPatternError(FUNCTION_NAME, "An invalid bracket expansion pattern")

    step = _coerce_step(step)

    candidates = [pattern]
    for bracket in brackets:
        expressions = parse_bracket(bracket[1:-1])
        size = len(candidates) * count_values(expressions, step)
        if limit is None:
            allowed, cap = (
                FUNCTION_CONFIG.check_expansion_size(size),
                FUNCTION_CONFIG.max_expansions,
            )
        else:
            allowed, cap = size <= limit, limit
        if not allowed:
            raise ExpansionLimitError(
                FUNCTION_NAME, f"Expansion would create {size} items (limit: {cap})"
            )
        values, width = materialize(expressions, step)
        candidates = expand_candidates(candidates, values, width)

    logger.debug(
        "Expanded %r: %d bracket(s), %d result(s)",
        pattern,
        len(brackets),
        len(candidates),
    )
    return candidates
