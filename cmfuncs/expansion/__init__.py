"""Pattern and range expansion for cmfuncs.

Usage:
    from cmfuncs.expansion import expand, expand_range

    # Bracket expansion
    names = expand("web[01-03].lan")  # ["web01.lan", "web02.lan", "web03.lan"]

    # Range generation
    letters = expand_range("a..e")  # ["a", "b", "c", "d", "e"]
"""

from .brackets import (
    BracketExpression,
    Literal,
    Range,
    expand,
    expand_candidates,
    materialize,
    parse_bracket,
    render_value,
    scan_brackets,
)
from .ranges import expand_range, parse_index_range, string_range, string_successor

__all__ = [
    # Bracket expansion
    "expand",
    "scan_brackets",
    "parse_bracket",
    "materialize",
    "render_value",
    "expand_candidates",
    "Literal",
    "Range",
    "BracketExpression",
    # Ranges
    "expand_range",
    "parse_index_range",
    "string_range",
    "string_successor",
]
