"""Error hierarchy for DSL functions.

Every failure raised by a function is a ``FunctionError`` carrying the DSL
name of the function and a short message. The rendered message follows the
host DSL convention ``"<name>(): <message>"`` so it can be surfaced verbatim.
"""

from __future__ import annotations

__all__ = [
    "FunctionError",
    "ArityError",
    "ArgumentTypeError",
    "InvalidArgumentError",
    "InvalidPatternError",
    "InvalidExpressionError",
    "InvalidRangeError",
    "InvalidStepError",
    "ExpansionLimitError",
    "UnknownFunctionError",
]


class FunctionError(ValueError):
    """Base class for all user-input failures raised by DSL functions.

    Attributes:
        function: DSL name of the failing function.
        message: Message without the function prefix.
    """

    def __init__(self, function: str, message: str) -> None:
        self.function = function
        self.message = message
        super().__init__(f"{function}(): {message}")


class ArityError(FunctionError, TypeError):
    """Wrong number of arguments supplied to a function."""


class ArgumentTypeError(FunctionError, TypeError):
    """An argument has the wrong shape (e.g. a hash where a string is required)."""


class InvalidArgumentError(FunctionError):
    """An argument has the right type but an unusable value."""


class InvalidPatternError(InvalidArgumentError):
    """Empty bracket pattern or no bracket group found."""


class InvalidExpressionError(InvalidArgumentError):
    """A bracket piece is neither an integer nor a ``start-stop`` range."""


class InvalidRangeError(InvalidArgumentError):
    """A bracket range has ``start > stop``."""


class InvalidStepError(InvalidArgumentError):
    """Step is negative, zero, or not an integer."""


class ExpansionLimitError(InvalidArgumentError):
    """Expansion would produce more candidates than the configured limit."""


class UnknownFunctionError(FunctionError, LookupError):
    """No function registered under the requested name."""
