"""Function registry for the DSL call surface.

Functions register themselves with ``register_function`` under their DSL
name. The registry derives arity from the Python signature so that callers
coming from the DSL get a uniform ``ArityError`` instead of Python's own
``TypeError`` when they pass the wrong number of arguments.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar

from cmfuncs.errors import ArityError, UnknownFunctionError
from cmfuncs.logging import get_logger
from cmfuncs.scope import Scope

__all__ = [
    "FUNCTION_REGISTRY",
    "DslFunction",
    "register_function",
    "get_function",
    "call_function",
    "list_functions",
]

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class DslFunction:
    """A registered function and its calling contract.

    Attributes:
        name: DSL name used by callers.
        func: Python implementation.
        group: Library group (e.g. ``"strings"``), used for listing.
        min_args: Minimum number of DSL arguments.
        max_args: Maximum number of DSL arguments, or None when variadic.
        scoped: Whether ``func`` takes the evaluation ``Scope`` as its first
            parameter. The scope does not count towards the DSL arity.
    """

    name: str
    func: Callable[..., Any]
    group: str
    min_args: int
    max_args: Optional[int]
    scoped: bool = False

    @property
    def summary(self) -> str:
        """First line of the implementation docstring."""
        doc = inspect.getdoc(self.func) or ""
        return doc.splitlines()[0] if doc else ""

    @property
    def signature(self) -> str:
        params = list(inspect.signature(self.func).parameters.values())
        if self.scoped:
            params = params[1:]
        parts = []
        for param in params:
            if param.kind in (
                inspect.Parameter.KEYWORD_ONLY,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                parts.append(f"*{param.name}")
            elif param.default is inspect.Parameter.empty:
                parts.append(param.name)
            else:
                parts.append(f"{param.name}={param.default!r}")
        return f"{self.name}({', '.join(parts)})"

    def check_arity(self, given: int) -> None:
        """Raise ``ArityError`` unless ``given`` arguments are acceptable."""
        if given < self.min_args:
            expected = self.min_args
        elif self.max_args is not None and given > self.max_args:
            expected = self.max_args
        else:
            return
        raise ArityError(
            self.name, f"Wrong number of arguments given ({given} for {expected})"
        )

    def __call__(self, *args: Any, scope: Optional[Scope] = None) -> Any:
        self.check_arity(len(args))
        if self.scoped:
            return self.func(scope if scope is not None else Scope(), *args)
        return self.func(*args)


# Registry of DSL functions keyed by DSL name
FUNCTION_REGISTRY: Dict[str, DslFunction] = {}


def _arity(func: Callable[..., Any], scoped: bool) -> tuple[int, Optional[int]]:
    params = list(inspect.signature(func).parameters.values())
    if scoped:
        params = params[1:]
    positional = [
        p
        for p in params
        if p.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    min_args = sum(1 for p in positional if p.default is inspect.Parameter.empty)
    variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    return min_args, None if variadic else len(positional)


def register_function(
    group: str, name: Optional[str] = None, scoped: bool = False
) -> Callable[[F], F]:
    """Return a decorator that registers a function with the DSL.

    Args:
        group: Library group used for listing.
        name: DSL name; defaults to the Python function name.
        scoped: Pass the evaluation ``Scope`` as the first parameter.

    Returns:
        A decorator that adds the function to ``FUNCTION_REGISTRY`` and
        returns it unchanged.
    """

    def decorator(func: F) -> F:
        dsl_name = name or func.__name__
        min_args, max_args = _arity(func, scoped)
        FUNCTION_REGISTRY[dsl_name] = DslFunction(
            name=dsl_name,
            func=func,
            group=group,
            min_args=min_args,
            max_args=max_args,
            scoped=scoped,
        )
        return func

    return decorator


def get_function(name: str) -> DslFunction:
    """Return the registered function for ``name``.

    Raises:
        UnknownFunctionError: If nothing is registered under ``name``.
    """
    try:
        return FUNCTION_REGISTRY[name]
    except KeyError:
        raise UnknownFunctionError(name, "Unknown function") from None


def call_function(name: str, *args: Any, scope: Optional[Scope] = None) -> Any:
    """Call a registered function the way the DSL does.

    Args:
        name: DSL function name.
        *args: DSL arguments.
        scope: Evaluation scope for functions that read or bind variables.

    Returns:
        The function result.
    """
    function = get_function(name)
    logger.debug("Calling %s with %d argument(s)", name, len(args))
    return function(*args, scope=scope)


def list_functions(group: Optional[str] = None) -> List[DslFunction]:
    """Return registered functions sorted by name, optionally filtered by group."""
    return sorted(
        (f for f in FUNCTION_REGISTRY.values() if group is None or f.group == group),
        key=lambda f: f.name,
    )
