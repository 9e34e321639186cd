"""Evaluation scope holding DSL variables.

Functions that read or bind variables receive a ``Scope`` explicitly
instead of reaching into a shared interpreter state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from cmfuncs.coerce import to_dsl_string
from cmfuncs.logging import get_logger

__all__ = ["Scope", "VAR_PATTERN"]

logger = get_logger(__name__)

# Pattern to match $var or ${var} placeholders
VAR_PATTERN = re.compile(r"\$\{([a-zA-Z_][a-zA-Z0-9_]*)\}|\$([a-zA-Z_][a-zA-Z0-9_]*)")
_WHOLE_REFERENCE = re.compile(
    r"^(?:\$\{([a-zA-Z_][a-zA-Z0-9_]*)\}|\$([a-zA-Z_][a-zA-Z0-9_]*))$"
)


@dataclass
class Scope:
    """Mapping of DSL variable names to values.

    Attributes:
        variables: Current bindings.
    """

    variables: Dict[str, Any] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def lookup(self, name: str, default: Any = None) -> Any:
        return self.variables.get(name, default)

    def bind(self, name: str, value: Any) -> None:
        """Bind ``name`` to ``value``.

        DSL variables are single-assignment: rebinding a name to the same
        value is accepted, rebinding it to a different one is not.

        Raises:
            ValueError: If ``name`` is already bound to a different value.
        """
        if name in self.variables and self.variables[name] != value:
            raise ValueError(f"Cannot reassign variable '${name}'")
        self.variables[name] = value

    def bind_all(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.bind(name, value)

    def reference(self, value: str) -> Any:
        """Resolve a string that is exactly ``$name`` or ``${name}``.

        Returns the bound value with its native type, or ``value`` itself
        when it is not a bare variable reference.

        Raises:
            KeyError: If the referenced variable is not bound.
        """
        match = _WHOLE_REFERENCE.match(value)
        if match is None:
            return value
        name = match.group(1) or match.group(2)
        if name not in self.variables:
            raise KeyError(f"Variable '${name}' is not defined")
        return self.variables[name]

    def interpolate(self, template: str, strict: bool = True) -> str:
        """Substitute ``$var`` and ``${var}`` placeholders in ``template``.

        Args:
            template: String containing placeholders.
            strict: Raise on unknown variables instead of substituting ``""``.

        Returns:
            Template with variables substituted as DSL strings.

        Raises:
            KeyError: In strict mode, if a referenced variable is not bound.
        """

        def replace(match: re.Match[str]) -> str:
            name = match.group(1) or match.group(2)
            if name not in self.variables:
                if strict:
                    raise KeyError(f"Variable '${name}' is not defined")
                logger.warning("Variable '$%s' is not defined; using ''", name)
                return ""
            return to_dsl_string(self.variables[name])

        return VAR_PATTERN.sub(replace, template)
