"""Functions that touch the file system or the evaluation scope.

``fact`` and ``load_variables`` are registered as scoped functions: they
receive the caller's ``Scope`` as their first parameter.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from cmfuncs.coerce import is_hash, require_string
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError
from cmfuncs.logging import get_logger
from cmfuncs.registry import register_function
from cmfuncs.scope import Scope

logger = get_logger(__name__)

FUNCTION_GROUP = "system"


@register_function(FUNCTION_GROUP, name="exists")
def path_exists(path: Any) -> bool:
    """Return True if a file or directory exists (``~`` is expanded)."""
    require_string("exists", path)
    return Path(path).expanduser().exists()


@register_function(FUNCTION_GROUP, scoped=True)
def fact(scope: Scope, name: Any, *names: Any) -> Any:
    """Look up variables by name.

    Names may be strings or arrays of strings. Unknown variables read as
    ``""``. One name returns a single value; more return a list.
    """
    requested: List[str] = []
    for value in (name,) + names:
        items = value if isinstance(value, list) else [value]
        for item in items:
            requested.append(require_string("fact", item, "names to be strings"))
    values = [scope.lookup(item.lstrip("$"), "") for item in requested]
    return values[0] if len(values) == 1 else values


def _interpolate(scope: Scope, value: Any) -> Any:
    if isinstance(value, str):
        return scope.interpolate(value, strict=False)
    if isinstance(value, list):
        return [_interpolate(scope, item) for item in value]
    if is_hash(value):
        return {key: _interpolate(scope, item) for key, item in value.items()}
    return value


@register_function(FUNCTION_GROUP, scoped=True)
def load_variables(
    scope: Scope, path: Any, key: Optional[Any] = None
) -> Dict[str, Any]:
    """Load variables from a YAML file and bind them into the scope.

    Args:
        scope: Evaluation scope receiving the variables.
        path: YAML file holding a mapping.
        key: Optional top-level key whose mapping is loaded instead.

    Returns:
        The loaded variables, or an empty mapping when the file is missing
        or ``key`` does not select a mapping.

    Raises:
        InvalidArgumentError: If the file does not hold a mapping.
    """
    require_string("load_variables", path)
    if key is not None:
        require_string("load_variables", key, "key to be a string")

    file_path = Path(os.path.expanduser(path))
    if not file_path.is_file():
        logger.warning("Variables file not found: %s", file_path)
        return {}

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise InvalidArgumentError(
            "load_variables", f"Unable to parse YAML in {file_path}: {exc}"
        ) from exc

    if data is None:
        data = {}
    if key:
        selected = data.get(key) if is_hash(data) else None
        if not is_hash(selected):
            logger.warning("Key %r does not hold a mapping in %s", key, file_path)
            return {}
        data = selected
    if not is_hash(data):
        raise InvalidArgumentError(
            "load_variables", f"Variables must be a mapping in {file_path}"
        )

    variables = _interpolate(scope, data)
    for name in variables:
        if not isinstance(name, str):
            raise ArgumentTypeError(
                "load_variables", f"Variable names must be strings, got {name!r}"
            )
    scope.bind_all(variables)
    logger.debug("Loaded %d variable(s) from %s", len(variables), file_path)
    return variables


__all__ = ["path_exists", "fact", "load_variables"]
