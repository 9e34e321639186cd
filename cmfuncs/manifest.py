"""YAML manifests: load, validate and run sequences of function calls.

A manifest binds initial ``vars`` and then evaluates ``calls`` in order.
Each call names a registered function, passes ``args`` and optionally
``register``s its result as a new variable for later calls:

    vars:
      domain: example.com
    calls:
      - function: bracket_expansion
        args: ["web[01-03].${domain}"]
        register: hosts
      - function: join
        args: ["$hosts", ","]
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from cmfuncs.logging import get_logger
from cmfuncs.registry import call_function
from cmfuncs.scope import Scope
from cmfuncs.utils.yaml_utils import normalize_yaml_dict_keys

__all__ = ["CallResult", "load_manifest_yaml", "run_manifest", "resolve_argument"]

logger = get_logger(__name__)

RECOGNIZED_KEYS = frozenset({"vars", "calls"})


@dataclass
class CallResult:
    """Outcome of one manifest call.

    Attributes:
        index: Position of the call in the manifest.
        function: DSL function name.
        args: Arguments after variable resolution.
        result: Value returned by the function.
        register: Variable the result was bound to, if any.
    """

    index: int
    function: str
    args: List[Any]
    result: Any
    register: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "index": self.index,
            "function": self.function,
            "args": self.args,
            "result": self.result,
        }
        if self.register is not None:
            data["register"] = self.register
        return data


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("cmfuncs.schemas")
        .joinpath("manifest.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_manifest_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load, normalize and validate a manifest YAML string.

    Args:
        yaml_str: Manifest text.

    Returns:
        Manifest dictionary with string variable names and the schema shape
        enforced.

    Raises:
        ValueError: If the document is not a mapping or has unknown
            top-level keys.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    if isinstance(data.get("vars"), dict):
        data["vars"] = normalize_yaml_dict_keys(data["vars"])

    extra = set(map(str, data.keys())) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in manifest: {', '.join(sorted(extra))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )

    jsonschema.validate(data, _load_schema())
    return data


def resolve_argument(scope: Scope, value: Any) -> Any:
    """Resolve variable references inside a call argument.

    A string that is exactly ``$name`` or ``${name}`` becomes the variable's
    value with its native type. Other strings are interpolated. Lists and
    mappings are resolved recursively.

    Raises:
        KeyError: If a referenced variable is not bound.
    """
    if isinstance(value, str):
        resolved = scope.reference(value)
        if resolved is not value:
            return resolved
        return scope.interpolate(value, strict=True)
    if isinstance(value, list):
        return [resolve_argument(scope, item) for item in value]
    if isinstance(value, dict):
        return {key: resolve_argument(scope, item) for key, item in value.items()}
    return value


def run_manifest(
    data: Dict[str, Any], scope: Optional[Scope] = None
) -> List[CallResult]:
    """Evaluate every call of a loaded manifest in order.

    Args:
        data: Manifest as returned by ``load_manifest_yaml``.
        scope: Scope to evaluate in. A fresh one is created when omitted.

    Returns:
        One ``CallResult`` per call.

    Raises:
        FunctionError: From the first failing call; later calls do not run.
        KeyError: If an argument references an unbound variable.
    """
    scope = scope if scope is not None else Scope()
    scope.bind_all(data.get("vars") or {})

    results: List[CallResult] = []
    calls = data.get("calls") or []
    logger.info(f"Running manifest with {len(calls)} call(s)")
    for index, call in enumerate(calls):
        name = call["function"]
        args = [resolve_argument(scope, arg) for arg in call.get("args") or []]
        logger.debug(f"Call {index}: {name}")
        result = call_function(name, *args, scope=scope)

        register = call.get("register")
        if register:
            scope.bind(register, result)
        results.append(CallResult(index, name, args, result, register))
    logger.info("Manifest run completed")
    return results
