"""cmfuncs: function library for a configuration-management DSL.

cmfuncs provides the string, collection, numeric, network and expansion
functions a configuration-management language calls while compiling node
manifests, together with a registry that exposes them under their DSL names.

Primary API:
    expand() - Expand bracket patterns such as "web[01-03].lan"
    call_function() - Call a registered function by DSL name
    Scope - Variables visible to scoped functions
    load_manifest_yaml(), run_manifest() - Evaluate YAML call manifests

Example:
    from cmfuncs import call_function, expand

    expand("node[1-3]")                   # ["node1", "node2", "node3"]
    call_function("join", ["a", "b"], ",")  # "a,b"
"""

from __future__ import annotations

from cmfuncs import logging
from cmfuncs import cli, functions
from cmfuncs._version import __version__
from cmfuncs.config import FUNCTION_CONFIG, FunctionConfig
from cmfuncs.errors import (
    ArgumentTypeError,
    ArityError,
    ExpansionLimitError,
    FunctionError,
    InvalidArgumentError,
    InvalidExpressionError,
    InvalidPatternError,
    InvalidRangeError,
    InvalidStepError,
    UnknownFunctionError,
)
from cmfuncs.expansion import expand, expand_range
from cmfuncs.manifest import CallResult, load_manifest_yaml, run_manifest
from cmfuncs.registry import (
    FUNCTION_REGISTRY,
    call_function,
    get_function,
    list_functions,
    register_function,
)
from cmfuncs.scope import Scope

__all__ = [
    # Version
    "__version__",
    # Expansion
    "expand",
    "expand_range",
    # Registry
    "FUNCTION_REGISTRY",
    "register_function",
    "get_function",
    "call_function",
    "list_functions",
    "Scope",
    # Manifests
    "CallResult",
    "load_manifest_yaml",
    "run_manifest",
    # Configuration
    "FunctionConfig",
    "FUNCTION_CONFIG",
    # Errors
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
    # Utilities
    "cli",
    "functions",
    "logging",
]
