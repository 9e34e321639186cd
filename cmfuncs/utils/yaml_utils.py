"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Normalize dictionary keys from YAML parsing to plain strings.

    YAML 1.1 reads unquoted ``yes``/``no``/``on``/``off`` keys as booleans and
    bare digits as integers. DSL variable names are always strings, so such
    keys are converted with ``str()`` (booleans become ``"True"``/``"False"``).

    Args:
        data: Mapping that may contain non-string keys.

    Returns:
        Mapping with every key converted to a string.

    Examples:
        >>> normalize_yaml_dict_keys({True: "a", 8080: "b", "name": "c"})
        {'True': 'a', '8080': 'b', 'name': 'c'}
    """
    return {str(key): value for key, value in data.items()}
