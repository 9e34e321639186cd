"""Utility helpers used across cmfuncs.

This package contains small, self-contained utilities that do not depend on
project internals.
"""

from cmfuncs.utils.yaml_utils import normalize_yaml_dict_keys

__all__ = ["normalize_yaml_dict_keys"]
