"""Function library for cmfuncs.

Importing this package registers every library function with
``cmfuncs.registry``.
"""

from . import collections, digests, network, numeric, strings, system, types

__all__ = [
    "collections",
    "digests",
    "network",
    "numeric",
    "strings",
    "system",
    "types",
]
