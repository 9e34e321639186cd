"""Digest and identifier functions derived from strings."""

from __future__ import annotations

import hashlib
import uuid as _uuid
from typing import Any

from cmfuncs.coerce import require_string
from cmfuncs.errors import InvalidArgumentError
from cmfuncs.registry import register_function

FUNCTION_GROUP = "digests"

# Locally administered prefix used by KVM/QEMU guests
KVM_MAC_PREFIX = "52:54:00"


def _hexdigest(function: str, algorithm: str, value: Any) -> str:
    require_string(function, value)
    return hashlib.new(algorithm, value.encode("utf-8")).hexdigest()


@register_function(FUNCTION_GROUP)
def md5sum(value: Any) -> str:
    """Return the MD5 hex digest of a string."""
    return _hexdigest("md5sum", "md5", value)


@register_function(FUNCTION_GROUP)
def sha1sum(value: Any) -> str:
    """Return the SHA-1 hex digest of a string."""
    return _hexdigest("sha1sum", "sha1", value)


@register_function(FUNCTION_GROUP)
def sha256sum(value: Any) -> str:
    """Return the SHA-256 hex digest of a string."""
    return _hexdigest("sha256sum", "sha256", value)


@register_function(FUNCTION_GROUP)
def sha512sum(value: Any) -> str:
    """Return the SHA-512 hex digest of a string."""
    return _hexdigest("sha512sum", "sha512", value)


def _require_domain(function: str, value: Any) -> str:
    require_string(function, value)
    if not value:
        raise InvalidArgumentError(
            function, "An argument given cannot be an empty string value"
        )
    return value


@register_function(FUNCTION_GROUP)
def uuid(domain: Any) -> str:
    """Return a name-based (version 5) UUID for a domain name.

    The same name always yields the same UUID.
    """
    name = _require_domain("uuid", domain)
    return str(_uuid.uuid5(_uuid.NAMESPACE_DNS, name))


@register_function(FUNCTION_GROUP)
def kvm_mac(domain: Any) -> str:
    """Return a stable KVM guest MAC address for a domain name.

    The last three octets are bytes 0, 10 and 19 of the SHA-1 digest of the
    name, so the address is repeatable across runs.
    """
    name = _require_domain("kvm_mac", domain)
    digest = hashlib.sha1(name.encode("utf-8")).digest()
    octets = [f"{digest[i]:02X}" for i in (0, 10, 19)]
    return ":".join([KVM_MAC_PREFIX] + octets)


__all__ = [
    "md5sum",
    "sha1sum",
    "sha256sum",
    "sha512sum",
    "uuid",
    "kvm_mac",
    "KVM_MAC_PREFIX",
]
