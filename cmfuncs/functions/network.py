"""Network address helpers.

Covers conversion between integers and IPv4/MAC addresses, address
validation, and a TCP reachability probe.

MAC layouts:
    __IEEE__       C8:2A:14:44:66:59
    __MICROSOFT__  C8-2A-14-44-66-59
    __CISCO__      C82A.1444.6659
"""

from __future__ import annotations

import ipaddress
import re
import socket
from typing import Any, Dict, Optional

from cmfuncs.coerce import is_numeric, parse_boolean, parse_integer, require_string
from cmfuncs.config import FUNCTION_CONFIG
from cmfuncs.errors import ArgumentTypeError, InvalidArgumentError
from cmfuncs.logging import get_logger
from cmfuncs.registry import register_function

logger = get_logger(__name__)

FUNCTION_GROUP = "network"

MAX_IPV4 = 2**32 - 1
MAX_MAC = 2**48 - 1

MAC_FORMATS = ("__IEEE__", "__MICROSOFT__", "__CISCO__")

_MAC_PATTERNS: Dict[str, re.Pattern] = {
    "ieee": re.compile(r"^([0-9a-fA-F]{2}[:\-]){5}[0-9a-fA-F]{2}$"),
    "cisco": re.compile(r"^([0-9a-fA-F]{4}\.){2}[0-9a-fA-F]{4}$"),
    # Sun writes octets without leading zeros
    "sun": re.compile(r"^((0|[1-9a-fA-F][0-9a-fA-F]?):){5}(0|[1-9a-fA-F][0-9a-fA-F]?)$"),
}


def _bounded_integer(function: str, value: Any, maximum: int) -> int:
    number = parse_integer(function, value, non_negative=True)
    if number > maximum:
        raise InvalidArgumentError(
            function, f"Value out of range: {number} (maximum: {maximum})"
        )
    return number


@register_function(FUNCTION_GROUP)
def integer_to_ip(value: Any) -> str:
    """Convert an integer into an IPv4 dotted quad."""
    number = _bounded_integer("integer_to_ip", value, MAX_IPV4)
    return str(ipaddress.IPv4Address(number))


@register_function(FUNCTION_GROUP)
def integer_to_mac(
    value: Any, format: Optional[Any] = None, upper_case: Optional[Any] = None
) -> str:
    """Convert an integer into a MAC address.

    Args:
        value: Integer in ``0 .. 2**48-1``.
        format: One of ``__IEEE__``, ``__MICROSOFT__`` or ``__CISCO__``.
            Defaults to ``FUNCTION_CONFIG.mac_format``.
        upper_case: Boolean-alike. Defaults to ``FUNCTION_CONFIG.mac_upper_case``.

    Raises:
        InvalidArgumentError: If the value is out of range or the format is
            unknown.
    """
    number = _bounded_integer("integer_to_mac", value, MAX_MAC)
    layout = FUNCTION_CONFIG.mac_format if format in (None, "") else format
    if layout not in MAC_FORMATS:
        raise InvalidArgumentError(
            "integer_to_mac", f"Unknown MAC address format given: {layout!r}"
        )
    upper = (
        FUNCTION_CONFIG.mac_upper_case
        if upper_case is None
        else parse_boolean("integer_to_mac", upper_case)
    )

    digits = f"{number:012x}"
    if upper:
        digits = digits.upper()
    if layout == "__CISCO__":
        return ".".join(digits[i : i + 4] for i in range(0, 12, 4))
    separator = "-" if layout == "__MICROSOFT__" else ":"
    return separator.join(digits[i : i + 2] for i in range(0, 12, 2))


@register_function(FUNCTION_GROUP)
def mac_to_integer(value: Any) -> int:
    """Convert a MAC address in any supported layout into an integer."""
    require_string("mac_to_integer", value)
    if not is_valid_mac_address(value):
        raise InvalidArgumentError(
            "mac_to_integer", f"An invalid MAC address given: {value!r}"
        )
    if "." in value:
        digits = value.replace(".", "")
    else:
        digits = "".join(octet.zfill(2) for octet in re.split(r"[:\-]", value))
    return int(digits, 16)


@register_function(FUNCTION_GROUP)
def is_valid_mac_address(value: Any) -> bool:
    """Return True for IEEE, Cisco or Sun style MAC addresses."""
    if not isinstance(value, str):
        return False
    return any(pattern.match(value) for pattern in _MAC_PATTERNS.values())


@register_function(FUNCTION_GROUP)
def is_valid_ip_address(value: Any) -> bool:
    """Return True for an IPv4 or IPv6 address."""
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


@register_function(FUNCTION_GROUP)
def is_port_open(host: Any, port: Any, timeout: Optional[Any] = None) -> bool:
    """Return True if a TCP connection to ``host:port`` succeeds.

    Args:
        host: Host name or address.
        port: Port number in ``0 .. 65535``.
        timeout: Seconds to wait; defaults to ``FUNCTION_CONFIG.port_timeout``.

    Returns:
        False on refusal, timeout or name resolution failure.
    """
    require_string("is_port_open", host, "host to be a string")
    number = _bounded_integer("is_port_open", port, 65535)
    if timeout is None:
        seconds = FUNCTION_CONFIG.port_timeout
    elif is_numeric(timeout):
        seconds = float(timeout)
    elif isinstance(timeout, str):
        try:
            seconds = float(timeout)
        except ValueError as exc:
            raise InvalidArgumentError(
                "is_port_open", f"An invalid timeout given: {timeout!r}"
            ) from exc
    else:
        raise ArgumentTypeError(
            "is_port_open", "Requires timeout to be a numeric type"
        )
    if seconds <= 0:
        raise InvalidArgumentError(
            "is_port_open", "Requires a positive timeout to work with"
        )

    try:
        with socket.create_connection((host, number), timeout=seconds):
            pass
    except OSError as exc:
        logger.debug("Port %s:%d is closed: %s", host, number, exc)
        return False
    logger.debug("Port %s:%d is open", host, number)
    return True


__all__ = [
    "integer_to_ip",
    "integer_to_mac",
    "mac_to_integer",
    "is_valid_mac_address",
    "is_valid_ip_address",
    "is_port_open",
    "MAC_FORMATS",
]
