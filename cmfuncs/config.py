"""Configuration classes for cmfuncs functions."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class FunctionConfig:
    """Defaults shared by the function library."""

    # Seconds to wait for a TCP connect in is_port_open
    port_timeout: float = 2.0

    # Default MAC address layout for integer_to_mac
    mac_format: str = "__IEEE__"

    # Render MAC addresses in upper case unless told otherwise
    mac_upper_case: bool = True

    # Upper bound on bracket expansion output size; None disables the check
    max_expansions: Optional[int] = 100_000

    # Line width used by dump() when indentation is requested
    dump_width: int = 78

    def check_expansion_size(self, size: int) -> bool:
        """Return True when ``size`` candidates are within the configured limit."""
        return self.max_expansions is None or size <= self.max_expansions


# Global configuration instance
FUNCTION_CONFIG = FunctionConfig()
