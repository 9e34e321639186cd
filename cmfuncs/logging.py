"""Centralized logging configuration for cmfuncs."""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "cmfuncs"
LOG_LEVEL_ENV = "CMFUNCS_LOG_LEVEL"

# Flag to track if we've already set up the root logger
_ROOT_LOGGER_CONFIGURED = False


def parse_log_level(level: Union[int, str, None], default: int = logging.INFO) -> int:
    """Translate a level name or number into a ``logging`` level.

    Args:
        level: Level as an int, a name such as ``"debug"``, or None.
        default: Level returned when ``level`` is None or empty.

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If the name is not a known logging level.
    """
    if level is None or level == "":
        return default
    if isinstance(level, int):
        return level
    text = level.strip()
    if text.isascii() and text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the root cmfuncs logger with a single handler.

    Calling this more than once has no effect until ``reset_logging`` runs.

    Args:
        level: Logging level. Defaults to ``$CMFUNCS_LOG_LEVEL`` or INFO.
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stderr StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    if level is None:
        level = parse_log_level(os.environ.get(LOG_LEVEL_ENV))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # stdout carries function results, so logs go to stderr
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    # Let logs propagate to root logger so pytest can capture them
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the cmfuncs root configuration.

    Args:
        name: Logger name (typically ``__name__`` of the calling module).

    Returns:
        Logger instance.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)  # Inherit from parent
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all cmfuncs loggers and their handlers."""
    setup_root_logger()

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Enable debug logging for the entire package."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Disable debug logging, set to INFO level."""
    set_global_log_level(logging.INFO)


def reset_logging() -> None:
    """Reset logging configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


# Initialize the root logger when the module is imported
setup_root_logger()
