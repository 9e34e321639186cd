"""Global pytest configuration."""

from __future__ import annotations

import logging

import pytest

import cmfuncs.functions  # noqa: F401  (register the function library)


@pytest.fixture(autouse=True)
def _restore_package_log_level():
    """Keep log level changes made by CLI tests from leaking into other tests."""
    root_logger = logging.getLogger("cmfuncs")
    level = root_logger.level
    yield
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(logging.NOTSET)
