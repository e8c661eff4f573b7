"""
Global Pytest Configuration and Fixtures.

Shared records and formatters used across the unit tests.
"""

import datetime
from typing import Any, Dict

import pytest

from console_logging.core.logger_factory import LoggerFactory
from console_logging.formatters.console_formatter import ConsoleFormatter
from console_logging.schemas import Level, LogRecord

FIXED_TIME = datetime.datetime(2024, 1, 2, 3, 4, 5)


def make_record(**fields: Any) -> LogRecord:
    """Build a record at a fixed time; fields override the defaults."""
    values: Dict[str, Any] = {
        "timestamp": FIXED_TIME,
        "level": Level.ERROR,
        "channel": "app",
        "message": "User {id} failed",
        "context": {"id": 42},
        "extra": {},
    }
    values.update(fields)
    return LogRecord(**values)


@pytest.fixture
def record() -> LogRecord:
    return make_record()


@pytest.fixture
def plain_formatter() -> ConsoleFormatter:
    """Single-line formatter without colors."""
    return ConsoleFormatter({"colors": False})


@pytest.fixture
def multiline_formatter() -> ConsoleFormatter:
    return ConsoleFormatter({"colors": False, "multiline": True})


@pytest.fixture
def reset_logger_factory():
    """Make sure every test gets a fresh LoggerFactory singleton."""
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()
