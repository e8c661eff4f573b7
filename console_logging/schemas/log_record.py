"""
Log Record Schema

Structured log records consumed by the console formatter.
"""

import logging
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Level(IntEnum):
    """Ordered severity levels, lowest first."""

    DEBUG = 100
    INFO = 200
    NOTICE = 250
    WARNING = 300
    ERROR = 400
    CRITICAL = 500
    ALERT = 550
    EMERGENCY = 600

    def get_name(self) -> str:
        """Return the display name of the level (e.g. ``"WARNING"``)."""
        return self.name

    @classmethod
    def from_logging(cls, levelno: int, levelname: Optional[str] = None) -> "Level":
        """
        Map a standard library logging level onto a severity level.

        Args:
            levelno: Numeric ``logging`` level
            levelname: Optional level name; a matching member name wins

        Returns:
            The corresponding severity level
        """
        if levelname and levelname.upper() in cls.__members__:
            return cls[levelname.upper()]

        if levelno >= logging.CRITICAL:
            return cls.CRITICAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


# Attributes every logging.LogRecord carries; anything else came from ``extra=``
STANDARD_FIELDS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName', 'processName',
    'process', 'taskName', 'message', 'asctime', 'context'
})


class LogRecord(BaseModel):
    """Immutable structured log event."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    timestamp: datetime = Field(default_factory=datetime.now, description="When the event happened")
    level: Level = Field(default=Level.INFO, description="Severity of the event")
    channel: str = Field(default="app", description="Name of the emitting channel")
    message: str = Field(default="", description="Message text, may contain {key} placeholders")
    context: Dict[str, Any] = Field(default_factory=dict, description="Values attached by the caller")
    extra: Dict[str, Any] = Field(default_factory=dict, description="Values attached by processors")

    def with_(self, **changes: Any) -> "LogRecord":
        """Return a copy of the record with the given fields replaced."""
        return self.model_copy(update=changes)

    def with_message(self, message: str) -> "LogRecord":
        """Return a copy of the record with only the message replaced."""
        return self.with_(message=message)

    @classmethod
    def from_logging(cls, record: logging.LogRecord) -> "LogRecord":
        """
        Build a structured record from a standard library log record.

        Context is read from a ``context`` attribute (``extra={"context": {...}}``),
        other non-standard attributes become ``extra``.

        Args:
            record: Standard library log record

        Returns:
            Equivalent structured record
        """
        context = dict(getattr(record, 'context', None) or {})
        if record.exc_info and record.exc_info[1] is not None:
            context.setdefault('exception', record.exc_info[1])

        extra = {}
        for attr, value in record.__dict__.items():
            if not attr.startswith('_') and attr not in STANDARD_FIELDS:
                extra[attr] = value

        return cls(
            timestamp=datetime.fromtimestamp(record.created),
            level=Level.from_logging(record.levelno, record.levelname),
            channel=record.name,
            message=record.getMessage(),
            context=context,
            extra=extra,
        )
