"""
Console Logging

Formats structured log records into colorized, human-readable console lines,
with placeholder interpolation and pretty-printed context.
"""

from .schemas import FormatterConfig, Level, LogRecord
from .formatters import ConsoleFormatter, OutputFormatter
from .handlers import ConsoleHandler
from .core import LoggerFactory

__version__ = "1.0.0"
__all__ = ["ConsoleFormatter", "OutputFormatter", "ConsoleHandler", "LoggerFactory", "FormatterConfig", "Level", "LogRecord"]
