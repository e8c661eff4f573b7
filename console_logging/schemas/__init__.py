"""
Logging Schemas

Pydantic models for log records and formatter options.
"""

from .log_record import Level, LogRecord
from .formatter_config import FormatterConfig, SIMPLE_FORMAT, SIMPLE_DATE

__all__ = ["Level", "LogRecord", "FormatterConfig", "SIMPLE_FORMAT", "SIMPLE_DATE"]
