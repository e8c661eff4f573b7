"""
Logging Handlers

Contains the console handler that renders formatted records.
"""

from .console_handler import ConsoleHandler

__all__ = ["ConsoleHandler"]
