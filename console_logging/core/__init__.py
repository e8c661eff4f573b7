"""
Core Logging Components

Contains the LoggerFactory that wires console output into logging.
"""

from .logger_factory import LoggerFactory

__all__ = ["LoggerFactory"]
