"""
Logging Formatters

Console line formatter and the tag renderer used for terminal output.
"""

from .console_formatter import ConsoleFormatter, CollapseNestedCaster, LEVEL_COLOR_MAP
from .output_formatter import OutputFormatter, OutputFormatterStyle, escape, strip_ansi

__all__ = [
    "ConsoleFormatter",
    "CollapseNestedCaster",
    "LEVEL_COLOR_MAP",
    "OutputFormatter",
    "OutputFormatterStyle",
    "escape",
    "strip_ansi",
]
