"""
Console Handler Module

Provides a stream handler that renders console tags for the terminal.
"""

import logging
import sys
from typing import TextIO, Optional

import colorama

from ..formatters.output_formatter import OutputFormatter


class ConsoleHandler(logging.StreamHandler):
    """
    Stream handler for console-formatted records.

    Tags in the formatted line are turned into ANSI codes when the stream
    supports colors, and removed otherwise.
    """

    # The line template carries its own newline
    terminator = ""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        auto_flush: bool = True,
        encoding: Optional[str] = None,
        decorated: Optional[bool] = None
    ):
        """
        Initialize the console handler.

        Args:
            stream: Output stream (defaults to stdout)
            auto_flush: Whether to flush after each write
            encoding: Stream encoding
            decorated: Force tag rendering on or off; detected from the stream when None
        """
        if stream is None:
            stream = sys.stdout

        super().__init__(stream)

        self.auto_flush = auto_flush
        self.encoding = encoding or getattr(stream, 'encoding', None) or 'utf-8'
        self._decorated = decorated
        self.output = OutputFormatter(decorated=self.decorated)

        if self.output.decorated:
            colorama.just_fix_windows_console()

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the record and render its tags.

        Args:
            record: Log record to format

        Returns:
            Text ready to be written to the stream
        """
        return self.output.format(super().format(record))

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a record, falling back to stderr if the stream fails.

        Args:
            record: Log record to emit
        """
        try:
            msg = self.format(record)
            self.stream.write(msg + self.terminator)

            if self.auto_flush:
                self.flush()

        except RecursionError:
            raise
        except Exception:
            self._handle_emit_error(record)

    def _handle_emit_error(self, record: logging.LogRecord) -> None:
        """
        Handle emission errors by attempting fallback to stderr.

        Args:
            record: Log record that failed to emit
        """
        if self.stream is not sys.stderr:
            try:
                sys.stderr.write(f"Console logging failed, falling back to stderr: {record.getMessage()}\n")
                sys.stderr.flush()
            except OSError:
                pass
        self.handleError(record)

    @property
    def is_tty(self) -> bool:
        """
        Check if the stream is connected to a TTY.

        Returns:
            True if connected to a terminal
        """
        return hasattr(self.stream, 'isatty') and self.stream.isatty()

    @property
    def supports_color(self) -> bool:
        """
        Check if the stream supports ANSI color codes.

        Returns:
            True if colors are supported
        """
        return self.is_tty and self.encoding.lower() in ('utf-8', 'utf8')

    @property
    def decorated(self) -> bool:
        """Whether tags are rendered as ANSI codes."""
        if self._decorated is None:
            return self.supports_color
        return self._decorated

    def set_stream(self, stream: TextIO) -> Optional[TextIO]:
        """
        Change the output stream.

        Args:
            stream: New output stream

        Returns:
            The previous stream, or None if unchanged
        """
        previous = super().setStream(stream)
        self.encoding = getattr(stream, 'encoding', None) or 'utf-8'
        self.output.decorated = self.decorated
        return previous
