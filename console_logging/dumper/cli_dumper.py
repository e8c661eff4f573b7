"""
CLI Dumper

Renders a cloned ``Data`` tree as text, one line at a time.
"""

import sys
from typing import Any, Callable, Optional, TextIO, Union

from colorama import Fore, Style

from .stub import Data, Stub

LineDumper = Callable[[str, int, str], None]

BRACKETS = {
    Stub.HASH_DICT: ("{", "}"),
    Stub.HASH_LIST: ("[", "]"),
    Stub.HASH_TUPLE: ("(", ")"),
    Stub.HASH_SET: ("{", "}"),
}

ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}
LINE_SEPARATORS = ("\u2028", "\u2029")


class CliDumper:
    """
    Dumper for terminals.

    Each rendered line is handed to a line dumper together with its depth.
    Once the root value is done, a final empty line with depth -1 is emitted.
    """

    # ANSI styles for the different parts of a dump
    STYLES = {
        'num': Fore.CYAN,
        'const': Fore.MAGENTA,
        'str': Fore.GREEN,
        'note': Fore.BLUE,
        'ref': Style.DIM,
        'key': Fore.YELLOW,
        'meta': Fore.MAGENTA,
        'cut': Style.DIM,
    }

    def __init__(
        self,
        output: Union[TextIO, LineDumper, None] = None,
        colors: bool = False,
        indent_pad: str = "  ",
        light_array: bool = True,
        comma_separator: bool = True
    ):
        """
        Initialize the dumper.

        Args:
            output: Text stream, or callable receiving (line, depth, indent_pad); defaults to stdout
            colors: Whether to emit ANSI styles
            indent_pad: Indentation unit for nested lines
            light_array: Omit the type prefix on lists, tuples and sets
            comma_separator: Separate sibling items with commas
        """
        self.indent_pad = indent_pad
        self.light_array = light_array
        self.comma_separator = comma_separator
        self._colors = colors
        self._ref_handles = True
        self._line = ""
        self._line_dumper: LineDumper = self._echo_line
        self._stream: Optional[TextIO] = None
        self.set_output(output)

    def set_colors(self, colors: bool) -> None:
        self._colors = bool(colors)

    def set_output(self, output: Union[TextIO, LineDumper, None]) -> None:
        """Route dumped lines to a stream or a line callback."""
        if output is None:
            output = sys.stdout

        if callable(output) and not hasattr(output, 'write'):
            self._line_dumper = output
            self._stream = None
        else:
            self._line_dumper = self._echo_line
            self._stream = output

    def dump(self, data: Data, output: Union[TextIO, LineDumper, None] = None) -> None:
        """
        Dump a cloned value.

        Args:
            data: Tree produced by ``VarCloner.clone_var``
            output: Optional output overriding the configured one for this call
        """
        previous = (self._line_dumper, self._stream)
        if output is not None:
            self.set_output(output)

        self._ref_handles = data.ref_handles
        try:
            self._dump_stub(data.root, 0, "", "")
            self._dump_line(-1)
        finally:
            self._line_dumper, self._stream = previous
            self._line = ""

    def _echo_line(self, line: str, depth: int, indent_pad: str) -> None:
        if depth != -1:
            self._stream.write(indent_pad * depth + line + "\n")

    def _dump_line(self, depth: int) -> None:
        self._line_dumper(self._line, depth, self.indent_pad)
        self._line = ""

    def _dump_stub(self, stub: Stub, depth: int, key: str, suffix: str) -> None:
        self._line += key

        if stub.type == Stub.TYPE_SCALAR:
            self._line += self._dump_scalar(stub.value) + suffix
        elif stub.type == Stub.TYPE_STRING:
            self._line += self._dump_string(stub) + suffix
        elif stub.type == Stub.TYPE_RECURSION:
            self._line += self._style('ref', "*RECURSION*") + suffix
        else:
            self._dump_compound(stub, depth, suffix)
            return

        self._dump_line(depth)

    def _dump_compound(self, stub: Stub, depth: int, suffix: str) -> None:
        if stub.type == Stub.TYPE_OBJECT:
            opening, closing = "{", "}"
            self._line += self._style('note', stub.class_name) + " " + opening
            if self._ref_handles:
                self._line += self._style('ref', f"#{stub.handle}")
        else:
            opening, closing = BRACKETS[stub.hash_type]
            if not self.light_array or stub.hash_type == Stub.HASH_SET:
                self._line += self._style('note', stub.class_name) + " "
            self._line += opening

        if stub.is_truncated:
            self._line += self._style('cut', "…") + closing + suffix
            self._dump_line(depth)
            return

        if not stub.children and not stub.cut:
            self._line += closing + suffix
            self._dump_line(depth)
            return

        self._dump_line(depth)

        last = len(stub.children) - 1
        for index, (key, child) in enumerate(stub.children):
            is_last = index == last and not stub.cut
            separator = "" if is_last or not self.comma_separator else ","
            self._dump_stub(child, depth + 1, self._dump_key(stub, key), separator)

        if stub.cut > 0:
            self._line += self._style('cut', f"…{stub.cut}")
            self._dump_line(depth + 1)

        self._line += closing + suffix
        self._dump_line(depth)

    def _dump_key(self, stub: Stub, key: Any) -> str:
        if stub.type == Stub.TYPE_OBJECT:
            return self._style('key', str(key)) + ": "
        if stub.hash_type == Stub.HASH_DICT:
            if isinstance(key, str):
                rendered = self._style('key', '"' + _escape(key) + '"')
            else:
                rendered = self._dump_scalar(key) if isinstance(key, (int, float, bool, type(None))) \
                    else self._style('key', repr(key))
            return rendered + ": "
        return ""

    def _dump_scalar(self, value: Any) -> str:
        if value is None or isinstance(value, bool):
            return self._style('const', repr(value))
        return self._style('num', repr(value))

    def _dump_string(self, stub: Stub) -> str:
        value = stub.value
        if isinstance(value, (bytes, bytearray)):
            text = 'b"' + _escape(value.decode('latin-1')) + '"'
        else:
            text = '"' + _escape(value) + '"'

        rendered = self._style('str', text)
        if stub.cut > 0:
            rendered += self._style('cut', f"…{stub.cut}")
        return rendered

    def _style(self, style: str, text: str) -> str:
        if not self._colors or not text:
            return text
        return self.STYLES[style] + text + Style.RESET_ALL


def _escape(text: str) -> str:
    out = []
    for char in text:
        if char in ESCAPES:
            out.append(ESCAPES[char])
        elif ord(char) < 0x20 or 0x7f <= ord(char) <= 0x9f:
            out.append(f"\\x{ord(char):02x}")
        elif char in LINE_SEPARATORS:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    return "".join(out)
