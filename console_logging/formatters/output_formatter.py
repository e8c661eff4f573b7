"""
Output Formatter Module

Renders the console tag syntax (``<info>text</>``, ``<fg=red;bg=white>text</>``)
into ANSI escape codes, or drops the tags for undecorated output.
"""

import re
from typing import Dict, Iterable, List, Optional

from colorama import Back, Fore, Style

TAG_REGEX = re.compile(r"<((?:[a-z][^\\<>]*)|/(?:[a-z][^\\<>]*)?)>", re.IGNORECASE)
STYLE_ATTR_REGEX = re.compile(r"([^=;]+)=([^;]+)(?:;|$)")
ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
UNESCAPE_REGEX = re.compile(r"\x00|\\<|\\>")

COLOR_NAMES = ('black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white')

OPTIONS = {
    'bold': Style.BRIGHT,
    'dim': Style.DIM,
}


def _color_code(palette, name: str) -> Optional[str]:
    if name == 'default':
        return palette.RESET
    if name in COLOR_NAMES:
        return getattr(palette, name.upper())
    if name.startswith('bright-') and name[7:] in COLOR_NAMES:
        return getattr(palette, f"LIGHT{name[7:].upper()}_EX")
    return None


class OutputFormatterStyle:
    """Foreground, background and options of one tag."""

    def __init__(
        self,
        foreground: Optional[str] = None,
        background: Optional[str] = None,
        options: Iterable[str] = ()
    ):
        """
        Initialize the style.

        Raises:
            ValueError: On an unknown color or option name
        """
        self.foreground = foreground
        self.background = background
        self.options = tuple(options)

        codes = []
        if foreground:
            code = _color_code(Fore, foreground)
            if code is None:
                raise ValueError(f"Invalid foreground color: {foreground}")
            codes.append(code)
        if background:
            code = _color_code(Back, background)
            if code is None:
                raise ValueError(f"Invalid background color: {background}")
            codes.append(code)
        for option in self.options:
            if option not in OPTIONS:
                raise ValueError(f"Invalid option: {option}")
            codes.append(OPTIONS[option])
        self._start = "".join(codes)

    def apply(self, text: str) -> str:
        if not text or not self._start:
            return text
        return self._start + text + Style.RESET_ALL


DEFAULT_STYLES = {
    'error': OutputFormatterStyle('white', 'red'),
    'info': OutputFormatterStyle('green'),
    'comment': OutputFormatterStyle('yellow'),
    'question': OutputFormatterStyle('black', 'cyan'),
}


def escape(text: str) -> str:
    """
    Escape ``<`` and ``>`` so the text is never read as a tag.

    Trailing backslashes are protected as well, otherwise they would escape
    the bracket of a following closing tag.
    """
    text = re.sub(r"(?<!\\)([<>])", r"\\\1", text)
    return escape_trailing_backslash(text)


def escape_trailing_backslash(text: str) -> str:
    if text.endswith('\\'):
        length = len(text)
        text = text.rstrip('\\').replace('\x00', '')
        text += '\x00' * (length - len(text))
    return text


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences."""
    return ANSI_REGEX.sub('', text)


class OutputFormatter:
    """Tag renderer for console output."""

    def __init__(self, decorated: bool = False, styles: Optional[Dict[str, OutputFormatterStyle]] = None):
        """
        Initialize the output formatter.

        Args:
            decorated: Render tags as ANSI codes instead of dropping them
            styles: Named styles, in addition to error, info, comment and question
        """
        self.decorated = decorated
        self.styles = dict(DEFAULT_STYLES)
        if styles:
            self.styles.update(styles)

    escape = staticmethod(escape)

    def format(self, message: str) -> str:
        """
        Render the tags of a message.

        Args:
            message: Text with tags

        Returns:
            Text with ANSI codes (decorated) or without tags (undecorated)
        """
        output: List[str] = []
        stack: List[OutputFormatterStyle] = []
        offset = 0

        for match in TAG_REGEX.finditer(message):
            pos = match.start()
            if pos and message[pos - 1] == '\\':
                continue

            output.append(self._apply(message[offset:pos], stack))
            offset = match.end()

            tag = match.group(1)
            if tag.startswith('/'):
                if not self._close(tag[1:].lower(), stack):
                    output.append(self._apply(match.group(0), stack))
                continue

            style = self._create_style(tag.lower())
            if style is None:
                output.append(self._apply(match.group(0), stack))
            else:
                stack.append(style)

        output.append(self._apply(message[offset:], stack))
        return UNESCAPE_REGEX.sub(_unescape, "".join(output))

    def _close(self, name: str, stack: List[OutputFormatterStyle]) -> bool:
        if not name:
            if stack:
                stack.pop()
            return True

        style = self._create_style(name)
        if style is None:
            return False

        for index in range(len(stack) - 1, -1, -1):
            if stack[index] is style or _same_style(stack[index], style):
                del stack[index:]
                break
        return True

    def _create_style(self, definition: str) -> Optional[OutputFormatterStyle]:
        if definition in self.styles:
            return self.styles[definition]

        attrs = STYLE_ATTR_REGEX.findall(definition)
        if not attrs:
            return None

        foreground = background = None
        options: List[str] = []
        for key, value in attrs:
            key, value = key.strip(), value.strip()
            if key == 'fg':
                foreground = value
            elif key == 'bg':
                background = value
            elif key == 'options':
                options.extend(option.strip() for option in value.split(','))
            else:
                return None

        try:
            return OutputFormatterStyle(foreground, background, options)
        except ValueError:
            return None

    def _apply(self, text: str, stack: List[OutputFormatterStyle]) -> str:
        if not self.decorated or not stack:
            return text
        return stack[-1].apply(text)


def _same_style(left: OutputFormatterStyle, right: OutputFormatterStyle) -> bool:
    return (left.foreground, left.background, left.options) == \
        (right.foreground, right.background, right.options)


def _unescape(match: "re.Match[str]") -> str:
    token = match.group(0)
    if token == '\x00':
        return '\\'
    return token[1]
