"""
Console Formatter Module

Formats structured log records into colorized, human-readable console lines.
"""

import io
import logging
import re
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from ..dumper import CliDumper, Data, Stub, VarCloner, is_atomic_value
from ..schemas import FormatterConfig, Level, LogRecord
from .output_formatter import escape

# Tag opened before the level name, one per severity
LEVEL_COLOR_MAP = MappingProxyType({
    Level.DEBUG: 'fg=white',
    Level.INFO: 'fg=green',
    Level.NOTICE: 'fg=blue',
    Level.WARNING: 'fg=cyan',
    Level.ERROR: 'fg=yellow',
    Level.CRITICAL: 'fg=red',
    Level.ALERT: 'fg=red',
    Level.EMERGENCY: 'fg=white;bg=red',
})

def replace_tokens(text: str, replacements: Mapping[str, str]) -> str:
    """
    Replace literal tokens in a single pass.

    Longer tokens win over shorter ones sharing a prefix, and replaced text is
    never scanned again.
    """
    if not replacements:
        return text
    tokens = sorted(replacements, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: replacements[match.group(0)], text)


class CollapseNestedCaster:
    """
    Caster that keeps single-line dumps one level deep.

    Nested compound values other than dates and other single-value objects
    (enum members, decimals, UUIDs, paths) are cut down to a placeholder
    unless multiline output is enabled.
    """

    def __init__(self, multiline: bool):
        self.multiline = multiline

    def cast(self, value: Any, fields: Dict[Any, Any], stub: Stub, is_nested: bool) -> Dict[Any, Any]:
        if self.multiline:
            return fields

        if is_nested and not is_atomic_value(value):
            stub.cut = Stub.CUT_TRUNCATED
            return {}

        return fields


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter coloring lines by log level.

    Context and extra values are pretty-printed with the value dumper, and
    ``{key}`` placeholders in the message are replaced by context values.
    Instances keep a scratch buffer between calls, so one instance must not
    format from several threads at once without a lock.
    """

    def __init__(self, options: Optional[Union[Mapping[str, Any], FormatterConfig]] = None):
        """
        Initialize the console formatter.

        Args:
            options: Formatter options merged over the defaults (see ``FormatterConfig``)
        """
        super().__init__()
        if isinstance(options, FormatterConfig):
            self.config = options
        else:
            self.config = FormatterConfig.from_options(options)

        self._cloner: Optional[VarCloner] = None
        self._dumper: Optional[CliDumper] = None
        self._output_buffer = io.StringIO()

        if self.config.dump_values:
            self._cloner = VarCloner(casters=[CollapseNestedCaster(self.config.multiline)])
            if self.config.multiline:
                output = self._output_buffer
            else:
                output = self.echo_line
            self._dumper = CliDumper(output, light_array=True, comma_separator=True)

    def format_batch(self, records: Iterable[Union[LogRecord, logging.LogRecord]]) -> List[str]:
        """
        Format several records, each independently.

        Args:
            records: Records to format

        Returns:
            Formatted lines, in input order
        """
        return [self.format(record) for record in records]

    def format(self, record: Union[LogRecord, logging.LogRecord]) -> str:
        """
        Format one record for console output.

        Args:
            record: Structured record, or a standard library record to convert

        Returns:
            The formatted line, still carrying console tags
        """
        if isinstance(record, logging.LogRecord):
            record = LogRecord.from_logging(record)

        record = self.replace_placeholders(record)

        separator = "\n" if self.config.multiline else " "
        ignore_empty = self.config.ignore_empty_context_and_extra

        if not ignore_empty or record.context:
            context = separator + self.dump_data(record.context)
        else:
            context = ''

        if not ignore_empty or record.extra:
            extra = separator + self.dump_data(record.extra)
        else:
            extra = ''

        return replace_tokens(self.config.format, {
            '%datetime%': record.timestamp.strftime(self.config.date_format),
            '%start_tag%': '<%s>' % LEVEL_COLOR_MAP[record.level],
            '%level_name%': self._level_name(record.level),
            '%end_tag%': '</>',
            '%channel%': record.channel,
            '%message%': record.message,
            '%context%': context,
            '%extra%': extra,
        })

    def _level_name(self, level: Level) -> str:
        # configs built without validation may carry a pattern that needs other arguments
        try:
            return self.config.level_name_format % level.get_name()
        except (TypeError, ValueError):
            return level.get_name()

    def echo_line(self, line: str, depth: int, indent_pad: str) -> None:
        """Write one dumped line to the scratch buffer, skipping the closing -1 line."""
        if depth != -1:
            self._output_buffer.write(line)

    def replace_placeholders(self, record: LogRecord) -> LogRecord:
        """
        Replace ``{key}`` tokens in the message with dumped context values.

        Args:
            record: Record whose message may contain placeholders

        Returns:
            The same record when the message has no ``{``, else a copy with the new message
        """
        message = record.message

        if '{' not in message:
            return record

        replacements = {}
        for key, value in record.context.items():
            # Remove quotes added by the dumper around strings
            text = self.dump_data(value, colors=False)
            if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
                text = text[1:-1]
            replacements['{%s}' % key] = '<comment>%s</>' % escape(text)

        return record.with_message(replace_tokens(message, replacements))

    def dump_data(self, data: Any, colors: Optional[bool] = None) -> str:
        """
        Render a value with the dumper.

        Args:
            data: Value to dump; an already cloned ``Data`` is used as is
            colors: Force colors on or off instead of using the configured option

        Returns:
            Dumped text without trailing whitespace, empty when dumping is disabled
        """
        if self._dumper is None:
            return ''

        self._dumper.set_colors(self.config.colors if colors is None else colors)

        if isinstance(data, Mapping) and isinstance(data.get('data'), Data):
            data = data['data']
        elif not isinstance(data, Data):
            data = self._cloner.clone_var(data)
        data = data.with_ref_handles(False)

        with self._scratch_buffer() as buffer:
            self._dumper.dump(data)
            dump = buffer.getvalue()

        return dump.rstrip()

    @contextmanager
    def _scratch_buffer(self) -> Iterator[io.StringIO]:
        try:
            yield self._output_buffer
        finally:
            self._output_buffer.seek(0)
            self._output_buffer.truncate(0)
