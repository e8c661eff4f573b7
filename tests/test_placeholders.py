"""
Unit tests for {key} placeholder interpolation in log messages.
"""

import datetime
import decimal
import enum
import pathlib
import uuid

from conftest import make_record
from console_logging.formatters.console_formatter import ConsoleFormatter


def test_message_without_braces_returns_same_record(plain_formatter):
    record = make_record(message="nothing to replace", context={"id": 1})

    assert plain_formatter.replace_placeholders(record) is record


def test_every_occurrence_is_replaced(plain_formatter):
    record = make_record(message="{id} and {id} again", context={"id": 7})

    result = plain_formatter.replace_placeholders(record)

    assert result.message == "<comment>7</> and <comment>7</> again"


def test_string_values_lose_their_quotes(plain_formatter):
    record = make_record(message="Hello {name}", context={"name": "Ada"})

    assert plain_formatter.replace_placeholders(record).message == "Hello <comment>Ada</>"


def test_only_one_pair_of_quotes_is_removed(plain_formatter):
    record = make_record(message="{q}", context={"q": '"quoted"'})

    assert plain_formatter.replace_placeholders(record).message == '<comment>"quoted"</>'


def test_missing_keys_are_left_alone(plain_formatter):
    record = make_record(message="Hello {name}", context={"other": 1})

    assert plain_formatter.replace_placeholders(record).message == "Hello {name}"


def test_unused_context_entries_are_inert(plain_formatter):
    record = make_record(message="{a}", context={"a": 1, "b": 2})

    result = plain_formatter.replace_placeholders(record)

    assert result.message == "<comment>1</>"
    assert result.context == {"a": 1, "b": 2}


def test_only_message_changes(plain_formatter):
    record = make_record(message="{a}", context={"a": 1}, extra={"x": 1})

    result = plain_formatter.replace_placeholders(record)

    assert result is not record
    assert record.message == "{a}"
    assert (result.timestamp, result.level, result.channel, result.context, result.extra) == \
        (record.timestamp, record.level, record.channel, record.context, record.extra)


def test_substituted_values_are_not_substituted_again(plain_formatter):
    record = make_record(message="{a} {b}", context={"a": "{b}", "b": "B"})

    result = plain_formatter.replace_placeholders(record)

    assert result.message == "<comment>{b}</> <comment>B</>"


def test_tokens_are_flat(plain_formatter):
    record = make_record(message="{{a}}", context={"a": 1, "{a}": 2})

    assert plain_formatter.replace_placeholders(record).message == "<comment>2</>"


def test_values_are_escaped_for_tags(plain_formatter):
    record = make_record(message="got {html}", context={"html": "<b>bold</b>"})

    result = plain_formatter.replace_placeholders(record)

    assert result.message == "got <comment>\\<b\\>bold\\</b\\></>"


def test_compound_values_are_collapsed(plain_formatter):
    record = make_record(message="roles {roles}", context={"roles": ["admin", {"nested": 1}]})

    result = plain_formatter.replace_placeholders(record)

    assert result.message == 'roles <comment>["admin",{…}]</>'


def test_date_values(plain_formatter):
    record = make_record(message="at {when}", context={"when": datetime.date(2024, 2, 3)})

    result = plain_formatter.replace_placeholders(record)

    assert result.message == 'at <comment>datetime.date {date: "2024-02-03"}</>'


class Color(enum.Enum):
    RED = "r"


def test_single_value_objects_keep_their_value(plain_formatter):
    record = make_record(
        message="{d} {p} {u} {e}",
        context={
            "d": decimal.Decimal("10.50"),
            "p": pathlib.PurePosixPath("/srv/app"),
            "u": uuid.UUID(int=1),
            "e": Color.RED,
        },
    )

    message = plain_formatter.replace_placeholders(record).message

    assert message.startswith('<comment>decimal.Decimal {value: "10.50"}</> ')
    assert 'value: "/srv/app"}</> ' in message
    assert '<comment>uuid.UUID {value: "00000000-0000-0000-0000-000000000001"}</> ' in message
    assert message.endswith('Color {name: "RED",value: "r"}</>')


def test_nested_single_value_objects_are_not_collapsed(plain_formatter):
    assert plain_formatter.dump_data({"amount": decimal.Decimal("10.50")}) == \
        '{"amount": decimal.Decimal {value: "10.50"}}'


def test_scalars(plain_formatter):
    record = make_record(
        message="{none} {yes} {pi}",
        context={"none": None, "yes": True, "pi": 3.5},
    )

    assert plain_formatter.replace_placeholders(record).message == \
        "<comment>None</> <comment>True</> <comment>3.5</>"


def test_colors_setting_does_not_leak_into_placeholders():
    formatter = ConsoleFormatter({"colors": True})
    record = make_record(message="{n}", context={"n": "x"})

    assert formatter.replace_placeholders(record).message == "<comment>x</>"
