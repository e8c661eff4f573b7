"""
Built-in Field Extraction

Turns compound values into the ordered field mapping the cloner descends into.
"""

import dataclasses
import datetime
import decimal
import enum
import pathlib
import uuid
from typing import Any, Dict

DATE_TYPES = (datetime.date, datetime.time, datetime.timedelta)
# rendered through their string form
TEXT_VALUE_TYPES = (decimal.Decimal, uuid.UUID, pathlib.PurePath)


def is_date_like(value: Any) -> bool:
    """Return True for date, datetime, time and timedelta values."""
    return isinstance(value, DATE_TYPES)


def is_atomic_value(value: Any) -> bool:
    """
    Return True for objects that stand for a single value.

    Dates, enum members, decimals, UUIDs and paths are shown whole even where
    other objects are collapsed.
    """
    return is_date_like(value) or isinstance(value, (enum.Enum,) + TEXT_VALUE_TYPES)


def class_name(value: Any) -> str:
    """Qualified class name, without the ``builtins`` module."""
    cls = type(value)
    module = getattr(cls, '__module__', None)
    if not module or module == 'builtins':
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


def object_fields(value: Any) -> Dict[Any, Any]:
    """
    Collect the fields of a non-container value.

    Args:
        value: Object being cloned

    Returns:
        Field name to value mapping, in declaration order where known
    """
    if isinstance(value, enum.Enum):
        return {'name': value.name, 'value': value.value}
    if isinstance(value, TEXT_VALUE_TYPES):
        return {'value': str(value)}
    if isinstance(value, datetime.timedelta):
        return {'date': str(value)}
    if is_date_like(value):
        return {'date': value.isoformat()}

    fields: Dict[Any, Any] = {}

    if isinstance(value, BaseException):
        fields['message'] = str(value)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        for field in dataclasses.fields(value):
            fields[field.name] = getattr(value, field.name, None)

    for cls in reversed(type(value).__mro__):
        slots = cls.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ('__dict__', '__weakref__') or name in fields:
                continue
            if hasattr(value, name):
                fields[name] = getattr(value, name)

    attrs = getattr(value, '__dict__', None)
    if isinstance(attrs, dict):
        for name, attr in attrs.items():
            if not name.startswith('__') and name not in fields:
                fields[name] = attr

    return fields
