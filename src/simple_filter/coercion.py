"""
Coercion of raw filter values to the type declared for a field.

Values coming from query strings or loosely typed clients may arrive as
strings. An empty string means "not set" for the numeric, boolean and
datetime types; those coerce to ``None`` and the filter is skipped.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from .config import settings
from .exceptions import InvalidDateValue, InvalidFieldValue
from .fields import FieldType
from .operators import LIST_OPERATORS, Operator


def _to_boolean(value: Any) -> bool | None:
    if isinstance(value, str):
        if value == "":
            return None
        return value.lower() == "true"
    return value


def _to_nil_flag(value: Any) -> bool | None:
    if isinstance(value, (list, tuple)):
        raise InvalidFieldValue(FieldType.BOOLEAN.value, value, "nil expects a single boolean")
    if isinstance(value, str):
        return _to_boolean(value)
    return value is True


def _to_integer(field_type: FieldType, value: Any) -> int | None:
    if isinstance(value, bool):
        raise InvalidFieldValue(field_type.value, value)
    if isinstance(value, str):
        if value == "":
            return None
        try:
            return int(value)
        except ValueError as e:
            raise InvalidFieldValue(field_type.value, value, str(e)) from e
    return value


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        raise InvalidFieldValue(FieldType.FLOAT.value, value)
    if isinstance(value, str):
        if value == "":
            return None
        try:
            return float(value)
        except ValueError as e:
            raise InvalidFieldValue(FieldType.FLOAT.value, value, str(e)) from e
    return value


def parse_datetime(value: str, formats: Sequence[str] | None = None) -> datetime:
    """Parse a datetime string against the accepted formats, in order."""
    for fmt in formats or settings.datetime_formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    raise InvalidDateValue(FieldType.DATETIME.value, value, "no accepted datetime format matches")


def _to_datetime(value: Any, formats: Sequence[str] | None) -> datetime | None:
    if isinstance(value, str):
        if value == "":
            return None
        return parse_datetime(value, formats)
    return value


def coerce_scalar(field_type: FieldType, value: Any, formats: Sequence[str] | None = None) -> Any:
    """Coerce one scalar using the base rules of the field type."""
    if field_type in (FieldType.ID, FieldType.INTEGER):
        return _to_integer(field_type, value)
    if field_type is FieldType.FLOAT:
        return _to_float(value)
    if field_type is FieldType.BOOLEAN:
        return _to_boolean(value)
    if field_type is FieldType.DATETIME:
        return _to_datetime(value, formats)
    return value


def _flatten(value: Any) -> list[Any]:
    if not isinstance(value, (list, tuple)):
        return [value]

    flat = []
    for item in value:
        flat.extend(_flatten(item))
    return flat


def coerce_value(
    field_type: FieldType,
    operator: Operator,
    value: Any,
    formats: Sequence[str] | None = None,
) -> Any:
    """
    Coerce a raw filter value for the given field type and operator.

    Returns:
        The coerced value, a flat list for ``in``/``nin``, a bool for
        ``nil``, or None when the filter should be skipped.

    Raises:
        InvalidFieldValue: value cannot be converted to the field type
        InvalidDateValue: datetime string matches none of the formats
    """
    if operator is Operator.NIL:
        return _to_nil_flag(value)

    if operator in LIST_OPERATORS:
        if not isinstance(value, (list, tuple)):
            coerced = coerce_scalar(field_type, value, formats)
            return None if coerced is None else [coerced]

        coerced_items = (coerce_scalar(field_type, item, formats) for item in _flatten(value))
        return [item for item in coerced_items if item is not None]

    if isinstance(value, (list, tuple)):
        raise InvalidFieldValue(field_type.value, value, f"{operator} expects a single value")

    return coerce_scalar(field_type, value, formats)
