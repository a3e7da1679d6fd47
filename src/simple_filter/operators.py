"""
Comparison operators and filter key parsing.

A filter key is ``<field>_<operator>``, e.g. ``age_gte`` or
``first_name_eq``. The operator suffix is matched case-insensitively; the
field part is kept as given.
"""

from collections.abc import Iterable
from enum import Enum

from .exceptions import InvalidFilterKey
from .fields import FieldType


class Operator(Enum):
    """Operator suffixes accepted in filter keys."""

    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    NIN = "nin"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    NIL = "nil"

    def __str__(self) -> str:
        return self.value


# Generation order of the filter input fields
ALL_OPERATORS = (
    Operator.EQ,
    Operator.NEQ,
    Operator.IN,
    Operator.NIN,
    Operator.GT,
    Operator.GTE,
    Operator.LT,
    Operator.LTE,
    Operator.NIL,
)

BOOLEAN_OPERATORS = (
    Operator.EQ,
    Operator.NEQ,
    Operator.IN,
    Operator.NIN,
    Operator.NIL,
)

LIST_OPERATORS = frozenset({Operator.IN, Operator.NIN})
ORDERING_OPERATORS = frozenset({Operator.GT, Operator.GTE, Operator.LT, Operator.LTE})

# Longest first so that "gte" wins over "gt" and "nin" over "in"
_SUFFIXES = sorted(ALL_OPERATORS, key=lambda op: len(op.value), reverse=True)
_BY_SUFFIX = {op.value: op for op in ALL_OPERATORS}


def applicable_operators(field_type: FieldType) -> tuple[Operator, ...]:
    """Operators a field of the given type can be filtered with."""
    if field_type is FieldType.JSON:
        return ()
    if field_type is FieldType.BOOLEAN:
        return BOOLEAN_OPERATORS
    return ALL_OPERATORS


def parse_filter_key(filter_key: str) -> tuple[str, Operator]:
    """
    Split a filter key into field name and operator.

    Examples:
        age_gte -> ("age", Operator.GTE)
        first_name_eq -> ("first_name", Operator.EQ)
        email_NIL -> ("email", Operator.NIL)

    Raises:
        InvalidFilterKey: no operator suffix matches, or the field part is empty
    """
    if not isinstance(filter_key, str) or not filter_key:
        raise InvalidFilterKey(filter_key)

    lowered = filter_key.lower()
    for operator in _SUFFIXES:
        suffix = f"_{operator.value}"
        if lowered.endswith(suffix):
            field_name = filter_key[: -len(suffix)]
            if field_name:
                return field_name, operator

    raise InvalidFilterKey(filter_key)


def split_filter_key(filter_key: str, field_names: Iterable[str]) -> tuple[str, Operator]:
    """
    Split a filter key, resolving the field part against known field names.

    The longest known field name that leaves a valid operator suffix wins,
    so with fields ``status`` and ``status_in`` the key ``status_in_eq``
    resolves to ``("status_in", Operator.EQ)``. When no known field matches,
    the plain suffix split is returned and the caller reports the unknown
    field.
    """
    if not isinstance(filter_key, str) or not filter_key:
        raise InvalidFilterKey(filter_key)

    for name in sorted(field_names, key=len, reverse=True):
        prefix = f"{name}_"
        if not filter_key.startswith(prefix):
            continue
        operator = _BY_SUFFIX.get(filter_key[len(prefix):].lower())
        if operator is not None:
            return name, operator

    return parse_filter_key(filter_key)
