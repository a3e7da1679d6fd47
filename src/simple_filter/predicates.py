"""
Predicate shapes for each operator, as SQLAlchemy column expressions.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy.sql.elements import ColumnElement

from .exceptions import UnsupportedOperator
from .operators import Operator


def _is_nil(column, flag: bool):
    if flag:
        return column.is_(None)
    return column.is_not(None)


PREDICATES: dict[Operator, Callable[[Any, Any], ColumnElement[bool]]] = {
    Operator.EQ: lambda column, value: column == value,
    Operator.NEQ: lambda column, value: column != value,
    Operator.GT: lambda column, value: column > value,
    Operator.GTE: lambda column, value: column >= value,
    Operator.LT: lambda column, value: column < value,
    Operator.LTE: lambda column, value: column <= value,
    Operator.IN: lambda column, values: column.in_(values),
    Operator.NIN: lambda column, values: column.not_in(values),
    Operator.NIL: _is_nil,
}


def build_predicate(column, operator: Operator, value: Any) -> ColumnElement[bool]:
    """Build the comparison of ``column`` against an already coerced value."""
    try:
        predicate = PREDICATES[operator]
    except KeyError:
        raise UnsupportedOperator(operator) from None

    return predicate(column, value)
