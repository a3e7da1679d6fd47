"""
Apply a filter input to a SQLAlchemy query.

Each ``<field>_<operator>`` entry of the filter map becomes one predicate;
all predicates are combined with AND and applied to the query as a single
WHERE clause.

Usage:
    builder = FilterBuilder(Users)
    stmt = builder.asf_filter(select(Users), {"age_gte": "21", "email_nil": "true"})
"""

import dataclasses
from collections.abc import Mapping
from enum import Enum
from functools import lru_cache
from typing import Any

import structlog
from sqlalchemy import and_, inspect
from sqlalchemy.orm import Mapper
from sqlalchemy.sql.elements import ColumnElement
from strawberry import UNSET

from .coercion import coerce_value
from .exceptions import FilterError, InvalidFilterKey, UnknownField, UnsupportedOperator
from .fields import FieldSpec, resolve_fields
from .logging import get_logger
from .operators import applicable_operators, split_filter_key
from .predicates import build_predicate

logger = get_logger(__name__)


def filter_input_to_dict(filter_input) -> dict[str, Any] | None:
    """
    Convert a generated filter input instance into a plain dict.

    Entries that are None or UNSET are dropped. Mappings are copied as is.
    """
    if filter_input is None:
        return None

    if isinstance(filter_input, Mapping):
        return dict(filter_input)

    if dataclasses.is_dataclass(filter_input) and not isinstance(filter_input, type):
        values = {
            field.name: getattr(filter_input, field.name)
            for field in dataclasses.fields(filter_input)
        }
    elif hasattr(filter_input, "__dict__"):
        values = dict(vars(filter_input))
    else:
        raise TypeError(f"filter input must be a mapping, got {type(filter_input).__name__}")

    return {key: value for key, value in values.items() if value is not None and value is not UNSET}


def _normalize_key(key) -> str:
    if isinstance(key, Enum):
        key = key.value
    if not isinstance(key, str):
        raise InvalidFilterKey(key)
    return key


class FilterBuilder:
    """
    Builds WHERE predicates for one model from filter maps.

    Args:
        model: SQLAlchemy mapped class, Table or selectable with ``.c``
        fields: Field specs, a FieldSource, or None to introspect ``model``
        name: Model name used in log events
    """

    def __init__(self, model, fields=None, name: str | None = None):
        self.model = model
        self.fields: tuple[FieldSpec, ...] = resolve_fields(model if fields is None else fields)
        self.fields_by_name = {field.name: field for field in self.fields}
        self.name = name or getattr(model, "__name__", None) or getattr(model, "name", repr(model))
        self.mapped = isinstance(inspect(model, raiseerr=False), Mapper)

    def column(self, field_name: str):
        """Column expression for a declared field."""
        try:
            if self.mapped:
                return getattr(self.model, field_name)
            return self.model.c[field_name]
        except (AttributeError, KeyError):
            raise UnknownField(field_name) from None

    def condition(self, key, value) -> ColumnElement[bool] | None:
        """Build the predicate for one filter entry, or None when it is skipped."""
        if value is None:
            return None

        key = _normalize_key(key)
        field_name, operator = split_filter_key(key, self.fields_by_name)

        field = self.fields_by_name.get(field_name)
        if field is None:
            raise UnknownField(field_name, key=key)

        if operator not in applicable_operators(field.type):
            raise UnsupportedOperator(operator, field=field.name)

        coerced = coerce_value(field.type, operator, value)
        if coerced is None:
            logger.debug("Skipping empty filter value", field=field.name, operator=str(operator))
            return None

        logger.debug("Applied filter", field=field.name, operator=str(operator))
        return build_predicate(self.column(field.name), operator, coerced)

    def conditions(self, filter_map) -> list[ColumnElement[bool]]:
        """Build predicates for all entries of a filter map, in its own order."""
        if filter_map is None:
            return []

        if not isinstance(filter_map, Mapping):
            filter_map = filter_input_to_dict(filter_map)

        predicates = []
        with structlog.contextvars.bound_contextvars(asf_model=self.name):
            for key, value in filter_map.items():
                try:
                    predicate = self.condition(key, value)
                except FilterError as e:
                    logger.info("Rejected filter", key=str(key), error=str(e))
                    raise

                if predicate is not None:
                    predicates.append(predicate)

        return predicates

    def predicate(self, filter_map) -> ColumnElement[bool] | None:
        """AND of all predicates of the filter map, or None if there are none."""
        predicates = self.conditions(filter_map)
        if not predicates:
            return None
        return and_(*predicates)

    def asf_filter(self, query, filter_map):
        """
        Apply a filter map to a query.

        Returns the query itself when the filter map is None or yields no
        predicates, otherwise a new query with one combined WHERE clause.
        """
        if filter_map is None:
            return query

        predicate = self.predicate(filter_map)
        if predicate is None:
            return query

        return query.where(predicate)


@lru_cache(maxsize=None)
def builder_for_model(model) -> FilterBuilder:
    """Shared FilterBuilder for a model, using ``__filter_fields__`` if declared."""
    return FilterBuilder(model, getattr(model, "__filter_fields__", None))


def asf_filter(query, filter_map, model, fields=None):
    """Apply a filter map to a query on ``model``."""
    if fields is None:
        builder = builder_for_model(model)
    else:
        builder = FilterBuilder(model, fields)
    return builder.asf_filter(query, filter_map)


class FilterMixin:
    """
    Adds ``asf_filter`` to a declarative model.

    Filterable fields come from ``__filter_fields__`` when set, otherwise
    from the model's mapped columns.

    Example:
        class Users(Base, FilterMixin):
            ...

        stmt = Users.asf_filter(select(Users), {"age_gte": 21})
    """

    __filter_fields__ = None

    @classmethod
    def filter_builder(cls) -> FilterBuilder:
        return builder_for_model(cls)

    @classmethod
    def asf_filter(cls, query, filter_map):
        return cls.filter_builder().asf_filter(query, filter_map)
