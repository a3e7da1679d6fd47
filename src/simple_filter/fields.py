"""
Field metadata shared by the schema generator and the filter builder.

A model is described by a list of ``FieldSpec`` values. Callers either pass
that list explicitly, hand over an object implementing ``FieldSource``, or let
``fields_from_model`` read the columns of a SQLAlchemy model or table.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    Numeric,
    String,
    Uuid,
    inspect,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapper

from .logging import get_logger

logger = get_logger(__name__)


class FieldType(Enum):
    """Type tag of a filterable field."""

    ID = "id"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    UUID = "uuid"
    JSON = "json"
    ENUM = "enum"


@dataclass(frozen=True)
class FieldSpec:
    """Declared (name, type) pair for one attribute of a model."""

    name: str
    type: FieldType
    enum: type[Enum] | None = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.isidentifier():
            raise ValueError(f"field name must be an identifier, got {self.name!r}")

        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", FieldType(self.type))

        if self.type is FieldType.ENUM:
            if not (isinstance(self.enum, type) and issubclass(self.enum, Enum)):
                raise ValueError(f"enum field {self.name!r} needs an Enum class")
        elif self.enum is not None:
            raise ValueError(f"field {self.name!r} of type {self.type.value} cannot carry an enum")

    @classmethod
    def of(cls, name: str, type: FieldType | str, enum: type[Enum] | None = None) -> "FieldSpec":
        return cls(name=name, type=FieldType(type), enum=enum)


@runtime_checkable
class FieldSource(Protocol):
    """Anything that can describe its own filterable fields."""

    def list_fields(self) -> list[FieldSpec]: ...


def _field_type_for_column(column) -> tuple[FieldType, type[Enum] | None] | None:
    """Map a SQLAlchemy column type to a field type, or None if unmapped."""
    column_type = column.type

    if isinstance(column_type, Boolean):
        return FieldType.BOOLEAN, None
    if isinstance(column_type, Integer):
        return (FieldType.ID if column.primary_key else FieldType.INTEGER), None
    if isinstance(column_type, (Float, Numeric)):
        return FieldType.FLOAT, None
    if isinstance(column_type, DateTime):
        return FieldType.DATETIME, None
    if isinstance(column_type, Date):
        return FieldType.DATE, None
    if isinstance(column_type, Uuid):
        return FieldType.UUID, None
    if isinstance(column_type, JSON):
        return FieldType.JSON, None
    # Enum subclasses String, so it has to be checked first
    if isinstance(column_type, SAEnum):
        if column_type.enum_class is not None:
            return FieldType.ENUM, column_type.enum_class
        return FieldType.STRING, None
    if isinstance(column_type, String):
        return FieldType.STRING, None

    return None


def _model_columns(model) -> list[tuple[str, Any]]:
    """Return (attribute key, column) pairs for a mapped class or table."""
    inspected = inspect(model, raiseerr=False)

    if isinstance(inspected, Mapper):
        return [(attr.key, attr.columns[0]) for attr in inspected.column_attrs]

    if hasattr(model, "c"):
        return [(column.key, column) for column in model.c]

    raise TypeError(f"cannot introspect fields of {model!r}")


def fields_from_model(model, exclude: Iterable[str] = ()) -> list[FieldSpec]:
    """Build field specs from the columns of a SQLAlchemy model or table.

    Args:
        model: Declarative mapped class, ``Table`` or other selectable with ``.c``
        exclude: Attribute names to leave out

    Returns:
        One ``FieldSpec`` per mapped column, in declaration order
    """
    excluded = set(exclude)
    fields = []

    for key, column in _model_columns(model):
        if key in excluded:
            continue

        mapped = _field_type_for_column(column)
        if mapped is None:
            logger.debug("Skipping column with unmapped type", column=key, type=str(column.type))
            continue

        field_type, enum = mapped
        fields.append(FieldSpec(name=key, type=field_type, enum=enum))

    return fields


def resolve_fields(source) -> tuple[FieldSpec, ...]:
    """Normalize an explicit list, a FieldSource or a SQLAlchemy model to field specs."""
    if isinstance(source, FieldSource):
        fields = source.list_fields()
    elif isinstance(source, (list, tuple)):
        fields = [
            field if isinstance(field, FieldSpec) else FieldSpec.of(**field)
            for field in source
        ]
    else:
        fields = fields_from_model(source)

    seen = set()
    for field in fields:
        if field.name in seen:
            raise ValueError(f"duplicate field name {field.name!r}")
        seen.add(field.name)

    return tuple(fields)
