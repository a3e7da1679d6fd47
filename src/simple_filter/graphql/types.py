"""
Generated GraphQL output types for a model.

For a base name ``user`` this builds:

    type UserCustomFields {
      id: ID
      age: Int
      email: String
    }

    type UserResults {
      data: [UserCustomFields!]
      meta: AsfPaginationInfo
    }
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import strawberry

from ..fields import FieldSpec, FieldType, resolve_fields
from ..logging import get_logger
from .common import SCALAR_ALIASES, AsfPaginationInfo

logger = get_logger(__name__)

_BASE_TYPES = {
    FieldType.ID: strawberry.ID,
    FieldType.INTEGER: int,
    FieldType.FLOAT: float,
    FieldType.STRING: str,
    FieldType.BOOLEAN: bool,
}

_registered_enums: dict[type[Enum], type[Enum]] = {}


def to_type_name(base_name: str, suffix: str = "") -> str:
    """``user_account`` + ``custom_fields`` -> ``UserAccountCustomFields``."""
    parts = f"{base_name}_{suffix}".split("_") if suffix else base_name.split("_")
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def graphql_enum(enum: type[Enum]) -> type[Enum]:
    """Register a Python enum with strawberry once and return it."""
    if enum not in _registered_enums:
        _registered_enums[enum] = strawberry.enum(enum)
    return _registered_enums[enum]


def output_type(
    field: FieldSpec,
    custom_datetime_type: Any = None,
    custom_date_type: Any = None,
) -> Any:
    """Python type used for a field in the custom fields type."""
    if field.type is FieldType.DATETIME:
        return custom_datetime_type or SCALAR_ALIASES["datetime"]
    if field.type is FieldType.DATE:
        return custom_date_type or SCALAR_ALIASES["date"]
    if field.type is FieldType.ENUM:
        return graphql_enum(field.enum)
    if field.type in (FieldType.UUID, FieldType.JSON):
        return SCALAR_ALIASES[field.type.value]
    return _BASE_TYPES[field.type]


def make_object_type(
    name: str, annotations: dict[str, Any], description: str | None = None
) -> type:
    """Create a strawberry object type whose fields all default to None."""
    namespace = {
        "__annotations__": {key: Optional[value] for key, value in annotations.items()},
        **{key: None for key in annotations},
    }
    if description:
        namespace["__doc__"] = description

    return strawberry.type(type(name, (), namespace))


@dataclass(frozen=True)
class GeneratedTypes:
    """Output types generated for one model."""

    custom_fields: type
    results: type
    meta: type


def define_types(
    base_name: str,
    fields,
    *,
    custom_datetime_type: Any = None,
    custom_date_type: Any = None,
    custom_meta_type: type | None = None,
    model_object: type | None = None,
) -> GeneratedTypes:
    """
    Define the custom fields and results types for a model.

    Args:
        base_name: Model base name, e.g. ``user``
        fields: Field specs, a FieldSource or a SQLAlchemy model
        custom_datetime_type: Replaces ``datetime.datetime`` for datetime fields
        custom_date_type: Replaces ``datetime.date`` for date fields
        custom_meta_type: Type of the results ``meta`` field
            (default ``AsfPaginationInfo``)
        model_object: Existing strawberry type to list in ``data`` instead of
            generating ``<Base>CustomFields``

    Returns:
        GeneratedTypes with the custom fields, results and meta types
    """
    meta_type = custom_meta_type or AsfPaginationInfo

    if model_object is None:
        annotations = {
            field.name: output_type(field, custom_datetime_type, custom_date_type)
            for field in resolve_fields(fields)
        }
        custom_fields = make_object_type(
            to_type_name(base_name, "custom_fields"),
            annotations,
            description=f"Fields of {base_name}.",
        )
    else:
        custom_fields = model_object

    results = make_object_type(
        to_type_name(base_name, "results"),
        {"data": list[custom_fields], "meta": meta_type},
        description=f"Page of {base_name} results with pagination metadata.",
    )

    logger.debug(
        "Defined output types",
        base_name=base_name,
        custom_fields=custom_fields.__name__,
        results=results.__name__,
    )
    return GeneratedTypes(custom_fields=custom_fields, results=results, meta=meta_type)
