"""
Generated filter input types.

For fields ``[id: id, age: integer, active: boolean]`` and base name
``user``, ``define_filter_input`` builds ``UserFilterInput`` with
``id_eq, id_neq, id_in, ... id_nil``, the same nine entries for ``age``, and
only ``active_eq, active_neq, active_in, active_nin, active_nil`` for the
boolean field. JSON fields are left out.
"""

from typing import Any, Optional

import strawberry

from ..fields import FieldSpec, FieldType, resolve_fields
from ..logging import get_logger
from ..operators import LIST_OPERATORS, Operator, applicable_operators
from .types import output_type, to_type_name

logger = get_logger(__name__)


def filter_type(field: FieldSpec) -> Any:
    """Type a field is compared with; datetimes are accepted as strings."""
    if field.type is FieldType.DATETIME:
        return str
    return output_type(field)


def filter_annotations(fields) -> dict[str, Any]:
    """Map ``<field>_<operator>`` to its input type for all filterable fields."""
    annotations = {}

    for field in resolve_fields(fields):
        base_type = filter_type(field)

        for operator in applicable_operators(field.type):
            if operator is Operator.NIL:
                value_type = bool
            elif operator in LIST_OPERATORS:
                value_type = list[base_type]
            else:
                value_type = base_type

            annotations[f"{field.name}_{operator.value}"] = value_type

    return annotations


def define_filter_input(base_name: str, fields) -> type:
    """Define the ``<Base>FilterInput`` input type for a model."""
    name = to_type_name(base_name, "filter_input")
    annotations = filter_annotations(fields)

    FilterInput = type(
        name,
        (),
        {
            "__annotations__": {key: Optional[value] for key, value in annotations.items()},
            **{key: None for key in annotations},
        },
    )

    logger.debug("Defined filter input", name=name, fields=len(annotations))
    return strawberry.input(FilterInput)
