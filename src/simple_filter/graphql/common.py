"""
Shared GraphQL objects reused by every generated model schema.

Defines the ``AsfPaginationInfo`` object, the ``AsfPaginationInput`` input,
and the ``AsfUUID`` / ``AsfJson`` scalars.
"""

import json
from datetime import date, datetime
from typing import Any, NewType
from uuid import UUID

import strawberry

from ..config import settings


@strawberry.type
class AsfPaginationInfo:
    """Pagination metadata returned next to a page of results."""

    total: int | None = None
    page_number: int | None = None
    per_page: int | None = None


@strawberry.input
class AsfPaginationInput:
    """Requested page; both values fall back to the configured defaults."""

    page: int | None = None
    per_page: int | None = None


def _serialize_uuid(value: Any) -> str:
    return str(value)


def _parse_uuid(value: Any) -> UUID:
    if isinstance(value, UUID):
        return value
    return UUID(str(value))


def _serialize_json(value: Any) -> Any:
    return value


def _parse_json(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON value: {e}") from e
    return value


AsfUUID = strawberry.scalar(
    NewType("AsfUUID", str),
    name="AsfUUID",
    description="UUID, serialized in its canonical string form",
    serialize=_serialize_uuid,
    parse_value=_parse_uuid,
)

AsfJson = strawberry.scalar(
    NewType("AsfJson", object),
    name="AsfJson",
    description="Arbitrary JSON value; strings are decoded on input",
    serialize=_serialize_json,
    parse_value=_parse_json,
)

# Output type substitutions for aliased field types
SCALAR_ALIASES = {
    "date": date,
    "datetime": datetime,
    "uuid": AsfUUID,
    "json": AsfJson,
}


def pagination_window(
    page: int | None = None, per_page: int | None = None
) -> tuple[int, int, int, int]:
    """
    Resolve a requested page into limit and offset.

    Returns:
        (limit, offset, page, per_page) with page >= 1 and per_page clamped
        to ``settings.max_per_page``
    """
    page = max(page or 1, 1)
    per_page = per_page or settings.default_per_page
    per_page = min(max(per_page, 1), settings.max_per_page)
    return per_page, (page - 1) * per_page, page, per_page


def pagination_info(total: int, page: int, per_page: int, meta_type=AsfPaginationInfo):
    """Build the meta object for a page of results."""
    return meta_type(total=total, page_number=page, per_page=per_page)


# Object types declared in every generated schema, even when a model overrides its meta type
COMMON_TYPES = (AsfPaginationInfo,)
