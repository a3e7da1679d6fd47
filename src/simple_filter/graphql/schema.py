"""
Build an executable Strawberry schema from model field lists.

Usage:
    builder = GraphQLSchemaBuilder()
    builder.add_model("user", [FieldSpec.of("id", "id"), FieldSpec.of("age", "integer")])
    schema = builder.build(query_callback)

Every model becomes a query field named after its base name, taking a
``filter`` and a ``pagination`` argument and returning ``<Base>Results``.
"""

import dataclasses
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

import strawberry
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema

from ..fields import FieldSpec, resolve_fields
from ..filtering import filter_input_to_dict
from ..logging import get_logger
from .common import COMMON_TYPES, AsfPaginationInput, pagination_info, pagination_window
from .inputs import define_filter_input
from .types import define_types

logger = get_logger(__name__)

# (base_name, filters, limit, offset) -> (rows, total)
QueryCallback = Callable[
    [str, Optional[dict[str, Any]], int, int],
    Awaitable[tuple[list[Any], int]],
]


class SchemaValidationError(Exception):
    """Raised when a generated schema fails validation."""

    pass


@dataclass(frozen=True)
class ModelTypes:
    """All GraphQL types generated for one model."""

    base_name: str
    fields: tuple[FieldSpec, ...]
    custom_fields: type
    results: type
    meta: type
    filter_input: type


class GraphQLSchemaBuilder:
    """
    Collects models and builds one GraphQL schema over them.

    The query callback is invoked by every generated resolver with the model
    base name, the filter map (or None), and the page limit and offset. It
    returns the rows of the page (dicts or custom fields instances) and the
    total number of matching rows.
    """

    def __init__(self):
        self.models: dict[str, ModelTypes] = {}

    def add_model(self, base_name: str, fields, **type_overrides) -> ModelTypes:
        """
        Generate and register the types of a model.

        Args:
            base_name: Model base name, also used as the query field name
            fields: Field specs, a FieldSource or a SQLAlchemy model
            type_overrides: Passed to ``define_types`` (custom_datetime_type,
                custom_date_type, custom_meta_type, model_object)
        """
        resolved = resolve_fields(fields)
        generated = define_types(base_name, resolved, **type_overrides)
        filter_input = define_filter_input(base_name, resolved)

        model_types = ModelTypes(
            base_name=base_name,
            fields=resolved,
            custom_fields=generated.custom_fields,
            results=generated.results,
            meta=generated.meta,
            filter_input=filter_input,
        )
        self.models[base_name] = model_types
        logger.debug("Added model", base_name=base_name, fields=len(resolved))
        return model_types

    def clear(self) -> None:
        """Remove all registered models."""
        self.models = {}

    def build(self, query_callback: QueryCallback) -> strawberry.Schema | None:
        """
        Build the schema with one query field per registered model.

        Returns:
            Strawberry Schema, or None if no models are registered
        """
        if not self.models:
            logger.warning("No models registered, cannot generate GraphQL schema")
            return None

        query_dict: dict[str, Any] = {"__annotations__": {}}

        for base_name, model_types in self.models.items():
            query_dict[base_name] = strawberry.field(
                resolver=self._make_resolver(model_types, query_callback),
                description=f"Filtered and paginated {base_name} results.",
            )
            query_dict["__annotations__"][base_name] = model_types.results

        Query = strawberry.type(type("Query", (), query_dict))

        schema = strawberry.Schema(query=Query, types=list(COMMON_TYPES))
        logger.info("Generated GraphQL schema", models=len(self.models))
        return schema

    def _make_resolver(self, model_types: ModelTypes, query_callback: QueryCallback):
        """Create the resolver of one model's query field."""
        base_name = model_types.base_name
        filter_type = model_types.filter_input
        results_type = model_types.results
        custom_fields = model_types.custom_fields
        meta_type = model_types.meta
        declared = {field.name for field in dataclasses.fields(custom_fields)}

        def to_entry(row):
            if isinstance(row, Mapping):
                values = {key: value for key, value in row.items() if key in declared}
                return custom_fields(**values)
            return row

        async def resolver(
            filter: Optional[filter_type] = None,
            pagination: Optional[AsfPaginationInput] = None,
        ) -> results_type:
            page = pagination.page if pagination else None
            per_page = pagination.per_page if pagination else None
            limit, offset, page, per_page = pagination_window(page, per_page)

            filters = filter_input_to_dict(filter)
            rows, total = await query_callback(base_name, filters, limit, offset)

            return results_type(
                data=[to_entry(row) for row in rows],
                meta=pagination_info(total, page, per_page, meta_type),
            )

        return resolver


def validate_schema(schema: strawberry.Schema) -> None:
    """Validate a generated schema.

    Runs graphql-core schema validation and an introspection query, which
    catches unresolved or conflicting type references.

    Raises:
        SchemaValidationError: If the schema is invalid
    """
    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        error_messages = [str(e) for e in errors]
        logger.error("GraphQL schema validation failed", errors=error_messages)
        raise SchemaValidationError(
            f"GraphQL schema validation failed: {'; '.join(error_messages)}"
        )

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        error_messages = [str(e) for e in result.errors]
        logger.error("GraphQL introspection failed", errors=error_messages)
        raise SchemaValidationError(f"GraphQL introspection failed: {'; '.join(error_messages)}")

    logger.info("GraphQL schema validation successful")
