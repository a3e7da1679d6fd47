"""
GraphQL declarations generated from model field lists.

- Common objects (AsfPaginationInfo, AsfPaginationInput, AsfUUID, AsfJson)
- Custom fields and results types per model
- Filter input types per model
- Schema builder wiring models to a query callback
"""

from .common import AsfJson, AsfPaginationInfo, AsfPaginationInput, AsfUUID
from .inputs import define_filter_input
from .resolvers import SQLAlchemyQueryCallback
from .schema import GraphQLSchemaBuilder, SchemaValidationError, validate_schema
from .types import GeneratedTypes, define_types

__all__ = [
    "AsfJson",
    "AsfPaginationInfo",
    "AsfPaginationInput",
    "AsfUUID",
    "define_filter_input",
    "define_types",
    "GeneratedTypes",
    "GraphQLSchemaBuilder",
    "SchemaValidationError",
    "SQLAlchemyQueryCallback",
    "validate_schema",
]
