"""
simple-filter
Generated GraphQL filter inputs and query predicates for SQLAlchemy models
"""

__version__ = "0.1.0"

from .config import settings
from .exceptions import (
    FilterError,
    InvalidDateValue,
    InvalidFieldValue,
    InvalidFilterKey,
    UnknownField,
    UnsupportedOperator,
)
from .fields import FieldSource, FieldSpec, FieldType, fields_from_model
from .filtering import FilterBuilder, FilterMixin, asf_filter, filter_input_to_dict
from .operators import Operator, parse_filter_key

__all__ = [
    "settings",
    "__version__",
    "FieldSource",
    "FieldSpec",
    "FieldType",
    "fields_from_model",
    "FilterBuilder",
    "FilterMixin",
    "asf_filter",
    "filter_input_to_dict",
    "Operator",
    "parse_filter_key",
    "FilterError",
    "InvalidDateValue",
    "InvalidFieldValue",
    "InvalidFilterKey",
    "UnknownField",
    "UnsupportedOperator",
]
