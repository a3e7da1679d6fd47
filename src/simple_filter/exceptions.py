"""
Errors raised while turning a filter input into query predicates.

All of them are raised synchronously from ``asf_filter``; nothing is applied
to the query when one is raised.
"""

from typing import Any


class FilterError(ValueError):
    """Base exception for filter parsing and application."""

    pass


class InvalidFilterKey(FilterError):
    """Key has no recognizable operator suffix or an empty field prefix."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"invalid filter key {key!r}")


class UnknownField(FilterError):
    """Field name is not declared for the model."""

    def __init__(self, field: str, key: str | None = None):
        self.field = field
        self.key = key
        super().__init__(f"invalid field name {field!r}")


class InvalidFieldValue(FilterError):
    """Value cannot be coerced to the field's declared type."""

    def __init__(self, field_type: Any, value: Any, reason: str | None = None):
        self.field_type = field_type
        self.value = value
        message = f"invalid value {value!r} for {field_type} field"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidDateValue(InvalidFieldValue):
    """Date or datetime string matches none of the accepted formats."""

    pass


class UnsupportedOperator(FilterError):
    """Operator is known but not available for the field."""

    def __init__(self, operator: Any, field: str | None = None):
        self.operator = operator
        self.field = field
        if field:
            message = f"operator {operator!s} is not supported for field {field!r}"
        else:
            message = f"operator {operator!s} is not implemented"
        super().__init__(message)
