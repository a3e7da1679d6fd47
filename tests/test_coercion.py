"""
Tests for filter value coercion.
"""

from datetime import datetime
from uuid import UUID

import pytest

from simple_filter.coercion import coerce_scalar, coerce_value, parse_datetime
from simple_filter.exceptions import InvalidDateValue, InvalidFieldValue
from simple_filter.fields import FieldType
from simple_filter.operators import Operator


class TestNumericCoercion:
    """Integer, id and float values."""

    def test_integer_string_parses(self):
        assert coerce_value(FieldType.INTEGER, Operator.EQ, "123") == 123

    def test_id_string_parses(self):
        assert coerce_value(FieldType.ID, Operator.EQ, "7") == 7

    def test_empty_string_means_unset(self):
        assert coerce_value(FieldType.INTEGER, Operator.EQ, "") is None
        assert coerce_value(FieldType.ID, Operator.GT, "") is None
        assert coerce_value(FieldType.FLOAT, Operator.LT, "") is None

    def test_native_values_pass_through(self):
        assert coerce_value(FieldType.INTEGER, Operator.GTE, 21) == 21
        assert coerce_value(FieldType.FLOAT, Operator.GTE, 2.5) == 2.5

    def test_float_string_parses(self):
        assert coerce_value(FieldType.FLOAT, Operator.GT, "3.25") == 3.25

    def test_invalid_integer_raises(self):
        with pytest.raises(InvalidFieldValue) as exc_info:
            coerce_value(FieldType.INTEGER, Operator.EQ, "twelve")
        assert exc_info.value.value == "twelve"

    def test_invalid_float_raises(self):
        with pytest.raises(InvalidFieldValue):
            coerce_value(FieldType.FLOAT, Operator.EQ, "1.2.3")

    def test_boolean_rejected_for_integer(self):
        with pytest.raises(InvalidFieldValue):
            coerce_value(FieldType.INTEGER, Operator.EQ, True)


class TestBooleanCoercion:
    """Boolean fields and the nil operator."""

    @pytest.mark.parametrize("raw", ["true", "TRUE", "True"])
    def test_true_strings(self, raw):
        assert coerce_value(FieldType.BOOLEAN, Operator.EQ, raw) is True

    @pytest.mark.parametrize("raw", ["false", "no", "0", "yes"])
    def test_other_strings_are_false(self, raw):
        assert coerce_value(FieldType.BOOLEAN, Operator.EQ, raw) is False

    def test_empty_string_means_unset(self):
        assert coerce_value(FieldType.BOOLEAN, Operator.EQ, "") is None

    def test_nil_is_boolean_for_any_field_type(self):
        assert coerce_value(FieldType.STRING, Operator.NIL, "true") is True
        assert coerce_value(FieldType.INTEGER, Operator.NIL, "TRUE") is True
        assert coerce_value(FieldType.DATETIME, Operator.NIL, "false") is False
        assert coerce_value(FieldType.STRING, Operator.NIL, "anything") is False

    def test_nil_native_values(self):
        assert coerce_value(FieldType.STRING, Operator.NIL, True) is True
        assert coerce_value(FieldType.STRING, Operator.NIL, False) is False
        assert coerce_value(FieldType.STRING, Operator.NIL, 1) is False

    def test_nil_empty_string_means_unset(self):
        assert coerce_value(FieldType.STRING, Operator.NIL, "") is None

    def test_nil_rejects_lists(self):
        with pytest.raises(InvalidFieldValue):
            coerce_value(FieldType.STRING, Operator.NIL, [True])


class TestDatetimeCoercion:
    """Datetime strings against the accepted formats."""

    def test_full_datetime(self):
        value = coerce_value(FieldType.DATETIME, Operator.GTE, "2024-01-15 10:30:00")
        assert value == datetime(2024, 1, 15, 10, 30, 0)

    def test_date_only_fallback(self):
        value = coerce_value(FieldType.DATETIME, Operator.LT, "2024-02-01")
        assert value == datetime(2024, 2, 1)

    def test_unparseable_raises(self):
        with pytest.raises(InvalidDateValue):
            coerce_value(FieldType.DATETIME, Operator.EQ, "15/01/2024")

    def test_invalid_date_is_an_invalid_field_value(self):
        with pytest.raises(InvalidFieldValue):
            parse_datetime("not a date")

    def test_custom_formats(self):
        assert parse_datetime("15/01/2024", formats=["%d/%m/%Y"]) == datetime(2024, 1, 15)

    def test_datetime_objects_pass_through(self):
        moment = datetime(2024, 5, 1, 12, 0)
        assert coerce_value(FieldType.DATETIME, Operator.EQ, moment) is moment

    def test_empty_string_means_unset(self):
        assert coerce_value(FieldType.DATETIME, Operator.EQ, "") is None


class TestListCoercion:
    """in / nin operators."""

    def test_elements_coerced_with_base_type(self):
        assert coerce_value(FieldType.INTEGER, Operator.IN, ["1", "2", 3]) == [1, 2, 3]

    def test_nested_lists_are_flattened(self):
        assert coerce_value(FieldType.INTEGER, Operator.NIN, [["1"], ["2", ["3"]]]) == [1, 2, 3]

    def test_scalar_is_wrapped(self):
        assert coerce_value(FieldType.STRING, Operator.IN, "a@b.c") == ["a@b.c"]
        assert coerce_value(FieldType.INTEGER, Operator.IN, "5") == [5]

    def test_empty_scalar_means_unset(self):
        assert coerce_value(FieldType.INTEGER, Operator.IN, "") is None

    def test_empty_elements_are_dropped(self):
        assert coerce_value(FieldType.INTEGER, Operator.IN, ["1", "", "2"]) == [1, 2]

    def test_boolean_elements_use_boolean_rules(self):
        assert coerce_value(FieldType.BOOLEAN, Operator.IN, ["true", "false"]) == [True, False]

    def test_invalid_element_raises(self):
        with pytest.raises(InvalidFieldValue):
            coerce_value(FieldType.INTEGER, Operator.IN, ["1", "x"])


class TestPassThrough:
    """Types without coercion rules."""

    def test_strings_unchanged(self):
        assert coerce_value(FieldType.STRING, Operator.EQ, "") == ""
        assert coerce_value(FieldType.STRING, Operator.GT, "m") == "m"

    def test_uuid_unchanged(self):
        value = UUID("6f1c2a4e-8b3d-4f8e-9a65-0c1d2e3f4a5b")
        assert coerce_scalar(FieldType.UUID, value) is value

    def test_scalar_operator_rejects_lists(self):
        with pytest.raises(InvalidFieldValue):
            coerce_value(FieldType.STRING, Operator.EQ, ["a", "b"])
