"""Tests for value coercion utilities."""

import pytest

from shim_normalize.coercion import (
    optional_bool,
    optional_double,
    optional_int,
    optional_node,
    optional_string,
    require_double,
    require_int,
    require_node,
    require_string,
)
from shim_normalize.exceptions import MissingRequiredFieldError, TypeMismatchError

RECORD = {
    "HP": 120,
    "Note": "after coffee",
    "TimeZone": None,
    "value": [{"fpVal": 12.5, "intVal": 3}],
    "flag": True,
}


class TestRequired:
    """Tests for require_* accessors."""

    def test_require_node_returns_nested_value(self):
        """Dotted paths walk mappings and list indexes."""
        assert require_node(RECORD, "value.0.fpVal") == 12.5
        assert require_node(RECORD, ("value", 0, "intVal")) == 3

    def test_require_node_missing_raises(self):
        """Absent fields raise MissingRequiredFieldError."""
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            require_node(RECORD, "LP")
        assert exc_info.value.path == "LP"

    def test_null_counts_as_missing(self):
        """JSON null is treated as absent."""
        with pytest.raises(MissingRequiredFieldError):
            require_node(RECORD, "TimeZone")

    def test_index_out_of_range_is_missing(self):
        """An index past the end of a list is absent."""
        with pytest.raises(MissingRequiredFieldError):
            require_double(RECORD, "value.1.fpVal")

    def test_require_double_accepts_int(self):
        """Integers coerce to floats."""
        value = require_double(RECORD, "HP")
        assert value == 120.0
        assert isinstance(value, float)

    def test_require_double_rejects_string(self):
        """Strings are not numbers."""
        with pytest.raises(TypeMismatchError) as exc_info:
            require_double(RECORD, "Note")
        assert exc_info.value.expected == "double"

    def test_require_double_rejects_bool(self):
        """Booleans are not numbers."""
        with pytest.raises(TypeMismatchError):
            require_double(RECORD, "flag")

    def test_require_int_accepts_integral_float(self):
        """12.0 coerces to 12 but 12.5 does not."""
        assert require_int({"n": 12.0}, "n") == 12
        with pytest.raises(TypeMismatchError):
            require_int(RECORD, "value.0.fpVal")

    def test_require_string(self):
        """Strings are returned as is; numbers are rejected."""
        assert require_string(RECORD, "Note") == "after coffee"
        with pytest.raises(TypeMismatchError):
            require_string(RECORD, "HP")


class TestOptional:
    """Tests for optional_* accessors."""

    def test_absent_returns_none(self):
        """Absent fields give None, never an error."""
        assert optional_node(RECORD, "missing") is None
        assert optional_string(RECORD, "missing") is None
        assert optional_double(RECORD, "missing") is None
        assert optional_int(RECORD, "TimeZone") is None
        assert optional_bool(RECORD, "missing") is None

    def test_present_returns_value(self):
        """Present, well-typed fields are returned."""
        assert optional_string(RECORD, "Note") == "after coffee"
        assert optional_double(RECORD, "value.0.fpVal") == 12.5
        assert optional_bool(RECORD, "flag") is True

    def test_present_but_ill_typed_raises(self):
        """Optional accessors still fail on type mismatch."""
        with pytest.raises(TypeMismatchError):
            optional_string(RECORD, "HP")
        with pytest.raises(TypeMismatchError):
            optional_int(RECORD, "Note")

    def test_lookup_through_scalar_is_absent(self):
        """Walking into a scalar finds nothing."""
        assert optional_node(RECORD, "HP.value") is None
        assert optional_node(RECORD, "Note.0") is None

    def test_digit_segment_reaches_mapping_key(self):
        """Digit segments index lists but name keys on objects."""
        node = {"zones": {"0": {"minutes": 12}}, "value": [{"0": "first"}]}

        assert optional_int(node, "zones.0.minutes") == 12
        assert optional_string(node, "value.0.0") == "first"
