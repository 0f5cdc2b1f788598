"""
Tests for value coercion
"""

import math
from datetime import datetime, timezone

import numpy as np
import pytest

from shapeframe.core.values import (
    TimeUnit,
    ValueKind,
    as_bool,
    as_display_text,
    as_number,
    as_timestamp,
    is_blank,
    kind_of,
    unit_for_field,
)


class TestKindOf:
    """Test value tagging"""

    @pytest.mark.parametrize(
        "value, kind",
        [
            (None, ValueKind.NULL),
            (1, ValueKind.NUMBER),
            (1.5, ValueKind.NUMBER),
            (np.float32(2.0), ValueKind.NUMBER),
            (True, ValueKind.BOOL),
            (np.bool_(False), ValueKind.BOOL),
            ("text", ValueKind.STRING),
            ([1, 2], ValueKind.ARRAY),
            ({"a": 1}, ValueKind.OBJECT),
        ],
    )
    def test_kinds(self, value, kind):
        assert kind_of(value) is kind

    def test_bool_is_not_number(self):
        """bool subclasses int but must be tagged BOOL"""
        assert kind_of(False) is ValueKind.BOOL

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("")
        assert not is_blank(0)
        assert not is_blank(" ")


class TestAsNumber:
    """Test numeric coercion"""

    def test_numbers_pass_through(self):
        assert as_number(3) == 3.0
        assert as_number(2.5) == 2.5
        assert as_number(np.int64(7)) == 7.0
        assert isinstance(as_number(3), float)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("42", 42.0),
            ("-0.5", -0.5),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("2.5E-2", 0.025),
            ("+7", 7.0),
        ],
    )
    def test_numeric_strings(self, text, expected):
        assert as_number(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["oops", "", " 1", "1 ", "nan", "inf", "1_000", "1,5", "0x10"])
    def test_non_numeric_strings(self, text):
        assert as_number(text) is None

    @pytest.mark.parametrize("value", [None, True, False, [1], {"a": 1}])
    def test_other_kinds(self, value):
        assert as_number(value) is None

    def test_huge_exponent_overflows_to_inf(self):
        """Out-of-range scientific notation parses as infinity like float()"""
        assert math.isinf(as_number("1e400"))


class TestAsBool:
    """Test boolean coercion"""

    def test_native_bool(self):
        assert as_bool(True) is True
        assert as_bool(False) is False

    @pytest.mark.parametrize("value", ["true", "false", 1, 0, None, [True]])
    def test_no_coercion(self, value):
        assert as_bool(value) is None


class TestAsTimestamp:
    """Test timestamp coercion"""

    def test_milliseconds(self):
        ts = as_timestamp(1700000000000, TimeUnit.MILLISECONDS)
        assert ts == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_seconds(self):
        ts = as_timestamp(1700000000, TimeUnit.SECONDS)
        assert ts == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_numeric_string(self):
        assert as_timestamp("1700000000000") == as_timestamp(1700000000000)

    def test_keeps_milliseconds(self):
        ts = as_timestamp(1700000000123)
        assert ts.microsecond == 123000

    def test_result_is_utc(self):
        assert as_timestamp(0).tzinfo is not None
        assert as_timestamp(0).utcoffset().total_seconds() == 0

    @pytest.mark.parametrize("value", [None, "soon", True, float("nan"), float("inf"), 1e30, [1]])
    def test_absent(self, value):
        assert as_timestamp(value) is None

    def test_unit_for_field(self):
        assert unit_for_field("timestamp") is TimeUnit.MILLISECONDS
        assert unit_for_field("beginTimeSeconds") is TimeUnit.SECONDS
        assert unit_for_field("endTimeSeconds") is TimeUnit.SECONDS


class TestAsDisplayText:
    """Test display rendering"""

    def test_null_is_empty(self):
        assert as_display_text(None) == ""

    def test_strings_verbatim(self):
        assert as_display_text("checkout") == "checkout"

    def test_numbers(self):
        assert as_display_text(3.0) == "3"
        assert as_display_text(3) == "3"
        assert as_display_text(2.5) == "2.5"

    def test_bools(self):
        assert as_display_text(True) == "true"
        assert as_display_text(False) == "false"

    def test_array_compact_json(self):
        assert as_display_text(["a", 1, None]) == '["a",1,null]'

    def test_object_sorted_compact_json(self):
        assert as_display_text({"b": 1, "a": [2]}) == '{"a":[2],"b":1}'

    def test_numpy_inside_array(self):
        assert as_display_text([np.int64(5)]) == "[5]"
