"""Unit tests for the transformation library

Tests cover:
- Each registered transformation
- Falsy input pass-through
- Registry lookup and left-to-right application
"""

import pytest

from domain.extraction.transformations import (
    LAS_VEGAS_BRANCH_SUFFIX,
    TRANSFORMATIONS,
    append_las_vegas_branch,
    apply_transformations,
    clean_text,
    extract_digits,
    format_date,
    format_phone_number,
    get_transformation,
    parse_boolean,
    to_lower_case,
    to_upper_case,
)


class TestTextTransformations:
    """Test case and whitespace transformations"""

    def test_to_upper_case(self):
        assert to_upper_case("d1234abc") == "D1234ABC"

    def test_to_lower_case(self):
        assert to_lower_case("John.Doe@Example.COM") == "john.doe@example.com"

    def test_clean_text_collapses_whitespace(self):
        assert clean_text("  TOYOTA   CAMRY\n AWD  ") == "TOYOTA CAMRY AWD"

    def test_extract_digits(self):
        assert extract_digits("1234 5678") == "12345678"
        assert extract_digits("12\u066134") == "1234"

    def test_append_las_vegas_branch(self):
        result = append_las_vegas_branch(" 4475 W FLAMINGO RD ")
        assert result == f"4475 W FLAMINGO RD, {LAS_VEGAS_BRANCH_SUFFIX}"

    @pytest.mark.parametrize("func", [
        to_upper_case, to_lower_case, clean_text, extract_digits,
        format_phone_number, format_date, append_las_vegas_branch,
    ])
    def test_falsy_input_passes_through(self, func):
        assert func("") == ""
        assert func(None) is None


class TestPhoneFormatting:
    """Test phone number formatting"""

    def test_ten_digits_formatted(self):
        assert format_phone_number("(702) 555-0199") == "702-555-0199"

    def test_other_lengths_return_digits(self):
        assert format_phone_number("+44 20 7946 0958") == "442079460958"


class TestDateFormatting:
    """Test date formatting"""

    def test_us_date_formatted_as_iso(self):
        assert format_date("11/14/2023") == "2023-11-14"

    def test_agreement_timestamp_formatted_as_iso(self):
        assert format_date("NOV 14,2023@10:00 AM") == "2023-11-14"

    def test_unparseable_date_returned_unchanged(self):
        assert format_date("not a date") == "not a date"


class TestParseBoolean:
    """Test checkbox/acceptance marker parsing"""

    @pytest.mark.parametrize("value", ["Yes", "y", "TRUE", "Accepted", "accept", "selected", "X", "checked"])
    def test_truthy_markers(self, value):
        assert parse_boolean(value) is True

    @pytest.mark.parametrize("value", ["No", "Declined", "✗", " ", ""])
    def test_other_values_are_false(self, value):
        assert parse_boolean(value) is False

    def test_none_is_false(self):
        assert parse_boolean(None) is False


class TestRegistry:
    """Test transformation lookup and application"""

    def test_all_transformations_registered(self):
        assert set(TRANSFORMATIONS) == {
            "to_upper_case", "to_lower_case", "format_phone_number", "format_date",
            "extract_digits", "clean_text", "parse_boolean", "append_las_vegas_branch",
        }

    def test_unknown_transformation_raises(self):
        with pytest.raises(KeyError, match="Unknown transformation"):
            get_transformation("reverse")

    def test_applied_left_to_right(self):
        assert apply_transformations("  d 123  ", ["clean_text", "to_upper_case"]) == "D 123"

    def test_no_transformations_is_identity(self):
        assert apply_transformations("abc", []) == "abc"
