"""Unit tests for single-field extraction

Tests cover:
- Greedy first-match-wins over ordered patterns
- Empty captures fall through to the next pattern
- Pattern failures are recovered and recorded
- Unmatched fields carry no value and zero confidence
"""

import re
from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from domain.templates.definitions import field_definition
from domain.templates.rental_agreements import STANDARD_FIELDS
from extraction.field_extractor import extract_field


def _duck_field(patterns, transformations=(), validations=()):
    """Field stand-in accepting mock patterns"""
    return SimpleNamespace(
        display_name="Test Field",
        required=False,
        patterns=tuple(patterns),
        transformations=tuple(transformations),
        validations=tuple(validations),
    )


class TestExtractField:
    """Test extract_field"""

    def test_match_with_transformations(self):
        field = field_definition(
            "Driver's License",
            patterns=[r"Drivers Lic Number\s*:\s*([A-Z0-9X]+)"],
            transformations=["clean_text", "to_upper_case"],
        )

        result = extract_field("Drivers Lic Number : d1234567", field)

        assert result.matched is True
        assert result.extracted_value == "d1234567"
        assert result.transformed_value == "D1234567"
        assert 0.0 < result.confidence <= 1.0
        assert result.error is None

    def test_first_matching_pattern_wins(self):
        field = field_definition(
            "Reference",
            patterns=[r"Ref[:\s]*(\d{4})", r"Ref[:\s]*(\d+)"],
        )

        result = extract_field("Ref: 123456", field)

        assert result.extracted_value == "1234"

    def test_later_patterns_not_evaluated_after_match(self):
        second = Mock()
        second.pattern = "unused"
        field = _duck_field([re.compile(r"Ref[:\s]*(\d+)"), second])

        result = extract_field("Ref: 42", field)

        assert result.extracted_value == "42"
        second.search.assert_not_called()

    def test_empty_capture_falls_through(self):
        field = field_definition(
            "Plate Number",
            patterns=[r"Plate:(\d*)", r"Tag[:\s]*([A-Z0-9]+)"],
        )

        result = extract_field("Plate: ABC / Tag: XYZ123", field)

        assert result.extracted_value == "XYZ123"

    def test_whitespace_is_trimmed(self):
        field = field_definition("Name", patterns=[r"Name:([^\n]+)"])

        result = extract_field("Name:   Jane Roe   \n", field)

        assert result.extracted_value == "Jane Roe"

    def test_pattern_error_recovered(self):
        broken = Mock()
        broken.pattern = "broken"
        broken.search.side_effect = RuntimeError("boom")
        field = _duck_field([broken, re.compile(r"Ref[:\s]*(\d+)")])

        result = extract_field("Ref: 42", field)

        assert result.matched is True
        assert result.extracted_value == "42"
        assert result.error == "boom"

    def test_unmatched_field(self):
        field = field_definition("Email", patterns=[r"Email[:\s]*(\S+@\S+)"])

        result = extract_field("no contact details", field)

        assert result.matched is False
        assert result.extracted_value is None
        assert result.transformed_value is None
        assert result.confidence == 0.0
        assert result.error is None

    def test_all_patterns_failing_keeps_last_error(self):
        broken = Mock()
        broken.pattern = "broken"
        broken.search.side_effect = ValueError("bad input")
        field = _duck_field([broken])

        result = extract_field("anything", field)

        assert result.matched is False
        assert result.confidence == 0.0
        assert result.error == "bad input"

    def test_boolean_transformation(self):
        field = field_definition(
            "LDW Accepted",
            patterns=[r"Loss Damage Waiver\s+[\d.]+/Day\s+(Accepted|Declined)"],
            transformations=["parse_boolean"],
        )

        result = extract_field("Loss Damage Waiver 29.99/Day Declined", field)

        assert result.matched is True
        assert result.transformed_value is False
        assert result.confidence == 1.0

    def test_non_ascii_digits_do_not_match(self):
        result = extract_field(
            "RENTAL AGREEMENT NUMBER ١٢٣٤٥٦٧٨",
            STANDARD_FIELDS["raNumber"],
        )

        assert result.matched is False
        assert result.confidence == 0.0
