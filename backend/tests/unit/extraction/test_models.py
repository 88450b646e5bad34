"""Unit tests for extraction result models"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from domain.extraction.models import DocumentExtraction, FieldExtractionResult


class TestFieldExtractionResult:
    """Test matched/unmatched consistency rules"""

    def test_unmatched_factory(self):
        result = FieldExtractionResult.unmatched(error="boom")
        assert result.matched is False
        assert result.transformed_value is None
        assert result.confidence == 0.0
        assert result.error == "boom"

    def test_unmatched_with_value_rejected(self):
        with pytest.raises(ValidationError):
            FieldExtractionResult(matched=False, transformed_value="x")

    def test_unmatched_with_confidence_rejected(self):
        with pytest.raises(ValidationError):
            FieldExtractionResult(matched=False, confidence=0.4)

    def test_matched_without_value_rejected(self):
        with pytest.raises(ValidationError):
            FieldExtractionResult(matched=True, extracted_value="x", confidence=0.5)

    def test_matched_false_value_allowed(self):
        result = FieldExtractionResult(
            matched=True, extracted_value="Declined", transformed_value=False, confidence=1.0
        )
        assert result.transformed_value is False

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            FieldExtractionResult(matched=True, transformed_value="x", confidence=1.2)


class TestDocumentExtraction:
    """Test the manual review routing rule"""

    def _make(self, confidence, missing=()):
        return DocumentExtraction(
            template_id="standard_rental_agreement",
            detected_version_id="standard",
            version_confidence=0.5,
            overall_confidence=confidence,
            required_fields_missing=list(missing),
            processed_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )

    def test_confident_complete_result_not_reviewed(self):
        assert self._make(0.9).requires_manual_review(0.6) is False

    def test_low_confidence_reviewed(self):
        assert self._make(0.5).requires_manual_review(0.6) is True

    def test_missing_required_reviewed(self):
        assert self._make(0.9, ["raNumber"]).requires_manual_review(0.6) is True
