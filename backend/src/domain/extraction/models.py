"""
Domain models for rental agreement extraction results.
These are Pydantic models created fresh for every extraction run.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class VersionMatch(BaseModel):
    """Layout version detected for a document"""
    version_id: str
    confidence: float = Field(ge=0.0, le=1.0)
    matched_features: List[str] = Field(default_factory=list)
    total_features: int = 0


class FieldExtractionResult(BaseModel):
    """
    Outcome of extracting a single field.

    An unmatched field always carries no transformed value and zero confidence.
    """
    matched: bool = False
    extracted_value: Optional[str] = None
    transformed_value: Any = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    error: Optional[str] = None

    @model_validator(mode='after')
    def check_match_consistency(self):
        if not self.matched:
            if self.transformed_value is not None or self.confidence != 0.0:
                raise ValueError("Unmatched field must have no value and zero confidence")
        elif self.transformed_value is None:
            raise ValueError("Matched field must have a transformed value")
        return self

    @classmethod
    def unmatched(cls, error: Optional[str] = None) -> "FieldExtractionResult":
        return cls(matched=False, error=error)


class FieldError(BaseModel):
    """Error recorded against a single field"""
    field: str
    error: str


class DocumentExtraction(BaseModel):
    """
    Document-level extraction result.
    This is what the orchestrator returns; accept/reject is the caller's decision.
    """
    template_id: str
    data: Dict[str, Any] = Field(default_factory=dict)

    # Layout version detection
    detected_version_id: str
    version_confidence: float = Field(ge=0.0, le=1.0)
    matched_features: List[str] = Field(default_factory=list)
    matched_feature_count: int = 0
    total_feature_count: int = 0

    # Quality
    overall_confidence: float = Field(ge=0.0, le=1.0)
    fields_matched_count: int = 0
    total_fields_count: int = 0
    required_fields_missing: List[str] = Field(default_factory=list)
    errors: List[FieldError] = Field(default_factory=list)

    per_field_results: Dict[str, FieldExtractionResult] = Field(default_factory=dict)
    processed_at: datetime

    def requires_manual_review(self, confidence_threshold: float) -> bool:
        """Routing rule used by claim intake: low confidence or missing required fields."""
        return (
            self.overall_confidence < confidence_threshold
            or len(self.required_fields_missing) > 0
        )


class ExtractedText(BaseModel):
    """Plain text produced by a text source from a document file"""
    text: str
    page_count: int = 0
    metadata: Dict[str, Any] = Field(default_factory=dict)
