"""Extraction Orchestrator - turns rental agreement text into claim data.

Pipeline for one document:
1. Validate the input text (InvalidInputError if missing)
2. Resolve the template and detect the layout version (TemplateNotFoundError
   if the id is unknown; raised before any field is processed)
3. Extract every field in declaration order, isolating per-field failures
4. Aggregate results into a DocumentExtraction with overall confidence

Low confidence is never an error: it is logged and counted, and the caller
decides whether to accept the result or route it to manual review. The
orchestrator keeps no state between calls.
"""

import logging
import os
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from config import Settings, get_settings
from domain.extraction.errors import (
    DocumentProcessingError,
    FieldProcessingError,
    InvalidInputError,
)
from domain.extraction.models import (
    DocumentExtraction,
    FieldError,
    FieldExtractionResult,
)
from domain.templates.definitions import FieldDefinition, TemplateDefinition
from domain.templates.registry import TemplateRegistry, get_template_registry
from infrastructure.text_sources import TextSourceRegistry, get_text_source_registry
from observability.correlation import (
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from observability.metrics import (
    documents_processed_total,
    extraction_confidence_histogram,
    extraction_duration_seconds,
    fields_extracted_total,
    low_confidence_total,
    version_confidence_histogram,
)

from .field_extractor import extract_field

logger = logging.getLogger(__name__)

FieldExtractor = Callable[[str, FieldDefinition], FieldExtractionResult]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def calculate_overall_confidence(results: Dict[str, FieldExtractionResult]) -> float:
    """Mean confidence over matched fields, 0.0 when nothing matched."""
    confidences = [r.confidence for r in results.values() if r.matched]
    if not confidences:
        return 0.0
    return sum(confidences) / len(confidences)


class ExtractionOrchestrator:
    """Runs template-based extraction over rental agreement text.

    Example:
        orchestrator = ExtractionOrchestrator()
        result = orchestrator.extract(text, 'standard_rental_agreement')
        if result.requires_manual_review(0.6):
            route_to_review(result)
    """

    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        text_sources: Optional[TextSourceRegistry] = None,
        settings: Optional[Settings] = None,
        field_extractor: FieldExtractor = extract_field,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the orchestrator.

        Args:
            registry: Template registry (defaults to the process-wide catalog)
            text_sources: Text source registry used by process_document
            settings: Thresholds and defaults (defaults to get_settings())
            field_extractor: Function extracting one field
            clock: Source of the processed_at timestamp
        """
        self.registry = registry or get_template_registry()
        self._text_sources = text_sources
        self.settings = settings or get_settings()
        self.field_extractor = field_extractor
        self.clock = clock

    @property
    def text_sources(self) -> TextSourceRegistry:
        if self._text_sources is None:
            self._text_sources = get_text_source_registry()
        return self._text_sources

    def extract(self, text: str, template_id: Optional[str] = None) -> DocumentExtraction:
        """Extract claim data from document text.

        Args:
            text: Plain text of the rental agreement
            template_id: Template to use (defaults to DEFAULT_TEMPLATE_ID)

        Returns:
            DocumentExtraction, including low-confidence results

        Raises:
            InvalidInputError: If text is not a non-blank string
            TemplateNotFoundError: If template_id is not registered
        """
        template_id = template_id or self.settings.DEFAULT_TEMPLATE_ID
        token = set_correlation_id(generate_correlation_id())
        try:
            self._validate_text(text)
            template = self._resolve_template(text, template_id)
            return self._extract_with_template(text, template)
        finally:
            reset_correlation_id(token)

    def process_document(self, path: str, template_id: Optional[str] = None) -> DocumentExtraction:
        """Read a document file and extract claim data from its text.

        Relative paths are resolved against the current working directory.

        Args:
            path: Path of the rental agreement file (PDF or text)
            template_id: Template to use (defaults to DEFAULT_TEMPLATE_ID)

        Returns:
            DocumentExtraction for the document

        Raises:
            DocumentProcessingError: On any failure, chained to the root cause
                and carrying file path, template id and detected version
        """
        template_id = template_id or self.settings.DEFAULT_TEMPLATE_ID
        template: Optional[TemplateDefinition] = None
        token = set_correlation_id(generate_correlation_id())

        try:
            if not path:
                raise InvalidInputError("Document path is required")
            if not os.path.isabs(path):
                path = os.path.abspath(path)

            source = self.text_sources.get_source_for_path(path)
            extracted = source.extract_text(path)
            text = extracted.text
            self._validate_text(text)

            logger.info(
                f"Extracted {len(text)} chars from {extracted.page_count} page(s) "
                f"using {source.version}",
                extra={"file_path": path},
            )
            if self.settings.LOG_EXTRACTED_TEXT:
                logger.debug(f"Extracted text:\n{text}", extra={"file_path": path})

            template = self._resolve_template(text, template_id)
            return self._extract_with_template(text, template)

        except Exception as e:
            version_id = None
            if template is not None and template.detected_version is not None:
                version_id = template.detected_version.version_id

            error = DocumentProcessingError(
                f"Failed to process rental agreement: {e}",
                file_path=path,
                template_id=template_id,
                version_id=version_id,
            )
            logger.error(
                f"Error processing rental agreement: {error.to_dict()}",
                exc_info=True,
                extra={"file_path": path, "template_id": template_id},
            )
            raise error from e

        finally:
            reset_correlation_id(token)

    def _validate_text(self, text: str) -> None:
        if not isinstance(text, str):
            raise InvalidInputError(
                f"Document text must be a string, got {type(text).__name__}"
            )
        if not text.strip():
            raise InvalidInputError("Document text is empty")

    def _resolve_template(self, text: str, template_id: str) -> TemplateDefinition:
        try:
            return self.registry.get_template(template_id, text)
        except Exception:
            documents_processed_total.labels(template_id=template_id, status="error").inc()
            raise

    def _extract_with_template(self, text: str, template: TemplateDefinition) -> DocumentExtraction:
        start_time = time.perf_counter()
        log_extra = {"template_id": template.id}

        version = template.detected_version
        version_confidence_histogram.observe(version.confidence)
        if version.confidence < self.settings.VERSION_CONFIDENCE_THRESHOLD:
            low_confidence_total.labels(template_id=template.id, kind="version").inc()
            logger.warning(
                f"Low confidence in template version detection: {version.version_id} "
                f"({version.confidence:.3f})",
                extra=log_extra,
            )

        data: Dict[str, object] = {}
        per_field_results: Dict[str, FieldExtractionResult] = {}
        errors: List[FieldError] = []
        required_fields_missing: List[str] = []

        for field_name, field in template.fields.items():
            try:
                result = self.field_extractor(text, field)
            except Exception as e:
                failure = FieldProcessingError(field_name, e)
                logger.error(str(failure), exc_info=True, extra={**log_extra, "field_name": field_name})
                fields_extracted_total.labels(
                    template_id=template.id, field=field_name, outcome="error"
                ).inc()
                errors.append(FieldError(field=field_name, error=str(failure)))
                per_field_results[field_name] = FieldExtractionResult.unmatched(error=str(failure))
                if field.required:
                    required_fields_missing.append(field_name)
                continue

            per_field_results[field_name] = result

            if result.matched:
                data[field_name] = result.transformed_value
                logger.debug(
                    f"{field_name}: MATCHED {result.extracted_value!r} -> "
                    f"{result.transformed_value!r} (confidence {result.confidence:.2f})",
                    extra={**log_extra, "field_name": field_name},
                )
            else:
                if field.required:
                    required_fields_missing.append(field_name)
                logger.debug(f"{field_name}: NOT MATCHED", extra={**log_extra, "field_name": field_name})

            fields_extracted_total.labels(
                template_id=template.id,
                field=field_name,
                outcome="matched" if result.matched else "missed",
            ).inc()

            if result.error:
                errors.append(FieldError(field=field_name, error=result.error))

        total_fields = len(template.fields)
        fields_matched = len(data)
        overall_confidence = min(1.0, calculate_overall_confidence(per_field_results))

        self._warn_on_quality(
            template.id, overall_confidence, fields_matched, total_fields, required_fields_missing
        )

        result = DocumentExtraction(
            template_id=template.id,
            data=data,
            detected_version_id=version.version_id,
            version_confidence=version.confidence,
            matched_features=list(version.matched_features),
            matched_feature_count=len(version.matched_features),
            total_feature_count=version.total_features,
            overall_confidence=overall_confidence,
            fields_matched_count=fields_matched,
            total_fields_count=total_fields,
            required_fields_missing=required_fields_missing,
            errors=errors,
            per_field_results=per_field_results,
            processed_at=self.clock(),
        )

        runtime = time.perf_counter() - start_time
        extraction_duration_seconds.labels(template_id=template.id).observe(runtime)
        extraction_confidence_histogram.labels(template_id=template.id).observe(overall_confidence)
        documents_processed_total.labels(template_id=template.id, status="success").inc()

        logger.info(
            f"Extraction finished: {fields_matched}/{total_fields} fields matched, "
            f"{len(required_fields_missing)} required missing, {len(errors)} errors, "
            f"confidence={overall_confidence:.2f}, version={version.version_id}, "
            f"runtime={runtime * 1000:.1f}ms",
            extra={**log_extra, "version_id": version.version_id},
        )

        return result

    def _warn_on_quality(
        self,
        template_id: str,
        overall_confidence: float,
        fields_matched: int,
        total_fields: int,
        required_fields_missing: List[str],
    ) -> None:
        log_extra = {"template_id": template_id}

        if required_fields_missing:
            low_confidence_total.labels(template_id=template_id, kind="required_missing").inc()
            logger.warning(f"Required fields missing: {required_fields_missing}", extra=log_extra)

        if overall_confidence < self.settings.OVERALL_CONFIDENCE_THRESHOLD:
            low_confidence_total.labels(template_id=template_id, kind="overall").inc()
            logger.warning(
                f"Low overall confidence in extraction results: {overall_confidence:.2f}",
                extra=log_extra,
            )

        if fields_matched < total_fields * self.settings.MIN_MATCHED_FIELD_RATIO:
            low_confidence_total.labels(template_id=template_id, kind="coverage").inc()
            logger.warning(
                f"Only {fields_matched} of {total_fields} fields were extracted",
                extra=log_extra,
            )
