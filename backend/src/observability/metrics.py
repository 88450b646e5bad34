"""Prometheus metrics for rental agreement extraction.

Defines operational metrics for monitoring extraction quality and alerting
on drifting document layouts.
"""

from prometheus_client import Counter, Histogram

# Document processing metrics
documents_processed_total = Counter(
    "rental_extraction_documents_processed_total",
    "Total number of documents processed",
    ["template_id", "status"]  # status: success|error
)

extraction_duration_seconds = Histogram(
    "rental_extraction_duration_seconds",
    "Time spent extracting fields from one document in seconds",
    ["template_id"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0]
)

extraction_confidence_histogram = Histogram(
    "rental_extraction_confidence",
    "Overall document confidence score distribution",
    ["template_id"],
    buckets=[0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]
)

version_confidence_histogram = Histogram(
    "rental_extraction_version_confidence",
    "Layout version detection confidence distribution",
    buckets=[0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0]
)

# Field level metrics
fields_extracted_total = Counter(
    "rental_extraction_fields_total",
    "Fields processed, by outcome",
    ["template_id", "field", "outcome"]  # outcome: matched|missed|error
)

low_confidence_total = Counter(
    "rental_extraction_low_confidence_total",
    "Low confidence conditions (warnings only, never failures)",
    ["template_id", "kind"]  # kind: version|overall|coverage|required_missing
)
