"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Extraction settings loaded from environment variables.

    Thresholds only drive warnings, metrics and the manual-review helper;
    none of them makes an extraction fail.

    Environment Variables:
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default True)
        LOG_EXTRACTED_TEXT: Log the full document text at DEBUG (default False)
        DEFAULT_TEMPLATE_ID: Template used when the caller names none
        VERSION_CONFIDENCE_THRESHOLD: Warn below this layout detection confidence
        OVERALL_CONFIDENCE_THRESHOLD: Warn below this document confidence
        MIN_MATCHED_FIELD_RATIO: Warn when fewer fields than this share matched
        REVIEW_CONFIDENCE_THRESHOLD: Route to manual review below this confidence
        BATCH_MAX_WORKERS: Worker threads for batch extraction
        BATCH_TIMEOUT_SECONDS: Deadline for a whole batch
        PDF_TEXT_COVERAGE_THRESHOLD: Below this ratio a PDF is treated as scanned
        PDF_CHARS_PER_PAGE: Characters per page of a text-rich PDF
    """

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    LOG_EXTRACTED_TEXT: bool = False

    # Templates
    DEFAULT_TEMPLATE_ID: str = "standard_rental_agreement"

    # Quality thresholds
    VERSION_CONFIDENCE_THRESHOLD: float = Field(default=0.5, ge=0.0, le=1.0)
    OVERALL_CONFIDENCE_THRESHOLD: float = Field(default=0.6, ge=0.0, le=1.0)
    MIN_MATCHED_FIELD_RATIO: float = Field(default=0.5, ge=0.0, le=1.0)
    REVIEW_CONFIDENCE_THRESHOLD: float = Field(default=0.6, ge=0.0, le=1.0)

    # Batch processing
    BATCH_MAX_WORKERS: int = Field(default=4, ge=1)
    BATCH_TIMEOUT_SECONDS: float = Field(default=60.0, gt=0)

    # PDF text source
    PDF_TEXT_COVERAGE_THRESHOLD: float = 0.15
    PDF_CHARS_PER_PAGE: int = 2500

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
