"""Unit tests for settings loading"""

import pytest
from pydantic import ValidationError

from config import Settings, get_settings


class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self, settings):
        assert settings.DEFAULT_TEMPLATE_ID == "standard_rental_agreement"
        assert settings.VERSION_CONFIDENCE_THRESHOLD == 0.5
        assert settings.OVERALL_CONFIDENCE_THRESHOLD == 0.6
        assert settings.MIN_MATCHED_FIELD_RATIO == 0.5
        assert settings.BATCH_MAX_WORKERS == 4
        assert settings.LOG_EXTRACTED_TEXT is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_TEMPLATE_ID", "budget_rental_agreement")
        monkeypatch.setenv("BATCH_MAX_WORKERS", "8")

        settings = Settings(_env_file=None)

        assert settings.DEFAULT_TEMPLATE_ID == "budget_rental_agreement"
        assert settings.BATCH_MAX_WORKERS == 8

    def test_threshold_bounds(self, monkeypatch):
        monkeypatch.setenv("OVERALL_CONFIDENCE_THRESHOLD", "1.5")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
