"""Pytest fixtures for rental agreement extraction tests.

Provides reusable test fixtures for:
- Template registry built from the rental agreement catalog
- Orchestrator with a fixed clock (deterministic processed_at)
- Sample rental agreement texts

Usage:
    def test_extract(orchestrator, standard_v1_text):
        result = orchestrator.extract(standard_v1_text)
        assert result.data['raNumber'] == '12345678'
"""

import sys
from pathlib import Path

import pytest

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))
sys.path.insert(0, str(Path(__file__).parent))

from config import Settings
from domain.templates import TemplateRegistry, VERSION_SIGNATURES
from domain.templates.rental_agreements import RENTAL_AGREEMENT_TEMPLATES
from extraction.orchestrator import ExtractionOrchestrator
from fixtures.rental_agreements import (
    BUDGET_TEXT,
    FIXED_NOW,
    NO_MATCH_TEXT,
    STANDARD_V1_TEXT,
)


@pytest.fixture
def settings():
    """Settings with defaults only (no .env lookup)."""
    return Settings(_env_file=None)


@pytest.fixture
def registry():
    """Fresh registry over the rental agreement catalog."""
    return TemplateRegistry(RENTAL_AGREEMENT_TEMPLATES, VERSION_SIGNATURES)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def orchestrator(registry, settings, fixed_clock):
    return ExtractionOrchestrator(registry=registry, settings=settings, clock=fixed_clock)


@pytest.fixture
def standard_v1_text():
    return STANDARD_V1_TEXT


@pytest.fixture
def budget_text():
    return BUDGET_TEXT


@pytest.fixture
def no_match_text():
    return NO_MATCH_TEXT
