"""Extraction template catalog: typed definitions, layout signatures,
version detection and the template registry.
"""

from .definitions import FieldDefinition, TemplateDefinition, VersionSignature
from .registry import (
    TemplateRegistry,
    get_available_templates,
    get_template,
    get_template_registry,
    merge_field_maps,
)
from .rental_agreements import (
    BUDGET_RENTAL_AGREEMENT_ID,
    STANDARD_RENTAL_AGREEMENT_ID,
)
from .signatures import VERSION_SIGNATURES
from .version_detector import detect_template_version

__all__ = [
    "FieldDefinition",
    "TemplateDefinition",
    "VersionSignature",
    "TemplateRegistry",
    "get_available_templates",
    "get_template",
    "get_template_registry",
    "merge_field_maps",
    "BUDGET_RENTAL_AGREEMENT_ID",
    "STANDARD_RENTAL_AGREEMENT_ID",
    "VERSION_SIGNATURES",
    "detect_template_version",
]
