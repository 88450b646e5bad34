"""Template Registry - Read-only catalog of extraction templates.

Templates are resolved by id. A template that declares a parent is resolved
in two steps: the parent is loaded first, then ``merge_field_maps`` applies the
child's fields over it (key-level override, child wins).

The default registry is built once per process and never mutated, so it can
be read concurrently without locking.
"""

import logging
from dataclasses import replace
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from domain.extraction.errors import TemplateNotFoundError
from domain.extraction.models import VersionMatch

from .definitions import FieldDefinition, TemplateDefinition, VersionSignature
from .rental_agreements import RENTAL_AGREEMENT_TEMPLATES, STANDARD_RENTAL_AGREEMENT_ID
from .signatures import VERSION_SIGNATURES
from .version_detector import default_version_match, detect_template_version

logger = logging.getLogger(__name__)


def merge_field_maps(
    parent_fields: Mapping[str, FieldDefinition],
    child_fields: Mapping[str, FieldDefinition],
) -> Dict[str, FieldDefinition]:
    """Merge a child template's fields over its parent's.

    Parent fields keep their position; a child field with the same name
    replaces the parent definition in place, and child-only fields are
    appended in child declaration order.

    Example:
        >>> merged = merge_field_maps({'a': fa, 'b': fb}, {'b': fb2, 'c': fc})
        >>> list(merged.items())
        [('a', fa), ('b', fb2), ('c', fc)]
    """
    merged = dict(parent_fields)
    merged.update(child_fields)
    return merged


class TemplateRegistry:
    """Registry of extraction templates and layout signatures.

    Example:
        registry = TemplateRegistry(RENTAL_AGREEMENT_TEMPLATES, VERSION_SIGNATURES)
        template = registry.get_template('standard_rental_agreement', text)
        print(template.detected_version.version_id)
    """

    def __init__(
        self,
        templates: Iterable[TemplateDefinition],
        signatures: Sequence[VersionSignature] = (),
        base_template_id: str = STANDARD_RENTAL_AGREEMENT_ID,
    ):
        """Build the registry.

        Args:
            templates: Template definitions, registered in iteration order
            signatures: Layout signatures used for version detection
            base_template_id: Template whose first patterns define signature features

        Raises:
            ValueError: On duplicate ids, unknown or nested parents, or a
                missing base template when signatures are given
        """
        self._templates: Dict[str, TemplateDefinition] = {}
        for template in templates:
            if template.id in self._templates:
                raise ValueError(f"Duplicate template id: {template.id}")
            self._templates[template.id] = template

        for template in self._templates.values():
            parent_id = template.parent_template_id
            if parent_id is None:
                continue
            parent = self._templates.get(parent_id)
            if parent is None:
                raise ValueError(f"Template {template.id} references unknown parent {parent_id}")
            if parent.parent_template_id is not None:
                raise ValueError(
                    f"Template {template.id} extends {parent_id}, which itself has a parent; "
                    "only single-level inheritance is supported"
                )

        self._signatures = tuple(signatures)
        self._base_template_id = base_template_id
        if self._signatures and base_template_id not in self._templates:
            raise ValueError(f"Base template {base_template_id} is not registered")

    @property
    def signatures(self) -> Sequence[VersionSignature]:
        return self._signatures

    def get_available_templates(self) -> List[str]:
        """Get ids of all registered templates, in registration order."""
        return list(self._templates)

    def detect_version(self, document_text: str) -> VersionMatch:
        """Detect the layout version of a document against the registered signatures."""
        base_template = self._templates.get(self._base_template_id)
        if base_template is None:
            return default_version_match()
        return detect_template_version(document_text, self._signatures, base_template)

    def get_template(
        self, template_id: str, document_text: Optional[str] = None
    ) -> TemplateDefinition:
        """Resolve a template, merging its parent and attaching the detected version.

        Args:
            template_id: Id of the template to resolve
            document_text: Optional document text for layout version detection

        Returns:
            A new TemplateDefinition with the merged field map and
            ``detected_version`` set. Without document text, the detected
            version is the template itself with confidence 1.0.

        Raises:
            TemplateNotFoundError: If template_id is not registered
        """
        template = self._templates.get(template_id)
        if template is None:
            logger.warning(f"Template not found: {template_id}")
            raise TemplateNotFoundError(template_id)

        fields = template.fields
        if template.parent_template_id is not None:
            parent = self._templates[template.parent_template_id]
            fields = merge_field_maps(parent.fields, template.fields)

        if document_text:
            version = self.detect_version(document_text)
            logger.info(
                f"Detected template version: {version.version_id} "
                f"(confidence: {version.confidence:.3f})"
            )
        else:
            version = VersionMatch(version_id=template.id, confidence=1.0)

        return replace(template, fields=fields, detected_version=version)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)


@lru_cache()
def get_template_registry() -> TemplateRegistry:
    """Get the process-wide registry holding the rental agreement catalog.

    Built on first use and cached; the catalog is immutable.
    """
    registry = TemplateRegistry(RENTAL_AGREEMENT_TEMPLATES, VERSION_SIGNATURES)
    logger.debug(f"Initialized template registry with {len(registry)} templates")
    return registry


def get_template(template_id: str, document_text: Optional[str] = None) -> TemplateDefinition:
    """Resolve a template from the default registry."""
    return get_template_registry().get_template(template_id, document_text)


def get_available_templates() -> List[str]:
    """List template ids of the default registry."""
    return get_template_registry().get_available_templates()
