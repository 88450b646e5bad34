"""Layout version detection for rental agreement text.

Scores the document against every known signature and reports the most
credible one. Detection never fails: when nothing matches, a neutral default
with mid-range confidence is returned so extraction can proceed with the
standard template.
"""

import logging
from typing import List, Sequence

from domain.extraction.models import VersionMatch

from .definitions import TemplateDefinition, VersionSignature
from .signatures import DEFAULT_VERSION_CONFIDENCE, DEFAULT_VERSION_ID

logger = logging.getLogger(__name__)

# confidence = weight * (BASE_SHARE + FEATURE_SHARE * feature_confidence)
BASE_SHARE = 0.7
FEATURE_SHARE = 0.3


def default_version_match() -> VersionMatch:
    return VersionMatch(
        version_id=DEFAULT_VERSION_ID,
        confidence=DEFAULT_VERSION_CONFIDENCE,
        matched_features=[],
        total_features=0,
    )


def match_features(
    text: str,
    feature_field_names: Sequence[str],
    base_template: TemplateDefinition,
) -> List[str]:
    """Return the features whose first base-template pattern matches ``text``.

    Args:
        text: Full document text
        feature_field_names: Field names expected in the layout
        base_template: Template providing the feature patterns

    Returns:
        Matched feature names, in signature order
    """
    matched = []
    for feature in feature_field_names:
        field = base_template.fields.get(feature)
        if field is None or not field.patterns:
            continue
        if field.patterns[0].search(text):
            matched.append(feature)
    return matched


def score_signature(
    text: str,
    signature: VersionSignature,
    base_template: TemplateDefinition,
) -> VersionMatch | None:
    """Score one signature against the text, or None if its body pattern misses."""
    if not signature.body_pattern.search(text):
        return None

    total = len(signature.feature_field_names)
    matched = match_features(text, signature.feature_field_names, base_template)
    feature_confidence = len(matched) / total if total else 0.0
    confidence = signature.weight * (BASE_SHARE + FEATURE_SHARE * feature_confidence)

    return VersionMatch(
        version_id=signature.id,
        confidence=min(1.0, confidence),
        matched_features=matched,
        total_features=total,
    )


def detect_template_version(
    text: str,
    signatures: Sequence[VersionSignature],
    base_template: TemplateDefinition,
) -> VersionMatch:
    """Detect which known layout produced ``text``.

    Args:
        text: Full document text
        signatures: Known layout signatures, in catalog order
        base_template: Standard template whose first patterns define features

    Returns:
        Best scoring VersionMatch; ties keep catalog order. Falls back to
        the ``standard`` default (confidence 0.5) when no signature matches.

    Example:
        >>> match = detect_template_version(text, VERSION_SIGNATURES, STANDARD_RENTAL_AGREEMENT)
        >>> print(match.version_id, match.confidence)
        standard_rental_agreement_v1 1.0
    """
    matches: List[VersionMatch] = []

    for signature in signatures:
        try:
            match = score_signature(text, signature, base_template)
        except Exception as e:
            logger.warning(f"Error matching template version {signature.id}: {e}")
            continue

        if match is not None:
            logger.debug(
                f"Signature {signature.id} matched "
                f"({len(match.matched_features)}/{match.total_features} features, "
                f"confidence={match.confidence:.3f})"
            )
            matches.append(match)

    if not matches:
        return default_version_match()

    # sorted() is stable, so equal confidences keep catalog order
    matches = sorted(matches, key=lambda m: m.confidence, reverse=True)
    return matches[0]
