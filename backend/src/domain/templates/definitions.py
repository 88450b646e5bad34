"""Typed records describing extraction templates and layout signatures.

Definitions are static configuration: built once when the catalog modules are
imported and never mutated afterwards, so they can be shared between threads
without locking.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple, Union

from domain.extraction.models import VersionMatch
from domain.extraction.transformations import TRANSFORMATIONS
from domain.extraction.validations import VALIDATIONS

PatternSpec = Union[str, "re.Pattern[str]"]


def compile_pattern(pattern: PatternSpec, flags: int = re.IGNORECASE | re.ASCII) -> "re.Pattern[str]":
    """Compile a pattern source, passing through already compiled patterns."""
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, flags)


@dataclass(frozen=True)
class FieldDefinition:
    """Extraction rule bundle for one data point.

    Attributes:
        display_name: Human readable name, also used for the contextual
            confidence boost
        description: What the field holds
        required: Whether a missing value is reported on the result
        patterns: Ordered regexes; group 1 captures the value and the first
            pattern that captures something wins
        transformations: Names of registered transformations, applied in order
        validations: Names of registered validations, used for scoring only
    """

    display_name: str
    description: str = ""
    required: bool = False
    patterns: Tuple["re.Pattern[str]", ...] = ()
    transformations: Tuple[str, ...] = ()
    validations: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "patterns", tuple(compile_pattern(p) for p in self.patterns))
        object.__setattr__(self, "transformations", tuple(self.transformations))
        object.__setattr__(self, "validations", tuple(self.validations))

        for pattern in self.patterns:
            if pattern.groups < 1:
                raise ValueError(
                    f"Pattern {pattern.pattern!r} for field {self.display_name!r} "
                    "has no capture group"
                )

        unknown = [name for name in self.transformations if name not in TRANSFORMATIONS]
        if unknown:
            raise ValueError(f"Unknown transformations for {self.display_name!r}: {unknown}")

        unknown = [name for name in self.validations if name not in VALIDATIONS]
        if unknown:
            raise ValueError(f"Unknown validations for {self.display_name!r}: {unknown}")

    def to_dict(self) -> dict:
        """Serializable form (pattern sources and flags instead of compiled objects)."""
        return {
            "display_name": self.display_name,
            "description": self.description,
            "required": self.required,
            "patterns": [
                {"source": p.pattern, "flags": int(p.flags & ~re.UNICODE)}
                for p in self.patterns
            ],
            "transformations": list(self.transformations),
            "validations": list(self.validations),
        }


@dataclass(frozen=True)
class TemplateDefinition:
    """Named field-definition map describing one document layout family.

    ``fields`` keeps declaration order, which is also extraction order.
    ``detected_version`` is only set on templates returned by the registry.
    """

    id: str
    name: str
    fields: Mapping[str, FieldDefinition]
    description: str = ""
    version: str = "1.0"
    parent_template_id: Optional[str] = None
    detected_version: Optional[VersionMatch] = None

    def __post_init__(self):
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.fields)

    @property
    def required_field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, f in self.fields.items() if f.required)


@dataclass(frozen=True)
class VersionSignature:
    """Heuristic fingerprint of a known document layout.

    Attributes:
        id: Layout version id reported on a match
        body_pattern: Regex searched against the whole text
        weight: Prior credibility of the signature, between 0 and 1
        feature_field_names: Standard template fields expected in this layout
    """

    id: str
    body_pattern: "re.Pattern[str]"
    weight: float = 1.0
    feature_field_names: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(
            self, "body_pattern", compile_pattern(self.body_pattern, re.DOTALL | re.ASCII)
        )
        object.__setattr__(self, "feature_field_names", tuple(self.feature_field_names))
        if not 0.0 <= self.weight <= 1.0:
            raise ValueError(f"Signature {self.id!r} weight must be within [0, 1], got {self.weight}")


def field_definition(
    display_name: str,
    patterns: Sequence[PatternSpec],
    description: str = "",
    required: bool = False,
    transformations: Sequence[str] = (),
    validations: Sequence[str] = (),
) -> FieldDefinition:
    """Convenience constructor used by the template catalog."""
    return FieldDefinition(
        display_name=display_name,
        description=description,
        required=required,
        patterns=tuple(patterns),
        transformations=tuple(transformations),
        validations=tuple(validations),
    )
