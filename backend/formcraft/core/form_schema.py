"""Form Schema Rules — pure validation and normalization of form definitions.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - check_* return a FormValidationError on violation, None on success
    - validate_form_input chains all checks: first error wins
    - Normalized fields have order == position (0, 1, 2, ...) regardless of client values
    - options present (possibly empty, kept verbatim) only for RADIO/CHECKBOX fields

Design Decisions:
    - Field specs arrive as plain dicts: core stays independent of the API schemas
    - Return errors (not raise) from check_*: checks compose with `or` and are
      testable without pytest.raises; prepare_definition raises the first one
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from formcraft.core.domain_types import (
    FieldId, FieldType, FormId, ValidationReason, parse_field_type,
)
from formcraft.core.errors import ErrorContext, FormValidationError
from formcraft.core.slugs import generate_slug


@dataclass
class FieldDefinition:
    """One input element of a form."""
    label: str
    type: FieldType
    required: bool
    order: int
    options: list[str] | None = None
    id: FieldId | None = None


@dataclass
class FormDefinition:
    """Persisted (or about-to-be-persisted) schema of a form."""
    title: str
    slug: str
    fields: list[FieldDefinition] = field(default_factory=list)
    id: FormId | None = None
    created_at: datetime | None = None
    response_count: int | None = None

    def ordered_fields(self) -> list[FieldDefinition]:
        return sorted(self.fields, key=lambda f: f.order)


# ─── Checks ──────────────────────────────────────────────────────

def check_title(title: str | None) -> FormValidationError | None:
    """Title must be non-empty after trimming."""
    if not title or not title.strip():
        return FormValidationError(ValidationReason.MISSING_TITLE)
    return None


def check_fields_present(fields: Sequence[Mapping] | None) -> FormValidationError | None:
    """At least one field is required."""
    if not fields:
        return FormValidationError(ValidationReason.MISSING_FIELDS)
    return None


def check_field_types(fields: Sequence[Mapping]) -> FormValidationError | None:
    """Every field type must be one of the six recognized kinds."""
    for index, spec in enumerate(fields):
        raw_type = spec.get("type")
        if parse_field_type(raw_type) is None:
            return FormValidationError(
                ValidationReason.INVALID_FIELD_TYPE,
                f"Field {index} has unrecognized type {raw_type!r}",
                ErrorContext(field_index=index),
            )
    return None


def validate_form_input(
    title: str | None, fields: Sequence[Mapping] | None,
) -> FormValidationError | None:
    """Chain all definition checks. Returns first error or None."""
    return (
        check_title(title)
        or check_fields_present(fields)
        or check_field_types(fields)
    )


# ─── Normalization ───────────────────────────────────────────────

def resolve_slug(title: str, slug: str | None = None) -> str:
    """Canonical slug: caller's slug normalized, else derived from the title.

    Raises FormValidationError when the result would be empty.
    """
    if slug is not None:
        candidate = generate_slug(slug)
        if not candidate:
            raise FormValidationError(ValidationReason.INVALID_SLUG)
        return candidate
    candidate = generate_slug(title)
    if not candidate:
        raise FormValidationError(ValidationReason.UNSLUGIFIABLE_TITLE)
    return candidate


def normalize_field(spec: Mapping, position: int) -> FieldDefinition:
    """Build a FieldDefinition with order forced to position."""
    field_type = parse_field_type(spec.get("type"))
    if field_type is None:
        raise FormValidationError(
            ValidationReason.INVALID_FIELD_TYPE,
            context=ErrorContext(field_index=position),
        )
    options = None
    if field_type.has_options:
        options = list(spec.get("options") or [])
    return FieldDefinition(
        label=spec.get("label") or "",
        type=field_type,
        required=bool(spec.get("required", False)),
        order=position,
        options=options,
    )


def prepare_definition(
    title: str | None,
    fields: Sequence[Mapping] | None,
    slug: str | None = None,
) -> FormDefinition:
    """Validate and normalize a proposed definition, ready for storage."""
    error = validate_form_input(title, fields)
    if error:
        raise error
    clean_title = title.strip()
    return FormDefinition(
        title=clean_title,
        slug=resolve_slug(clean_title, slug),
        fields=[normalize_field(spec, i) for i, spec in enumerate(fields)],
    )
