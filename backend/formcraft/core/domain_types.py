"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - FormId, FieldId wrap UUIDs: never use bare UUID in domain logic
    - FieldType has exactly six members; only RADIO and CHECKBOX carry options
    - All valid states encoded as Enums: no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and store as plain strings
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

FormId = NewType("FormId", UUID)
FieldId = NewType("FieldId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class FieldType(str, Enum):
    """Input kinds a form field can render as: maps to DB `type` column."""
    TEXT = "TEXT"
    TEXTAREA = "TEXTAREA"
    NUMBER = "NUMBER"
    EMAIL = "EMAIL"
    RADIO = "RADIO"
    CHECKBOX = "CHECKBOX"

    @property
    def has_options(self) -> bool:
        return self in CHOICE_FIELD_TYPES


CHOICE_FIELD_TYPES = frozenset({FieldType.RADIO, FieldType.CHECKBOX})


class ValidationReason(str, Enum):
    """Why a proposed form definition was rejected. Values are wire reason codes."""
    MISSING_TITLE = "missing-title"
    MISSING_FIELDS = "missing-fields"
    INVALID_FIELD_TYPE = "invalid-field-type"
    UNSLUGIFIABLE_TITLE = "unslugifiable-title"
    INVALID_SLUG = "invalid-slug"


def parse_field_type(value: object) -> FieldType | None:
    """Map a raw type value to FieldType, or None when unrecognized.

    Matching is exact: "text" is not TEXT.
    """
    if isinstance(value, FieldType):
        return value
    if not isinstance(value, str):
        return None
    try:
        return FieldType(value)
    except ValueError:
        return None
