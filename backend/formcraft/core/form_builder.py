"""Form Builder — local edit buffer for composing a form before submit.

Invariants:
    - fields[i].order == i after every add/remove
    - Choice fields (RADIO, CHECKBOX) always have an options list; others have None
    - New choice fields start with a single empty option
    - Nothing here talks to storage: to_payload() is the only output

Design Decisions:
    - Plain mutable dataclass edited in place: one editor owns the buffer
    - Draft ids are local strings (uuid4 hex), unrelated to storage identifiers
"""

import uuid
from dataclasses import dataclass, field

from formcraft.core.domain_types import FieldType, ValidationReason

_EDITABLE_ATTRIBUTES = frozenset({"label", "type", "required"})


@dataclass
class FieldDraft:
    """A field being edited. Becomes a field spec on submit."""
    id: str
    type: FieldType
    order: int
    label: str = ""
    required: bool = False
    options: list[str] | None = None

    def to_spec(self) -> dict:
        spec = {
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "order": self.order,
        }
        if self.options is not None:
            spec["options"] = list(self.options)
        return spec


@dataclass
class FormBuilder:
    """Ordered edit buffer for one form: pure dataclass, no IO."""

    title: str = ""
    fields: list[FieldDraft] = field(default_factory=list)

    def add_field(self, field_type: FieldType) -> FieldDraft:
        field_type = FieldType(field_type)
        draft = FieldDraft(
            id=uuid.uuid4().hex,
            type=field_type,
            order=len(self.fields),
            options=[""] if field_type.has_options else None,
        )
        self.fields.append(draft)
        return draft

    def get_field(self, field_id: str) -> FieldDraft:
        for draft in self.fields:
            if draft.id == field_id:
                return draft
        raise KeyError(field_id)

    def update_field(self, field_id: str, **updates) -> FieldDraft:
        """Apply label/type/required changes. Type changes reconcile options."""
        unknown = set(updates) - _EDITABLE_ATTRIBUTES
        if unknown:
            raise ValueError(f"Cannot update field attributes: {sorted(unknown)}")
        draft = self.get_field(field_id)
        if "type" in updates:
            new_type = FieldType(updates["type"])
            if new_type.has_options and draft.options is None:
                draft.options = [""]
            elif not new_type.has_options:
                draft.options = None
            draft.type = new_type
        if "label" in updates:
            draft.label = updates["label"]
        if "required" in updates:
            draft.required = bool(updates["required"])
        return draft

    def remove_field(self, field_id: str) -> None:
        draft = self.get_field(field_id)
        self.fields.remove(draft)
        for position, remaining in enumerate(self.fields):
            remaining.order = position

    # ─── Options ─────────────────────────────────────────────────

    def _choice_field(self, field_id: str) -> FieldDraft:
        draft = self.get_field(field_id)
        if draft.options is None:
            raise ValueError(f"{draft.type.value} fields have no options")
        return draft

    def add_option(self, field_id: str, value: str = "") -> None:
        self._choice_field(field_id).options.append(value)

    def update_option(self, field_id: str, index: int, value: str) -> None:
        options = self._choice_field(field_id).options
        if not 0 <= index < len(options):
            raise IndexError(index)
        options[index] = value

    def remove_option(self, field_id: str, index: int) -> None:
        options = self._choice_field(field_id).options
        if not 0 <= index < len(options):
            raise IndexError(index)
        del options[index]

    # ─── Submit ──────────────────────────────────────────────────

    def missing_requirements(self) -> list[ValidationReason]:
        """Client-side pre-submit check. Empty list means ready to submit."""
        missing = []
        if not self.title.strip():
            missing.append(ValidationReason.MISSING_TITLE)
        if not self.fields:
            missing.append(ValidationReason.MISSING_FIELDS)
        return missing

    def to_payload(self) -> dict:
        """Materialize the buffer as a create-form request body."""
        return {
            "title": self.title,
            "fields": [draft.to_spec() for draft in self.fields],
        }
