"""Form Schemas — Pydantic models for the form definition endpoints.

Invariants:
    - FormCreate accepts empty, null, or missing title/fields and any field type
      value: those are business-rule failures reported by core with precise
      reason codes
    - FieldCreate.order is accepted but ignored (server re-indexes by position)
    - FormRead.fields are ordered by `order` ascending

Design Decisions:
    - type as Any on input, FieldType on output: invalid types reach core
      and fail with invalid-field-type instead of a generic schema error
    - from_definition builders keep domain dataclasses out of route bodies
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from formcraft.core.domain_types import FieldType
from formcraft.core.form_schema import FieldDefinition, FormDefinition


class FieldCreate(BaseModel):
    """One field spec in a create request."""
    label: str = Field("", max_length=500)
    type: Any = None
    required: bool = False
    order: int | None = None
    options: list[str] | None = None


class FormCreate(BaseModel):
    """Form creation: title, optional explicit slug, ordered fields."""
    title: str | None = Field("", max_length=500)
    slug: str | None = Field(None, max_length=500)
    fields: list[FieldCreate] | None = None

    def field_specs(self) -> list[dict] | None:
        if self.fields is None:
            return None
        return [f.model_dump() for f in self.fields]


class FieldRead(BaseModel):
    """Stored field: public-facing field data."""
    id: UUID | None = None
    label: str
    type: FieldType
    required: bool
    order: int
    options: list[str] | None = None

    @classmethod
    def from_definition(cls, f: FieldDefinition) -> "FieldRead":
        return cls(
            id=f.id, label=f.label, type=f.type, required=f.required,
            order=f.order, options=f.options,
        )


class FormRead(BaseModel):
    """Stored form definition: public-facing form data."""
    id: UUID | None = None
    title: str
    slug: str
    created_at: datetime | None = None
    fields: list[FieldRead]
    response_count: int | None = None

    @classmethod
    def from_definition(cls, d: FormDefinition) -> "FormRead":
        return cls(
            id=d.id,
            title=d.title,
            slug=d.slug,
            created_at=d.created_at,
            fields=[FieldRead.from_definition(f) for f in d.ordered_fields()],
            response_count=d.response_count,
        )


class FormList(BaseModel):
    """All form definitions, newest first."""
    forms: list[FormRead]
