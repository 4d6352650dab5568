"""FormField ORM — persists one input element of a form.

Invariants:
    - Always belongs to a Form (form_id FK, cascade on delete)
    - order is 0-based and contiguous within a form
    - options is NULL for non-choice types, a JSON list of strings otherwise

Design Decisions:
    - type stored as String, validated by core (FieldType) before insert
    - JSON column for options: kept verbatim, including empty strings
"""

import uuid

from sqlalchemy import String, Integer, Boolean, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from formcraft.db.base import Base


class FormField(Base):
    """Field entity: a single labelled input of a form."""
    __tablename__ = "form_fields"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    form_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False,
    )
    label: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    required: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    options: Mapped[list | None] = mapped_column(JSON, nullable=True)

    form: Mapped["Form"] = relationship("Form", back_populates="fields")
