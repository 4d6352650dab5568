"""Form ORM — persists the aggregate root of a form definition.

Invariants:
    - id is UUID primary key (client-side default)
    - slug is unique across all forms (DB unique index is the source of truth)
    - fields are loaded ordered by `order` ascending

Design Decisions:
    - cascade delete for fields and responses: a form owns both
    - selectin loading for fields: avoids lazy-load IO in async context
    - responses are write-only: never loaded with the form, counted by query,
      and removed by the FK's ON DELETE CASCADE
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, WriteOnlyMapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from formcraft.db.base import Base


class Form(Base):
    """Form aggregate root: owns its fields and responses."""
    __tablename__ = "forms"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(500), nullable=False, unique=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    fields: Mapped[list["FormField"]] = relationship(
        "FormField", back_populates="form",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="FormField.order",
    )
    responses: WriteOnlyMapped["FormResponse"] = relationship(
        "FormResponse", back_populates="form",
        cascade="all, delete-orphan", passive_deletes=True,
        lazy="write_only",
    )
