"""FormResponse ORM — a submission against a form.

Invariants:
    - Always belongs to a Form (form_id FK, cascade on delete)
    - Only counted by the API; no endpoint reads or writes responses

Design Decisions:
    - JSON column for answers: schema follows the form's fields, not fixed columns
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from formcraft.db.base import Base


class FormResponse(Base):
    """Response entity: answers submitted for one form."""
    __tablename__ = "form_responses"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    form_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("forms.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    answers: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    form: Mapped["Form"] = relationship("Form", back_populates="responses")
