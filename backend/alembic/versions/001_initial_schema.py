"""Initial schema — forms, form_fields, form_responses.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "forms",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("slug", sa.String(500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_forms_slug", "forms", ["slug"], unique=True)

    op.create_table(
        "form_fields",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("form_id", UUID(as_uuid=True), sa.ForeignKey("forms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("label", sa.String(500), nullable=False, server_default=""),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("required", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("order", sa.Integer, nullable=False),
        sa.Column("options", sa.JSON, nullable=True),
    )

    op.create_table(
        "form_responses",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("form_id", UUID(as_uuid=True), sa.ForeignKey("forms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("answers", sa.JSON, nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_form_responses_form_id", "form_responses", ["form_id"])


def downgrade() -> None:
    op.drop_index("ix_form_responses_form_id", table_name="form_responses")
    op.drop_table("form_responses")
    op.drop_table("form_fields")
    op.drop_index("ix_forms_slug", table_name="forms")
    op.drop_table("forms")
