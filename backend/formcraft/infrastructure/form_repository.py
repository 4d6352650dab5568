"""SQL Form Repository — SQLAlchemy implementation of the FormRepository protocol.

Invariants:
    - create_with_fields writes the form and all its fields in one commit
    - A unique-slug violation at commit surfaces as DuplicateKeyError, after rollback
    - Returned definitions are detached domain objects (no ORM instances leak out)
    - Fields are returned ordered by `order` ascending

Design Decisions:
    - Response counts come from a grouped subquery joined once, not N+1 counts
    - created_at desc with id as tie-breaker: stable newest-first listing
    - populate_existing on reads: objects expired by a rolled-back insert are
      reloaded together with their fields
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from formcraft.core.domain_types import FieldId, FieldType, FormId
from formcraft.core.errors import DuplicateKeyError
from formcraft.core.form_schema import FieldDefinition, FormDefinition
from formcraft.models.form import Form
from formcraft.models.form_field import FormField
from formcraft.models.form_response import FormResponse

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    detail = str(exc.orig).lower()
    return "unique" in detail or "duplicate" in detail


def _to_definition(
    form: Form, response_count: int | None = None,
) -> FormDefinition:
    """Map an ORM Form (with loaded fields) to a domain FormDefinition."""
    fields = [
        FieldDefinition(
            label=f.label,
            type=FieldType(f.type),
            required=f.required,
            order=f.order,
            options=list(f.options) if f.options is not None else None,
            id=FieldId(f.id),
        )
        for f in sorted(form.fields, key=lambda f: f.order)
    ]
    return FormDefinition(
        title=form.title,
        slug=form.slug,
        fields=fields,
        id=FormId(form.id),
        created_at=form.created_at,
        response_count=response_count,
    )


class SqlFormRepository:
    """Form persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_slug(self, slug: str) -> FormDefinition | None:
        result = await self.db.execute(
            select(Form)
            .where(Form.slug == slug)
            .execution_options(populate_existing=True),
        )
        form = result.scalar_one_or_none()
        if form is None:
            return None
        return _to_definition(form)

    async def create_with_fields(
        self, definition: FormDefinition,
    ) -> FormDefinition:
        """Insert form + fields atomically. Raises DuplicateKeyError on slug clash."""
        form = Form(
            title=definition.title,
            slug=definition.slug,
            fields=[
                FormField(
                    label=f.label,
                    type=f.type.value,
                    required=f.required,
                    order=f.order,
                    options=list(f.options) if f.options is not None else None,
                )
                for f in definition.ordered_fields()
            ],
        )
        self.db.add(form)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not _is_unique_violation(e):
                raise
            logger.warning(
                f"Unique constraint rejected form slug '{definition.slug}'",
                extra={"form_slug": definition.slug},
            )
            raise DuplicateKeyError("forms.slug") from e
        return _to_definition(form)

    async def list_all(self) -> list[FormDefinition]:
        counts = (
            select(
                FormResponse.form_id,
                func.count(FormResponse.id).label("response_count"),
            )
            .group_by(FormResponse.form_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Form, func.coalesce(counts.c.response_count, 0))
            .outerjoin(counts, counts.c.form_id == Form.id)
            .order_by(Form.created_at.desc(), Form.id)
            .execution_options(populate_existing=True),
        )
        return [
            _to_definition(form, response_count=count)
            for form, count in result.all()
        ]
