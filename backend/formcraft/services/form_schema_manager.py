"""Form Schema Manager — validates, de-duplicates, and persists form definitions.

Invariants:
    - Validation errors are raised before any repository call
    - A slug already stored fails with SlugConflictError and performs no write
    - A uniqueness violation at create time is reported as SlugConflictError too
      (the pre-check and the insert are not atomic; the DB index decides)
    - Returned definitions have fields ordered by `order` ascending
    - A lookup slug that is not canonical is not found without a repository call
    - Nothing is retried

Design Decisions:
    - Impureim sandwich: pure prepare_definition, then repository IO
    - Repository injected as a Protocol: tests pass an in-memory fake
"""

import logging
from collections.abc import Mapping, Sequence

from formcraft.core.errors import (
    DuplicateKeyError, FormNotFoundError, SlugConflictError,
)
from formcraft.core.form_schema import FormDefinition, prepare_definition
from formcraft.core.repository_protocols import FormRepository
from formcraft.core.slugs import is_valid_slug

logger = logging.getLogger(__name__)


class FormSchemaManager:
    """Create, list, and read form definitions through a FormRepository."""

    def __init__(self, repository: FormRepository):
        self.repository = repository

    async def create_definition(
        self,
        title: str | None,
        fields: Sequence[Mapping] | None,
        slug: str | None = None,
    ) -> FormDefinition:
        """Validate, normalize, and store a new definition."""
        definition = prepare_definition(title, fields, slug)

        if await self.repository.find_by_slug(definition.slug) is not None:
            logger.info(
                f"Rejected form '{definition.title}': slug already taken",
                extra={"form_slug": definition.slug, "reason": "slug-conflict"},
            )
            raise SlugConflictError(definition.slug)

        try:
            stored = await self.repository.create_with_fields(definition)
        except DuplicateKeyError as e:
            logger.warning(
                f"Slug '{definition.slug}' claimed concurrently",
                extra={"form_slug": definition.slug, "reason": "slug-conflict"},
            )
            raise SlugConflictError(definition.slug) from e

        stored.fields = stored.ordered_fields()
        logger.info(
            f"Created form '{stored.title}'",
            extra={"form_slug": stored.slug, "field_count": len(stored.fields)},
        )
        return stored

    async def list_definitions(self) -> list[FormDefinition]:
        """All definitions, newest first, with response counts."""
        definitions = await self.repository.list_all()
        for definition in definitions:
            definition.fields = definition.ordered_fields()
        return definitions

    async def get_definition_by_slug(self, slug: str) -> FormDefinition:
        """Definition for slug, or FormNotFoundError."""
        if not is_valid_slug(slug):
            raise FormNotFoundError(slug)
        definition = await self.repository.find_by_slug(slug)
        if definition is None:
            raise FormNotFoundError(slug)
        definition.fields = definition.ordered_fields()
        return definition
