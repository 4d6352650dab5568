"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All storage operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO, while the validation rules in
      core/form_schema.py stay synchronous and pure
"""

from typing import Protocol

from formcraft.core.form_schema import FormDefinition


class FormRepository(Protocol):
    """Contract for form definition persistence: implemented by shell."""

    async def find_by_slug(self, slug: str) -> FormDefinition | None: ...

    async def create_with_fields(
        self, definition: FormDefinition,
    ) -> FormDefinition:
        """Persist definition and fields atomically.

        Raises DuplicateKeyError when the slug is already stored.
        """
        ...

    async def list_all(self) -> list[FormDefinition]:
        """All definitions newest-first, with response_count populated."""
        ...
