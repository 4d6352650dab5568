"""Form Definitions — create, list, and read-by-slug endpoints.

Invariants:
    - POST returns 201 with the stored definition, 400 on validation failure,
      409 on slug conflict (error envelope carries the reason code)
    - GET by slug returns 404 for unknown slugs, never an empty definition
    - Routes hold no business logic: FormSchemaManager decides everything

Design Decisions:
    - Manager built per request from the request's DB session (get_form_manager)
    - Errors propagate to the global handlers in api/error_handlers.py
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from formcraft.infrastructure.database import get_db
from formcraft.infrastructure.form_repository import SqlFormRepository
from formcraft.schemas.form import FormCreate, FormList, FormRead
from formcraft.services.form_schema_manager import FormSchemaManager

router = APIRouter(prefix="/api/v1/forms", tags=["forms"])


async def get_form_manager(
    db: AsyncSession = Depends(get_db),
) -> FormSchemaManager:
    return FormSchemaManager(SqlFormRepository(db))


@router.post(
    "", response_model=FormRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_form(
    body: FormCreate,
    manager: FormSchemaManager = Depends(get_form_manager),
):
    """Create a form definition from a title and ordered fields."""
    definition = await manager.create_definition(
        body.title, body.field_specs(), body.slug,
    )
    return FormRead.from_definition(definition)


@router.get("", response_model=FormList)
async def list_forms(
    manager: FormSchemaManager = Depends(get_form_manager),
):
    """List all forms, newest first, with response counts."""
    definitions = await manager.list_definitions()
    return FormList(
        forms=[FormRead.from_definition(d) for d in definitions],
    )


@router.get("/{slug}", response_model=FormRead)
async def get_form(
    slug: str,
    manager: FormSchemaManager = Depends(get_form_manager),
):
    """Read one form definition for rendering."""
    definition = await manager.get_definition_by_slug(slug)
    return FormRead.from_definition(definition)
