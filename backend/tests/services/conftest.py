"""Service test fixtures — async DB, FastAPI test client, and an in-memory repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness probes see the test engine
    - fake_repository implements the FormRepository protocol without a database

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the slug unique index
    - fake_repository hands out deep copies: callers cannot mutate stored state
"""

import copy
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from formcraft.core.domain_types import FieldId, FormId
from formcraft.core.errors import DuplicateKeyError
from formcraft.core.form_schema import FormDefinition
from formcraft.db.base import Base
from formcraft.infrastructure.database import get_db, DatabaseSessionManager
import formcraft.infrastructure.database as db_module
import formcraft.models  # noqa: F401
from formcraft.main import app


class FakeFormRepository:
    """In-memory FormRepository with hooks for conflict and failure scenarios."""

    def __init__(self):
        self.forms: dict[str, FormDefinition] = {}
        self.response_counts: dict[str, int] = {}
        # Slugs that find_by_slug misses but the insert rejects (lost race)
        self.raced_slugs: set[str] = set()
        self.find_calls: list[str] = []
        self.created: list[FormDefinition] = []
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    async def find_by_slug(self, slug: str) -> FormDefinition | None:
        self.find_calls.append(slug)
        stored = self.forms.get(slug)
        return copy.deepcopy(stored) if stored else None

    async def create_with_fields(
        self, definition: FormDefinition,
    ) -> FormDefinition:
        self.created.append(copy.deepcopy(definition))
        if definition.slug in self.forms or definition.slug in self.raced_slugs:
            raise DuplicateKeyError("forms.slug")
        stored = copy.deepcopy(definition)
        stored.id = FormId(uuid4())
        self._clock += timedelta(seconds=1)
        stored.created_at = self._clock
        for f in stored.fields:
            f.id = FieldId(uuid4())
        self.forms[stored.slug] = stored
        return copy.deepcopy(stored)

    async def list_all(self) -> list[FormDefinition]:
        result = []
        for stored in sorted(
            self.forms.values(), key=lambda d: d.created_at, reverse=True,
        ):
            item = copy.deepcopy(stored)
            item.response_count = self.response_counts.get(item.slug, 0)
            result.append(item)
        return result


@pytest.fixture
def fake_repository():
    return FakeFormRepository()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def session_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_session_factory, session_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = session_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
