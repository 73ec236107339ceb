"""Service test fixtures — async DB, FastAPI test client, fake store, bearer tokens.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - fake_store is an unlocked in-memory CategoryStore for service-level tests

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (FOR UPDATE is a no-op there; locking is not exercised)
"""

import asyncio
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from event_categories.config import get_settings
from event_categories.core.errors import DuplicateCategoryNameError
from event_categories.db.base import Base
from event_categories.infrastructure.database import get_db
from event_categories.main import app
from event_categories.models.event_category import EventCategory
from event_categories.models.user import User


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
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_db):
    """Insert a user with `categories` pre-existing categories."""
    async def _make(user_id: str = "user_1", plan: str = "FREE", categories: int = 0):
        test_db.add(User(id=user_id, plan=plan))
        for i in range(categories):
            test_db.add(EventCategory(
                name=f"existing-{i}", color=0, user_id=user_id,
            ))
        await test_db.commit()
    return _make


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user id, signed like the identity provider."""
    def _headers(user_id: str = "user_1", expires_in: timedelta = timedelta(hours=1)) -> dict:
        settings = get_settings()
        token = jwt.encode(
            {
                settings.auth_user_claim: user_id,
                "exp": datetime.now(timezone.utc) + expires_in,
            },
            settings.auth_jwt_secret,
            algorithm=settings.auth_jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers


class FakeCategoryStore:
    """In-memory CategoryStore without any locking.

    failures: operation name -> exception raised on that call.
    yield_after_count: suspend after reading the count, so concurrent callers interleave.
    """

    def __init__(self):
        self.plans: dict[str, str] = {}
        self.rows: list[tuple] = []
        self.failures: dict[str, Exception] = {}
        self.yield_after_count = False

    async def get_user_plan(self, user_id):
        self._maybe_fail("get_user_plan")
        return self.plans.get(user_id)

    async def count_categories(self, user_id):
        self._maybe_fail("count_categories")
        count = len(self.owned_by(user_id))
        if self.yield_after_count:
            await asyncio.sleep(0)
        return count

    async def insert_category(self, user_id, category):
        self._maybe_fail("insert_category")
        if any(c.name == category.name for c in self.owned_by(user_id)):
            raise DuplicateCategoryNameError(category.name)
        self.rows.append((user_id, category))

    def owned_by(self, user_id) -> list:
        return [category for owner, category in self.rows if owner == user_id]

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failures:
            raise self.failures[operation]


@pytest.fixture
def fake_store():
    return FakeCategoryStore()
