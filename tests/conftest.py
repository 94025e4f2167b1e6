"""Root conftest: test infrastructure for all backend tests.

Provides:
- In-memory SQLite db_session fixture (fresh schema per test)
- Customer, establishment and admin user fixtures
- API clients with dependency overrides, one per role
- Autouse mock for Supabase (Auth admin API and Storage)
"""

from __future__ import annotations

import uuid
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import couponhub.models  # noqa: F401  (registers tables on SQLModel.metadata)
from couponhub.core.roles import UserRole
from couponhub.models.user import User

from tests.helpers.factories import TestDataFactory

# ─────────────────────────────────────────────────────────────────────────────
# Database (SQLite in memory, one schema per test)
# ─────────────────────────────────────────────────────────────────────────────

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
async def db_engine():
    """A fresh in-memory database with every table created.

    StaticPool keeps a single connection so all sessions see the same memory DB.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Session on the test database. Data is dropped with the engine."""
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def customer_user(db_session: AsyncSession) -> User:
    """A customer with complete contact data."""
    return await TestDataFactory.create_user(db_session, UserRole.CUSTOMER)


@pytest.fixture
async def second_customer(db_session: AsyncSession) -> User:
    return await TestDataFactory.create_user(db_session, UserRole.CUSTOMER)


@pytest.fixture
async def establishment_user(db_session: AsyncSession) -> User:
    """An establishment account that publishes coupons."""
    return await TestDataFactory.create_user(db_session, UserRole.ESTABLISHMENT)


@pytest.fixture
async def other_establishment(db_session: AsyncSession) -> User:
    """An establishment that does NOT own the test coupons. For scoping tests."""
    return await TestDataFactory.create_user(db_session, UserRole.ESTABLISHMENT)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await TestDataFactory.create_user(db_session, UserRole.ADMIN)


# ─────────────────────────────────────────────────────────────────────────────
# API Clients
# ─────────────────────────────────────────────────────────────────────────────


async def _client_as(db_session: AsyncSession, user: User | None):
    """HTTP client that bypasses JWT auth (when user is given) and uses db_session."""
    from couponhub.api.deps.auth import get_current_user
    from couponhub.core.database import get_db
    from couponhub.main import app

    if user is not None:
        app.dependency_overrides[get_current_user] = lambda: user

    async def override_db():
        yield db_session

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def unauth_client(db_session: AsyncSession):
    """HTTP client with no credentials; real auth dependency runs."""
    async for client in _client_as(db_session, None):
        yield client


@pytest.fixture
async def customer_client(db_session: AsyncSession, customer_user):
    async for client in _client_as(db_session, customer_user):
        yield client


@pytest.fixture
async def establishment_client(db_session: AsyncSession, establishment_user):
    async for client in _client_as(db_session, establishment_user):
        yield client


@pytest.fixture
async def other_establishment_client(db_session: AsyncSession, other_establishment):
    async for client in _client_as(db_session, other_establishment):
        yield client


@pytest.fixture
async def admin_client(db_session: AsyncSession, admin_user):
    async for client in _client_as(db_session, admin_user):
        yield client


# ─────────────────────────────────────────────────────────────────────────────
# External Service Mocks (autouse)
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def mock_supabase():
    """SAFETY: never reach the real Supabase project from tests.

    Both the Auth admin calls and Storage uploads get the same mock client;
    tests configure its return values or side effects as needed.
    """
    client = MagicMock()
    client.auth.admin.invite_user_by_email.return_value = MagicMock(
        user=MagicMock(id=str(uuid.uuid4()))
    )
    client.storage.from_.return_value.get_public_url.return_value = (
        "https://example.supabase.co/storage/v1/object/public/coupon-images/file.png"
    )

    with (
        patch(
            "couponhub.services.identity_provider.get_supabase_admin_client",
            return_value=client,
        ),
        patch(
            "couponhub.services.storage.get_supabase_admin_client",
            return_value=client,
        ),
    ):
        yield client
