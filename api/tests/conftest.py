"""Pytest configuration and shared fixtures.

This module provides:
- An in-memory SQLite engine with the schema and role labels in place
- Repository fixtures bound to that engine
- An HTTP client for the FastAPI app, plus a login helper
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("REQUIRE_HTTPS", "false")
os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event, insert
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from core.database import Base
from core.wide_event import clear_wide_event, init_wide_event
from models import Role, UserRole
from repositories import ItemRepository, OrderRepository, UserRepository
from schemas import User

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def setup_wide_event():
    """Initialize wide_event context for all tests.

    In production RequestTimingMiddleware does this per request.
    """
    init_wide_event()
    yield
    clear_wide_event()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test, with tables and roles created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(
            insert(UserRole),
            [{"name": role.value} for role in (Role.ADMIN, Role.USER, Role.LOCKED)],
        )

    yield engine

    await engine.dispose()


@pytest.fixture
def user_repo(test_engine: AsyncEngine) -> UserRepository:
    return UserRepository(test_engine)


@pytest.fixture
def order_repo(test_engine: AsyncEngine) -> OrderRepository:
    return OrderRepository(test_engine)


@pytest.fixture
def item_repo(test_engine: AsyncEngine) -> ItemRepository:
    return ItemRepository(test_engine)


@pytest_asyncio.fixture
async def admin_user(user_repo: UserRepository) -> User:
    """Persisted admin with password ``password``."""
    return await user_repo.save(
        User(
            username="aanderson",
            password="password",
            first_name="Alice",
            last_name="Anderson",
            email="aanderson@example.com",
            role=Role.ADMIN,
        )
    )


@pytest_asyncio.fixture
async def regular_user(user_repo: UserRepository) -> User:
    """Persisted user with the ``User`` role and password ``password``."""
    return await user_repo.save(
        User(
            username="bbailey",
            password="password",
            first_name="Bob",
            last_name="Bailey",
            email="bbailey@example.com",
            role=Role.USER,
        )
    )


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(test_engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app, wired to the test engine.

    The lifespan is not run; the engine is placed on app.state directly.
    """
    from main import app

    app.state.engine = test_engine
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


async def login(client: AsyncClient, username: str, password: str = "password"):
    """POST /auth and keep the session cookie on ``client``."""
    response = await client.post(
        "/auth", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, admin_user: User) -> AsyncClient:
    await login(client, admin_user.username)
    return client


@pytest_asyncio.fixture
async def user_client(client: AsyncClient, regular_user: User) -> AsyncClient:
    await login(client, regular_user.username)
    return client
