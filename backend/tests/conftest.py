"""
Restaurants API — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the test suite.
How:   Service tests run against an in-memory SQLite database (aiosqlite,
       foreign keys on) built from the ORM metadata. HTTP tests drive the
       FastAPI app through httpx's ASGITransport with the session dependency
       pointed at the same database.

Fixture Hierarchy (all function-scoped):
    db_engine ─┬─ session_factory ─┬─ db_session
               │                   └─ test_client
    bare_test_client (no schema)
    auth_headers, sample_user, mock_db_session
"""

import os

# Must be set before anything imports restaurants_api.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_KEY"] = "test-signing-key-with-at-least-32-bytes!"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from restaurants_api.config import settings
from restaurants_api.database import Base, configure_sqlite_connections, get_db_session
from restaurants_api.models import Category, Restaurant, User
from restaurants_api.security import create_access_token


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps the single SQLite connection alive for the whole test;
    without it every checkout would see an empty database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    configure_sqlite_connections(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for paths a real database cannot reach on demand
    (e.g. an UPDATE that loses a race).
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Data Helpers
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_user_data():
    return {
        "username": "alice",
        "password": "correct-pw",
        "email_address": "alice@example.com",
        "role": "Administrator",
        "surname": "Martin",
        "given_name": "Alice",
    }


@pytest_asyncio.fixture
async def sample_user(session_factory, sample_user_data) -> User:
    async with session_factory() as session:
        user = User(**sample_user_data)
        session.add(user)
        await session.commit()
        return user


@pytest.fixture
def seed_restaurants(session_factory):
    """
    Returns a coroutine function that inserts one category and its
    restaurants, committed.

    `restaurants` is a list of (name, rating) tuples. The coroutine returns
    the category id and the restaurant ids in insertion order.
    """

    async def _seed(category_name, restaurants):
        async with session_factory() as session:
            category = Category(name=category_name)
            session.add(category)
            await session.flush()
            rows = [
                Restaurant(
                    name=name,
                    address=f"{i} Main Street",
                    city="Montreal",
                    category_id=category.id,
                    rating=rating,
                )
                for i, (name, rating) in enumerate(restaurants, start=1)
            ]
            session.add_all(rows)
            await session.commit()
            return category.id, [r.id for r in rows]

    return _seed


# ══════════════════════════════════════════════════════════════════════════
# HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def auth_headers():
    """Bearer header carrying a valid token signed with the test settings."""
    user = User(
        username="editor",
        password="unused",
        email_address="editor@example.com",
        role="Editor",
        surname="Doe",
        given_name="Jane",
    )
    token = create_access_token(user, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app in-process.

    The session dependency is overridden to use the per-test database with
    the same commit/rollback behavior as production.
    """
    from restaurants_api.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def bare_test_client():
    """
    Client whose database has no tables at all, so every entity set is
    unavailable.
    """
    from restaurants_api.main import app

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
    await engine.dispose()
