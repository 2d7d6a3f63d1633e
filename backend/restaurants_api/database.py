"""
Restaurants API — Database Session Management
==============================================

What:  Async SQLAlchemy engine, session factory, declarative base, and the
       FastAPI session dependency.
How:   Creates an async engine from `Settings`, provides a session dependency
       that commits on success and rolls back on error.
Who:   Route handlers receive sessions via `Depends(get_db_session)`;
       services receive them as their first argument.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    PostgreSQL (asyncpg) gets a sized QueuePool with pre-ping and hourly
    recycling. SQLite (aiosqlite) keeps SQLAlchemy's default pool for the URL.
    Every SQLite connection gets `PRAGMA foreign_keys=ON`, otherwise the
    restaurants → categories cascade would not fire, and a Unicode-aware
    `lower()` in place of the ASCII-only built-in.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import event
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from restaurants_api.config import Settings, settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on `Base.metadata`, which Alembic and the
    test fixtures use to create the schema.
    """
    pass


# Raised when an entity set cannot be read at all: SQLite reports a missing
# table as OperationalError, PostgreSQL (UndefinedTable) as ProgrammingError.
UNAVAILABLE_STORE_ERRORS = (OperationalError, ProgrammingError)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def configure_sqlite_connections(engine: AsyncEngine) -> None:
    """
    Per-connection SQLite setup.

    - FK enforcement, so ON DELETE CASCADE fires
    - `lower()` replaced by Python's str.lower, matching PostgreSQL for
      non-ASCII usernames
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _configure(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        dbapi_connection.create_function("lower", 1, _unicode_lower)


def build_engine(config: Settings) -> AsyncEngine:
    """
    Create the async engine described by `config`.

    Pool arguments are only passed for server databases; SQLite's pool
    classes reject `pool_size` and `max_overflow`.
    """
    kwargs: Dict[str, Any] = {"echo": config.log_level == "DEBUG"}
    if not config.is_sqlite:
        kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )

    new_engine = create_async_engine(config.database_url, **kwargs)
    if config.is_sqlite:
        configure_sqlite_connections(new_engine)
    return new_engine


# ── Engine & Session Factory ──────────────────────────────────────────────
engine = build_engine(settings)

# expire_on_commit=False: response models are built from ORM objects after
# the flush, and attribute access must not trigger a lazy reload
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler (services flush their changes)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections. Called from the app lifespan on shutdown."""
    await engine.dispose()
