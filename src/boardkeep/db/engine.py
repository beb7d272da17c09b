"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-operation database access. The engine is built from an
explicit Settings object at process start; nothing here reads the environment.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from boardkeep.config import Settings
from boardkeep.db.models import Base

# What a persistence failure looks like. Drivers raise OSError subclasses
# (ConnectionRefusedError, socket timeouts) straight through on connect.
STORAGE_ERRORS = (SQLAlchemyError, OSError)


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the engine. echo=True when debug is on to see SQL queries."""
    kwargs = {"echo": settings.debug}
    # SQLite uses a static/single-connection pool that rejects sizing args.
    if not settings.database_url.startswith("sqlite"):
        kwargs.update(pool_size=5, max_overflow=15, pool_pre_ping=True)
    return create_async_engine(settings.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory — each operation gets its own session."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables from the ORM metadata.

    Learn: Production schemas are owned by Alembic (db/migrations). This is
    for tests and first-run bootstrapping of a throwaway database.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
