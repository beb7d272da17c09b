"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy without a running Postgres:

1. Each test gets its own aiosqlite engine on ":memory:" with a StaticPool,
   so every session in the test sees the same single connection/database.
2. Tables come straight from the ORM metadata (init_models).
3. Services are wired with build_services(), exactly like the CLI does.

bcrypt_rounds=4 keeps hashing fast; the algorithm is unchanged.
"""

import pytest
import pytest_asyncio
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from boardkeep.config import Settings
from boardkeep.container import build_services
from boardkeep.db.engine import create_session_factory, init_models

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI reconfigures structlog; don't let that leak between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def settings():
    return Settings(
        database_url=TEST_DB_URL,
        jwt_secret="test-secret-not-for-production",
        access_token_expire_minutes=5,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture()
async def db_session():
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    session: AsyncSession = create_session_factory(engine)()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest.fixture()
def services(settings, db_session):
    return build_services(settings, db_session)


@pytest_asyncio.fixture()
async def alice(services):
    """A signed-up user, resolved through a real token."""
    await services.auth.sign_up("alice", "alicepass1")
    token = await services.auth.sign_in("alice", "alicepass1")
    return await services.auth.authenticate(token)


@pytest_asyncio.fixture()
async def bob(services):
    await services.auth.sign_up("bobby", "bobbypass1")
    token = await services.auth.sign_in("bobby", "bobbypass1")
    return await services.auth.authenticate(token)

