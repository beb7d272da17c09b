"""Credential store tests — lookups, conflicts, storage failures."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from boardkeep.auth.credentials import CredentialStore
from boardkeep.db.engine import create_engine, create_session_factory
from boardkeep.errors import CredentialConflict, StorageUnavailable

UNREACHABLE_URL = "postgresql+asyncpg://u:p@127.0.0.1:1/x"


@pytest.fixture()
def store(db_session):
    return CredentialStore(db_session, bcrypt_rounds=4)


@pytest.mark.asyncio
async def test_find_absent_user_returns_none(store):
    assert await store.find_user_by_username("ghost") is None


@pytest.mark.asyncio
async def test_verify_password_returns_bool(store):
    await store.create_user("dave1", "davepass1")
    user = await store.find_user_by_username("dave1")

    assert await store.verify_password(user, "davepass1") is True
    assert await store.verify_password(user, "nope1234") is False


@pytest.mark.asyncio
async def test_conflict_leaves_session_usable(store):
    """After a rejected duplicate the store keeps working."""
    await store.create_user("dave1", "davepass1")
    with pytest.raises(CredentialConflict):
        await store.create_user("dave1", "davepass2")

    await store.create_user("dave2", "davepass2")
    assert await store.find_user_by_username("dave2") is not None
    original = await store.find_user_by_username("dave1")
    assert await store.verify_password(original, "davepass1") is True


@pytest.mark.asyncio
async def test_storage_failure_on_create(store, db_session, monkeypatch):
    boom = OperationalError("INSERT INTO users", {}, Exception("connection lost"))
    monkeypatch.setattr(db_session, "commit", AsyncMock(side_effect=boom))

    with pytest.raises(StorageUnavailable) as exc:
        await store.create_user("dave1", "davepass1")
    assert exc.value.__cause__ is boom


@pytest.mark.asyncio
async def test_storage_failure_on_lookup(store, db_session, monkeypatch):
    boom = OperationalError("SELECT", {}, Exception("connection lost"))
    monkeypatch.setattr(db_session, "execute", AsyncMock(side_effect=boom))

    with pytest.raises(StorageUnavailable):
        await store.find_user_by_username("dave1")


@pytest.mark.asyncio
async def test_connection_refused_on_lookup(store, db_session, monkeypatch):
    refused = ConnectionRefusedError(111, "Connect call failed")
    monkeypatch.setattr(db_session, "execute", AsyncMock(side_effect=refused))

    with pytest.raises(StorageUnavailable) as exc:
        await store.find_user_by_username("dave1")
    assert exc.value.__cause__ is refused


@pytest.mark.asyncio
async def test_unreachable_database(settings):
    # Nothing listens on port 1, so the driver's connect fails outright.
    unreachable = settings.model_copy(update={"database_url": UNREACHABLE_URL})
    engine = create_engine(unreachable)
    try:
        async with create_session_factory(engine)() as db:
            store = CredentialStore(db, bcrypt_rounds=4)
            with pytest.raises(StorageUnavailable):
                await store.find_user_by_username("dave1")
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_verify_unknown_user_always_fails(store):
    assert await store.verify_unknown_user("davepass1") is False
    assert await store.verify_unknown_user("no-such-user-placeholder") is False
