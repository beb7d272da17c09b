"""Credential store — user records, bcrypt hashing, password checks.

Learn: Username uniqueness is the database's job. We insert and let the
uq_users_username constraint reject duplicates; the IntegrityError becomes
a CredentialConflict. A "SELECT then INSERT" pre-check would race between
two concurrent sign-ups for the same name.

bcrypt is slow on purpose, so hashing and checking run in a worker thread
and are awaited. verify_password hands back a plain bool, never something
still pending.
"""

import asyncio
from functools import lru_cache
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from boardkeep.auth.password import hash_password, verify_password
from boardkeep.db.engine import STORAGE_ERRORS
from boardkeep.db.models import User
from boardkeep.errors import CredentialConflict, StorageUnavailable

logger = structlog.get_logger()


@lru_cache(maxsize=None)
def _placeholder_hash(rounds: int) -> str:
    """A real bcrypt hash at the configured cost, checked when no user matches."""
    return hash_password("no-such-user-placeholder", rounds)


class CredentialStore:
    """Owns user identity records."""

    def __init__(self, db: AsyncSession, bcrypt_rounds: int = 12):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    async def create_user(self, username: str, password: str) -> None:
        password_hash = await asyncio.to_thread(
            hash_password, password, self.bcrypt_rounds
        )
        self.db.add(User(username=username, password_hash=password_hash))
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise CredentialConflict("Existing username")
        except STORAGE_ERRORS as e:
            await self.db.rollback()
            logger.error("storage.error", op="create_user", error=type(e).__name__)
            raise StorageUnavailable("Could not save user") from e

    async def find_user_by_username(self, username: str) -> Optional[User]:
        try:
            result = await self.db.execute(
                select(User).where(User.username == username)
            )
        except STORAGE_ERRORS as e:
            logger.error("storage.error", op="find_user", error=type(e).__name__)
            raise StorageUnavailable("Could not load user") from e
        return result.scalars().first()

    async def verify_password(self, user: User, password: str) -> bool:
        """Check password against the user's stored hash."""
        ok = await asyncio.to_thread(verify_password, password, user.password_hash)
        return ok is True

    async def verify_unknown_user(self, password: str) -> bool:
        """Spend the same bcrypt work as verify_password, then fail.

        Sign-in for a username that doesn't exist must cost as much as a wrong
        password, or response time tells the two apart.
        """
        placeholder = await asyncio.to_thread(_placeholder_hash, self.bcrypt_rounds)
        await asyncio.to_thread(verify_password, password, placeholder)
        return False
