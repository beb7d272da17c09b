"""Auth service — sign-up, sign-in, and token → user resolution.

Learn: Service layer composes the credential store and the token service.
Sign-in failures are deliberately identical whether the username is
unknown or the password is wrong, so the error can't be used to discover
which usernames exist.

authenticate() re-reads the user on every call. A token only says who the
bearer was when it was issued; if that user is gone, the token is dead.
"""

import structlog

from boardkeep.auth.credentials import CredentialStore
from boardkeep.auth.jwt import TokenService
from boardkeep.db.models import User
from boardkeep.errors import AuthenticationFailed, TokenInvalid

logger = structlog.get_logger()


class AuthService:
    """Business logic for user authentication."""

    def __init__(self, credentials: CredentialStore, tokens: TokenService):
        self.credentials = credentials
        self.tokens = tokens

    async def sign_up(self, username: str, password: str) -> None:
        await self.credentials.create_user(username, password)
        logger.info("auth.signed_up", username=username)

    async def sign_in(self, username: str, password: str) -> str:
        """Check credentials and return a fresh access token."""
        user = await self.credentials.find_user_by_username(username)
        if user is None:
            await self.credentials.verify_unknown_user(password)
            logger.info("auth.sign_in_failed", username=username)
            raise AuthenticationFailed()

        verified = await self.credentials.verify_password(user, password)
        if verified is not True:
            logger.info("auth.sign_in_failed", username=username)
            raise AuthenticationFailed()

        logger.info("auth.signed_in", username=username)
        return self.tokens.issue(user.username)

    async def authenticate(self, token: str) -> User:
        """Validate a bearer token and resolve it to the current User."""
        claim = self.tokens.validate(token)
        user = await self.credentials.find_user_by_username(claim.username)
        if user is None:
            raise TokenInvalid("Token subject no longer exists")
        return user
