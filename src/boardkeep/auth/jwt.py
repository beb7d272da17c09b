"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication — there is
no server-side session table. The token carries the username as "sub"
and a mandatory "exp". No "iat" is embedded, so the same secret, subject
and expiry always sign to the same token.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from boardkeep.config import Settings
from boardkeep.errors import TokenExpired, TokenInvalid

ACCESS_TOKEN_TYPE = "access"


@dataclass(frozen=True)
class IdentityClaim:
    """Who the bearer says they are, and until when."""

    username: str
    expires_at: datetime


class TokenService:
    """Issues and validates signed access tokens."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.expire_minutes = settings.access_token_expire_minutes

    def issue(self, username: str, expires_at: Optional[datetime] = None) -> str:
        """Create a JWT access token for username."""
        if expires_at is None:
            expires_at = datetime.now(timezone.utc) + timedelta(
                minutes=self.expire_minutes
            )
        payload = {
            "sub": username,
            "type": ACCESS_TOKEN_TYPE,
            "exp": expires_at,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def validate(self, token: str) -> IdentityClaim:
        """Verify and decode a JWT token.

        Returns the embedded claim on success.
        Raises TokenExpired once exp has passed, TokenInvalid otherwise.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(f"Invalid token: {e}")

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise TokenInvalid("Not an access token")

        return IdentityClaim(
            username=payload["sub"],
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
