"""Typed failures raised by the core.

Learn: Every failure is raised where it is detected and propagates
unchanged to the caller. Messages are deliberately vague where detail
would leak information: a bad username and a bad password read the same,
and "absent" and "owned by someone else" read the same.

exit_code is what the CLI exits with when the error reaches it.
"""


class BoardkeepError(Exception):
    """Base class for all core failures."""

    exit_code = 1


class CredentialConflict(BoardkeepError):
    """Raised when a username is already registered."""

    exit_code = 3


class AuthenticationFailed(BoardkeepError):
    """Raised when a username/password pair doesn't check out."""

    exit_code = 4

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class TokenError(BoardkeepError):
    """Raised when a presented token can't be accepted."""

    exit_code = 4


class TokenInvalid(TokenError):
    """Signature, structure or subject of the token is bad."""


class TokenExpired(TokenError):
    """Token was valid once but its exp has passed."""


class ResourceNotFound(BoardkeepError):
    """Raised when a board is absent or not owned by the caller."""

    exit_code = 5


class StorageUnavailable(BoardkeepError):
    """Raised on any persistence failure that isn't a known conflict."""

    exit_code = 6
