"""Pydantic schemas for sign-up / sign-in.

Learn: Input rules are checked here, before anything touches the
credential store: 4-20 characters for both fields, and passwords are
letters and digits only.
"""

from pydantic import BaseModel, Field


class AuthCredentials(BaseModel):
    username: str = Field(..., min_length=4, max_length=20)
    password: str = Field(
        ...,
        min_length=4,
        max_length=20,
        pattern=r"^[a-zA-Z0-9]*$",
        description="Letters and digits only",
    )


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
