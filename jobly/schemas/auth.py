"""
Authentication schemas.
"""
from pydantic import Field

from jobly.schemas.base import BaseSchema, RequestSchema
from jobly.schemas.user import UserBase


class LoginRequest(RequestSchema):
    """Token request body."""

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=20)


class RegisterRequest(UserBase):
    """Self-registration body; always creates a non-admin user."""


class TokenResponse(BaseSchema):
    """Bearer token for the Authorization header."""

    token: str


class Identity(BaseSchema):
    """Verified identity carried by an access token."""

    username: str
    is_admin: bool = False
