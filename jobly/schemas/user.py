"""
User schemas.
"""
from typing import List

from pydantic import EmailStr, Field

from jobly.schemas.base import BaseSchema, RequestSchema


class UserBase(RequestSchema):
    """Fields shared by registration and admin creation."""

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr


class UserCreate(UserBase):
    """Admin-only user creation; may create other admins."""

    is_admin: bool = False


class UserUpdate(RequestSchema):
    """User partial update body. Admin status cannot be changed here."""

    password: str = Field(default=None, min_length=5, max_length=20)
    first_name: str = Field(default=None, min_length=1, max_length=30)
    last_name: str = Field(default=None, min_length=1, max_length=30)
    email: EmailStr = None


class UserResponse(BaseSchema):
    """User as returned by the API; never includes the password."""

    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool = False


class UserDetail(UserResponse):
    """User with the ids of the jobs they applied to."""

    applications: List[int] = []


class UserEnvelope(BaseSchema):
    user: UserResponse


class UserDetailEnvelope(BaseSchema):
    user: UserDetail


class UserCreatedResponse(BaseSchema):
    user: UserResponse
    token: str


class UserListResponse(BaseSchema):
    users: List[UserResponse]


class ApplicationResponse(BaseSchema):
    applied: int
