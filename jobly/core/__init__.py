"""Core module exports."""
from jobly.core.config import settings, get_settings
from jobly.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from jobly.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    create_user_token,
    decode_token,
)
from jobly.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ValidationException,
    InvalidCredentialsException,
    DuplicateCompanyException,
    DuplicateUsernameException,
    CompanyNotFoundException,
    JobNotFoundException,
    UserNotFoundException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "verify_password",
    "hash_password",
    "create_access_token",
    "create_user_token",
    "decode_token",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ValidationException",
    "InvalidCredentialsException",
    "DuplicateCompanyException",
    "DuplicateUsernameException",
    "CompanyNotFoundException",
    "JobNotFoundException",
    "UserNotFoundException",
]
