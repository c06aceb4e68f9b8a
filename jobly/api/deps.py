"""
API dependencies for dependency injection.

Authorization is a chain of dependencies over one request-scoped
``RequestContext``: ``authenticate`` builds it once from the bearer token,
and the ``require_*`` guards read it.
"""
from dataclasses import dataclass
from typing import Annotated, Optional, Type, TypeVar

from fastapi import Depends, Path, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError

from jobly.core.exceptions import UnauthorizedException, ValidationException
from jobly.core.logging import get_logger
from jobly.core.security import decode_token
from jobly.schemas.auth import Identity
from jobly.schemas.base import QuerySchema

logger = get_logger(__name__)

QueryModel = TypeVar("QueryModel", bound=QuerySchema)

# Job ids are Postgres INTEGER; larger values cannot reach the driver
JobId = Annotated[int, Path(ge=0, le=2**31 - 1)]

# Security scheme
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Per-request auth state. ``identity`` is None for anonymous callers."""

    identity: Optional[Identity] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def is_admin(self) -> bool:
        return self.identity is not None and self.identity.is_admin


def identity_from_token(token: str) -> Optional[Identity]:
    """Verified identity in ``token``, or None if it does not check out."""
    payload = decode_token(token)
    if not payload:
        return None

    username = payload.get("username") or payload.get("sub")
    if not username:
        return None

    return Identity(username=username, is_admin=bool(payload.get("isAdmin", False)))


async def authenticate(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> RequestContext:
    """
    Build the request context from an optional bearer token.

    A missing or invalid token gives an anonymous context; it is up to the
    guards below to reject it.
    """
    if not credentials:
        return RequestContext()

    identity = identity_from_token(credentials.credentials)
    if identity is None:
        logger.info("invalid_token_ignored")
    return RequestContext(identity=identity)


async def require_logged_in(
    context: RequestContext = Depends(authenticate),
) -> Identity:
    """
    Raises:
        UnauthorizedException: If the caller is anonymous
    """
    if not context.is_authenticated:
        raise UnauthorizedException("Authentication required")
    return context.identity


async def require_admin(
    context: RequestContext = Depends(authenticate),
) -> Identity:
    """
    Raises:
        UnauthorizedException: If the caller is anonymous or not an admin
    """
    if not context.is_admin:
        raise UnauthorizedException("Admin access required")
    return context.identity


async def require_self_or_admin(
    username: str,
    context: RequestContext = Depends(authenticate),
) -> Identity:
    """
    Guard for /users/{username} routes: the user themself, or any admin.

    Raises:
        UnauthorizedException: Otherwise
    """
    if context.is_admin:
        return context.identity
    if context.is_authenticated and context.identity.username == username:
        return context.identity
    raise UnauthorizedException("Must be this user or an admin")


def parse_query(model: Type[QueryModel], request: Request) -> QueryModel:
    """
    Validate the query string against ``model``.

    Unknown parameters and values of the wrong type are both rejected.

    Raises:
        ValidationException: With one message per violation
    """
    try:
        return model.model_validate(dict(request.query_params))
    except ValidationError as exc:
        raise ValidationException.from_errors(exc.errors()) from exc

