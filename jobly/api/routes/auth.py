"""
Authentication routes.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.database import get_db
from jobly.core.rate_limit import RATE_AUTH, limiter
from jobly.core.security import create_user_token
from jobly.repositories.user_repository import UserRepository
from jobly.schemas.auth import LoginRequest, RegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["auth"])

user_repo = UserRepository()


@router.post("/token", response_model=TokenResponse)
@limiter.limit(RATE_AUTH)
async def login(
    request: Request,
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Exchange username and password for a bearer token.

    Raises 401 on a bad username/password pair.
    """
    user = await user_repo.authenticate(db, data.username, data.password)
    return TokenResponse(token=create_user_token(user["username"], user["isAdmin"]))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_AUTH)
async def register(
    request: Request,
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a regular (non-admin) account and log it in."""
    user = await user_repo.register(db, {**data.to_fields(), "isAdmin": False})
    return TokenResponse(token=create_user_token(user["username"], user["isAdmin"]))
