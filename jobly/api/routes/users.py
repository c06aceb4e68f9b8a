"""
User routes.

Listing and creating users is for admins; everything under
/users/{username} is open to that user and to admins.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.database import get_db
from jobly.core.security import create_user_token
from jobly.api.deps import JobId, require_admin, require_self_or_admin
from jobly.repositories.user_repository import UserRepository
from jobly.schemas.auth import Identity
from jobly.schemas.base import DeletedResponse
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreate,
    UserCreatedResponse,
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])

user_repo = UserRepository()


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Add a user, possibly another admin, and return a token for them.

    This is not registration: it lets admins set up accounts.
    """
    user = await user_repo.register(db, data.to_fields())
    return {"user": user, "token": create_user_token(user["username"], user["isAdmin"])}


@router.get("", response_model=UserListResponse)
async def list_users(
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List all users. Admin only."""
    return {"users": await user_repo.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope)
async def get_user(
    username: str,
    identity: Identity = Depends(require_self_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Get a user with the ids of the jobs they applied to."""
    return {"user": await user_repo.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
async def update_user(
    username: str,
    data: UserUpdate,
    identity: Identity = Depends(require_self_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update only the supplied fields of a user."""
    user = await user_repo.update(db, username, data.to_fields(partial=True))
    return {"user": user}


@router.delete("/{username}", response_model=DeletedResponse)
async def delete_user(
    username: str,
    identity: Identity = Depends(require_self_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user."""
    await user_repo.remove(db, username)
    return DeletedResponse(deleted=username)


@router.post("/{username}/jobs/{job_id}", response_model=ApplicationResponse)
async def apply_to_job(
    username: str,
    job_id: JobId,
    identity: Identity = Depends(require_self_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Apply ``username`` to a job."""
    await user_repo.apply_to_job(db, username, job_id)
    return ApplicationResponse(applied=job_id)
