"""
Job routes.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.database import get_db
from jobly.api.deps import JobId, parse_query, require_admin
from jobly.repositories.job_repository import JobRepository
from jobly.schemas.auth import Identity
from jobly.schemas.base import DeletedResponse
from jobly.schemas.job import (
    JobCreate,
    JobDetailEnvelope,
    JobEnvelope,
    JobFilters,
    JobListResponse,
    JobUpdate,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])

job_repo = JobRepository()


@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a job. Admin only."""
    job = await job_repo.create(db, data.to_fields())
    return {"job": job}


@router.get("", response_model=JobListResponse)
async def list_jobs(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    List jobs, optionally filtered.

    Query parameters: ``titleFilter`` (case-insensitive substring),
    ``minSalary``, ``hasEquity`` (true restricts to equity > 0).
    Anything else is a 400.
    """
    filters = parse_query(JobFilters, request)
    jobs = await job_repo.find_all(
        db,
        title_filter=filters.title_filter,
        min_salary=filters.min_salary,
        has_equity=filters.has_equity,
    )
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
async def get_job(
    job_id: JobId,
    db: AsyncSession = Depends(get_db),
):
    """Get a job with its company."""
    return {"job": await job_repo.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
async def update_job(
    job_id: JobId,
    data: JobUpdate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update only the supplied fields of a job; companyHandle is ignored. Admin only."""
    job = await job_repo.update(db, job_id, data.to_fields(partial=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse)
async def delete_job(
    job_id: JobId,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a job. Admin only."""
    await job_repo.remove(db, job_id)
    return DeletedResponse(deleted=job_id)
