"""
Company routes.

Thin controllers - CompanyRepository builds the SQL and shapes the records.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.database import get_db
from jobly.api.deps import parse_query, require_admin
from jobly.repositories.company_repository import CompanyRepository
from jobly.schemas.auth import Identity
from jobly.schemas.base import DeletedResponse
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilters,
    CompanyListResponse,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["companies"])

company_repo = CompanyRepository()


@router.post("", response_model=CompanyEnvelope, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyCreate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a company. Admin only."""
    company = await company_repo.create(db, data.to_fields())
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """
    List companies, optionally filtered.

    Query parameters: ``name`` (case-insensitive substring), ``minEmployees``,
    ``maxEmployees``. Anything else is a 400.
    """
    filters = parse_query(CompanyFilters, request)
    companies = await company_repo.find_all(
        db,
        name=filters.name,
        min_employees=filters.min_employees,
        max_employees=filters.max_employees,
    )
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
async def get_company(
    handle: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a company with its jobs."""
    return {"company": await company_repo.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
async def update_company(
    handle: str,
    data: CompanyUpdate,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update only the supplied fields of a company. Admin only."""
    company = await company_repo.update(db, handle, data.to_fields(partial=True))
    return {"company": company}


@router.delete("/{handle}", response_model=DeletedResponse)
async def delete_company(
    handle: str,
    admin: Identity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a company and its jobs. Admin only."""
    await company_repo.remove(db, handle)
    return DeletedResponse(deleted=handle)
