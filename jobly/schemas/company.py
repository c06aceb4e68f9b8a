"""
Company schemas.
"""
from typing import List, Optional

from pydantic import Field

from jobly.schemas.base import BaseSchema, HttpUrlStr, QuerySchema, RequestSchema


class CompanyCreate(RequestSchema):
    """Company creation body."""

    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9_-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[HttpUrlStr] = None


class CompanyUpdate(RequestSchema):
    """
    Company partial update body.

    The handle is the primary key and cannot be changed. Name and
    description may be omitted but not nulled.
    """

    name: str = Field(default=None, min_length=1)
    description: str = Field(default=None)
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[HttpUrlStr] = None


class CompanyFilters(QuerySchema):
    """GET /companies query parameters."""

    name: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None


class CompanyResponse(BaseSchema):
    """Company as returned by the API."""

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobSummary(BaseSchema):
    """Job entry listed under a company."""

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class CompanyDetail(CompanyResponse):
    """Company with its jobs."""

    jobs: List[JobSummary] = []


class CompanyEnvelope(BaseSchema):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseSchema):
    company: CompanyDetail


class CompanyListResponse(BaseSchema):
    companies: List[CompanyResponse]
