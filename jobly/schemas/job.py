"""
Job schemas.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from jobly.schemas.base import BaseSchema, QuerySchema, RequestSchema
from jobly.schemas.company import CompanyResponse


class JobCreate(RequestSchema):
    """Job creation body. Equity accepts a number or a decimal string."""

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(Decimal("0"), ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(RequestSchema):
    """
    Job partial update body.

    ``companyHandle`` is accepted so clients can send a whole job back,
    but the repository drops it: a job never moves between companies.
    """

    title: str = Field(default=None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: Optional[str] = None


class JobFilters(QuerySchema):
    """GET /jobs query parameters."""

    title_filter: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: Optional[bool] = None


class JobResponse(BaseSchema):
    """Job as returned by the API."""

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str


class JobDetail(JobResponse):
    """Job with its company."""

    company: CompanyResponse


class JobEnvelope(BaseSchema):
    job: JobResponse


class JobDetailEnvelope(BaseSchema):
    job: JobDetail


class JobListResponse(BaseSchema):
    jobs: List[JobResponse]
