"""
Pydantic schemas for API validation and serialization.
"""
from jobly.schemas.base import (
    BaseSchema,
    RequestSchema,
    QuerySchema,
    DeletedResponse,
)
from jobly.schemas.auth import (
    Identity,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from jobly.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyFilters,
    CompanyResponse,
    CompanyDetail,
)
from jobly.schemas.job import (
    JobCreate,
    JobUpdate,
    JobFilters,
    JobResponse,
    JobDetail,
)
from jobly.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserDetail,
)

__all__ = [
    # Base
    "BaseSchema",
    "RequestSchema",
    "QuerySchema",
    "DeletedResponse",
    # Auth
    "Identity",
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    # Company
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyFilters",
    "CompanyResponse",
    "CompanyDetail",
    # Job
    "JobCreate",
    "JobUpdate",
    "JobFilters",
    "JobResponse",
    "JobDetail",
    # User
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserDetail",
]
