"""
API Routes package.
"""
from fastapi import APIRouter

from jobly.api.routes.auth import router as auth_router
from jobly.api.routes.health import router as health_router
from jobly.api.routes.users import router as users_router
from jobly.api.routes.jobs import router as jobs_router
from jobly.api.routes.companies import router as companies_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(companies_router)
api_router.include_router(jobs_router)

__all__ = [
    "api_router",
    "auth_router",
    "health_router",
    "users_router",
    "jobs_router",
    "companies_router",
]
