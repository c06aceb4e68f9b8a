"""
Health check route for load balancers and monitoring.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.config import settings
from jobly.core.database import get_db
from jobly.core.logging import get_logger
from jobly.schemas.base import BaseSchema

router = APIRouter(tags=["health"])

logger = get_logger(__name__)

# check name -> probe query
PROBES = {
    "database": "SELECT 1",
    "schema": "SELECT count(*) FROM companies",
}


class HealthResponse(BaseSchema):
    status: str
    version: str
    timestamp: str
    checks: Dict[str, str]


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Always 200; ``status`` is "degraded" when any probe fails.

    ``schema`` fails when the tables have not been created yet.
    """
    checks = {}
    for name, probe in PROBES.items():
        try:
            await db.execute(text(probe))
            checks[name] = "healthy"
        except SQLAlchemyError as exc:
            logger.warning("health_probe_failed", probe=name, error=str(exc))
            checks[name] = "unhealthy"
            # A failed statement leaves the transaction aborted on Postgres
            await db.rollback()

    healthy = all(result == "healthy" for result in checks.values())
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks=checks,
    )
