"""
Job repository - data access for Job entity.
"""
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.exceptions import BadRequestException, JobNotFoundException
from jobly.core.logging import get_logger
from jobly.core.sql import (
    WhereClause,
    bind_params,
    is_active_filter,
    is_foreign_key_violation,
)
from jobly.repositories.base import BaseRepository

logger = get_logger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def format_equity(value: Any) -> Optional[str]:
    """Render a NUMERIC equity value as a plain decimal string."""
    if value is None:
        return None
    if not isinstance(value, Decimal):
        # Drivers without a native decimal type hand back int/float
        value = Decimal(str(value))
    return format(value, "f")


def shape_job(row: Dict[str, Any]) -> Dict[str, Any]:
    """API shape for a job row; equity always leaves as a string."""
    shaped = dict(row)
    if "equity" in shaped:
        shaped["equity"] = format_equity(shaped["equity"])
    return shaped


def compile_job_filters(
    title_filter: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> Tuple[str, List[Any]]:
    """
    WHERE clause and args for GET /jobs.

    Conditions are added in a fixed order (title, salary, equity) so the
    placeholder numbering is the same whichever filters are present.
    Empty strings and zero count as absent. ``has_equity`` false or missing
    places no restriction on equity.
    """
    where = WhereClause()

    if is_active_filter(title_filter):
        where.add_param("lower(title) LIKE {}", f"%{title_filter.lower()}%")
    if is_active_filter(min_salary):
        where.add_param("salary >= {}", min_salary)
    if has_equity:
        where.add("equity > 0")

    return where.build()


class JobRepository(BaseRepository):
    table = "jobs"
    key_column = "id"
    returning = JOB_COLUMNS
    js_to_sql = {"companyHandle": "company_handle"}

    async def create(
        self,
        db: AsyncSession,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Insert a job; the id is assigned by the database.

        Raises:
            BadRequestException: If ``companyHandle`` names no company
            IntegrityError: For any other constraint the row breaks
        """
        try:
            job = await self.fetch_one(
                db,
                f"""INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES (:p1, :p2, :p3, :p4)
                    RETURNING {JOB_COLUMNS}""",
                bind_params([
                    data["title"],
                    data.get("salary"),
                    data.get("equity"),
                    data["companyHandle"],
                ]),
            )
        except IntegrityError as exc:
            if not is_foreign_key_violation(exc):
                raise
            raise BadRequestException(
                f"No company: {data['companyHandle']}",
                code="UNKNOWN_COMPANY",
            ) from exc

        logger.info("job_created", job_id=job["id"], company=job["companyHandle"])
        return shape_job(job)

    async def find_all(
        self,
        db: AsyncSession,
        *,
        title_filter: Optional[str] = None,
        min_salary: Optional[int] = None,
        has_equity: Optional[bool] = None,
    ) -> List[Dict[str, Any]]:
        """All jobs matching the filters, ordered by id."""
        where, args = compile_job_filters(title_filter, min_salary, has_equity)
        rows = await self.fetch_all(
            db,
            f"SELECT {JOB_COLUMNS} FROM jobs {where} ORDER BY id",
            bind_params(args),
        )
        return [shape_job(row) for row in rows]

    async def get(
        self,
        db: AsyncSession,
        job_id: int,
    ) -> Dict[str, Any]:
        """
        A job with its company.

        Raises:
            JobNotFoundException: If no job has ``job_id``
        """
        job = await self.fetch_one(
            db,
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :p1",
            bind_params([job_id]),
        )
        if job is None:
            raise JobNotFoundException(job_id)

        job = shape_job(job)
        job["company"] = await self.fetch_one(
            db,
            """SELECT handle,
                      name,
                      description,
                      num_employees AS "numEmployees",
                      logo_url AS "logoUrl"
               FROM companies
               WHERE handle = :p1""",
            bind_params([job["companyHandle"]]),
        )
        return job

    async def update(
        self,
        db: AsyncSession,
        job_id: int,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Partial update. A job stays with its company: ``companyHandle`` is
        dropped from ``data`` before the update is built.

        Raises:
            BadRequestException: If nothing is left to update
            JobNotFoundException: If no job has ``job_id``
        """
        changes = {k: v for k, v in data.items() if k != "companyHandle"}

        job = await self.update_by_key(db, job_id, changes)
        if job is None:
            raise JobNotFoundException(job_id)

        logger.info("job_updated", job_id=job_id, fields=list(changes))
        return shape_job(job)

    async def remove(
        self,
        db: AsyncSession,
        job_id: int,
    ) -> None:
        """
        Raises:
            JobNotFoundException: If no job has ``job_id``
        """
        if not await self.delete_by_key(db, job_id):
            raise JobNotFoundException(job_id)
        logger.info("job_removed", job_id=job_id)
