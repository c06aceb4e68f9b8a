"""
Company repository - data access for Company entity.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.exceptions import (
    BadRequestException,
    CompanyNotFoundException,
    DuplicateCompanyException,
)
from jobly.core.logging import get_logger
from jobly.core.sql import WhereClause, bind_params, is_active_filter
from jobly.repositories.base import BaseRepository
from jobly.repositories.job_repository import shape_job

logger = get_logger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def compile_company_filters(
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> Tuple[str, List[Any]]:
    """
    WHERE clause and args for GET /companies.

    Conditions are added in a fixed order (name, min, max) so the placeholder
    numbering is the same whichever filters are present. Empty strings and
    zero count as absent.

    Raises:
        BadRequestException: If both bounds are given and max < min
    """
    if (
        min_employees is not None
        and max_employees is not None
        and max_employees < min_employees
    ):
        raise BadRequestException(
            f"Filter minimum ({min_employees}) specified is greater than "
            f"maximum ({max_employees})",
            code="MIN_GREATER_THAN_MAX",
        )

    where = WhereClause()

    if is_active_filter(name):
        where.add_param("lower(name) LIKE {}", f"%{name.lower()}%")
    if is_active_filter(min_employees):
        where.add_param("num_employees >= {}", min_employees)
    if is_active_filter(max_employees):
        where.add_param("num_employees <= {}", max_employees)

    return where.build()


class CompanyRepository(BaseRepository):
    table = "companies"
    key_column = "handle"
    returning = COMPANY_COLUMNS
    js_to_sql = {
        "numEmployees": "num_employees",
        "logoUrl": "logo_url",
    }

    async def create(
        self,
        db: AsyncSession,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Insert a company.

        Uniqueness is left to the primary key and the unique name
        constraint; a violation surfaces as a duplicate.

        Raises:
            DuplicateCompanyException: If the handle or name is taken
        """
        try:
            company = await self.fetch_one(
                db,
                f"""INSERT INTO companies
                        (handle, name, description, num_employees, logo_url)
                    VALUES (:p1, :p2, :p3, :p4, :p5)
                    RETURNING {COMPANY_COLUMNS}""",
                bind_params([
                    data["handle"],
                    data["name"],
                    data["description"],
                    data.get("numEmployees"),
                    data.get("logoUrl"),
                ]),
            )
        except IntegrityError as exc:
            raise DuplicateCompanyException(data["handle"]) from exc

        logger.info("company_created", handle=company["handle"])
        return company

    async def find_all(
        self,
        db: AsyncSession,
        *,
        name: Optional[str] = None,
        min_employees: Optional[int] = None,
        max_employees: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """All companies matching the filters, ordered by name."""
        where, args = compile_company_filters(name, min_employees, max_employees)
        return await self.fetch_all(
            db,
            f"SELECT {COMPANY_COLUMNS} FROM companies {where} ORDER BY name",
            bind_params(args),
        )

    async def get(
        self,
        db: AsyncSession,
        handle: str,
    ) -> Dict[str, Any]:
        """
        A company with its jobs (id, title, salary, equity), ordered by id.

        Both reads run in the caller's session transaction.

        Raises:
            CompanyNotFoundException: If no company has ``handle``
        """
        company = await self.fetch_one(
            db,
            f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :p1",
            bind_params([handle]),
        )
        if company is None:
            raise CompanyNotFoundException(handle)

        jobs = await self.fetch_all(
            db,
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = :p1
               ORDER BY id""",
            bind_params([handle]),
        )
        company["jobs"] = [shape_job(job) for job in jobs]
        return company

    async def update(
        self,
        db: AsyncSession,
        handle: str,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Partial update; only the fields in ``data`` change.

        Raises:
            BadRequestException: If ``data`` is empty
            DuplicateCompanyException: If the new name is taken
            CompanyNotFoundException: If no company has ``handle``
        """
        try:
            company = await self.update_by_key(db, handle, data)
        except IntegrityError as exc:
            raise DuplicateCompanyException(data.get("name", handle)) from exc
        if company is None:
            raise CompanyNotFoundException(handle)

        logger.info("company_updated", handle=handle, fields=list(data))
        return company

    async def remove(
        self,
        db: AsyncSession,
        handle: str,
    ) -> None:
        """
        Delete a company and, through the foreign key, its jobs.

        Raises:
            CompanyNotFoundException: If no company has ``handle``
        """
        if not await self.delete_by_key(db, handle):
            raise CompanyNotFoundException(handle)
        logger.info("company_removed", handle=handle)
