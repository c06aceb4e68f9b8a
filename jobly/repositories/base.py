"""
Base repository with the SQL execution helpers shared by all entities.

Repositories issue parameterized SQL built by ``jobly.core.sql`` and return
plain dicts keyed by API field names.
"""
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.sql import bind_params, placeholder, sql_for_partial_update


class BaseRepository:
    """
    Base repository for a single table.

    Subclasses set ``table``, ``key_column``, the ``returning`` projection
    (storage columns aliased to API names) and ``js_to_sql`` (API field name
    to column name, for the fields whose names differ).

    Usage:
        class CompanyRepository(BaseRepository):
            table = "companies"
            key_column = "handle"
    """

    table: str
    key_column: str
    returning: str
    js_to_sql: Mapping[str, str] = {}

    async def fetch_one(
        self,
        db: AsyncSession,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Run ``sql`` and return the first row as a dict, or None."""
        result = await db.execute(text(sql), dict(params or {}))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def fetch_all(
        self,
        db: AsyncSession,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """Run ``sql`` and return every row as a dict."""
        result = await db.execute(text(sql), dict(params or {}))
        return [dict(row) for row in result.mappings().all()]

    async def update_by_key(
        self,
        db: AsyncSession,
        key: Any,
        data: Mapping[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Partial update of one row; only the fields in ``data`` change.

        Returns the updated row, or None if no row has ``key``.

        Raises:
            BadRequestException: If ``data`` is empty
        """
        set_cols, values = sql_for_partial_update(data, self.js_to_sql)
        key_placeholder = placeholder(len(values) + 1)

        sql = (
            f"UPDATE {self.table} "
            f"SET {set_cols} "
            f"WHERE {self.key_column} = {key_placeholder} "
            f"RETURNING {self.returning}"
        )
        return await self.fetch_one(db, sql, bind_params([*values, key]))

    async def delete_by_key(
        self,
        db: AsyncSession,
        key: Any,
    ) -> bool:
        """Hard delete a row; False when nothing matched."""
        row = await self.fetch_one(
            db,
            f"DELETE FROM {self.table} "
            f"WHERE {self.key_column} = :p1 "
            f"RETURNING {self.key_column}",
            bind_params([key]),
        )
        return row is not None
