"""
SQL fragment builders for partial updates and filtered listings.

Both builders emit numbered named placeholders (``:p1``, ``:p2``, ...) so the
clause text never contains values. ``bind_params`` turns the ordered value
list into the mapping SQLAlchemy binds against.
"""
from numbers import Number
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from jobly.core.exceptions import BadRequestException


def placeholder(index: int) -> str:
    """Placeholder for the 1-based parameter position ``index``."""
    return f":p{index}"


def bind_params(values: Sequence[Any], start: int = 1) -> Dict[str, Any]:
    """Map ordered values onto ``p{start}``, ``p{start + 1}``, ..."""
    return {f"p{start + offset}": value for offset, value in enumerate(values)}


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a single-row UPDATE.

    Args:
        data: API field name -> new value, only the fields being changed
        js_to_sql: API field name -> column name, for fields whose column differs

    Returns:
        (set_cols, values), e.g. for ``{"firstName": "Aliya", "age": 32}``:
        ``('"first_name"=:p1, "age"=:p2', ["Aliya", 32])``

    Raises:
        BadRequestException: If ``data`` is empty
    """
    if not data:
        raise BadRequestException("No data", code="NO_DATA")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{js_to_sql.get(field, field)}"={placeholder(idx)}'
        for idx, field in enumerate(data, start=1)
    ]
    return ", ".join(cols), list(data.values())


def is_active_filter(value: Any) -> bool:
    """
    Whether a filter value restricts the query.

    ``None``, empty strings and zero all count as "not provided".
    """
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, Number):
        return value != 0
    return True


class WhereClause:
    """
    Accumulates filter conditions into a WHERE clause.

    The first condition is prefixed with WHERE, later ones with AND.
    Placeholders are numbered in the order parameters are added, so the
    clause always lines up with ``args``.
    """

    def __init__(self):
        self._parts: List[str] = []
        self.args: List[Any] = []

    def add(self, condition: str) -> "WhereClause":
        """Append a condition that takes no parameter."""
        keyword = "WHERE" if not self._parts else "AND"
        self._parts.append(f"{keyword} {condition}")
        return self

    def add_param(self, template: str, value: Any) -> "WhereClause":
        """Append ``template`` with ``{}`` replaced by the next placeholder."""
        self.args.append(value)
        return self.add(template.format(placeholder(len(self.args))))

    def build(self) -> Tuple[str, List[Any]]:
        return " ".join(self._parts), list(self.args)


def is_foreign_key_violation(exc: Exception) -> bool:
    """
    Whether a driver IntegrityError came from a foreign key.

    Postgres reports "violates foreign key constraint", SQLite
    "FOREIGN KEY constraint failed".
    """
    return "foreign key" in str(getattr(exc, "orig", exc)).lower()
