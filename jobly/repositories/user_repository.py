"""
User repository - data access for User entity and job applications.
"""
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.core.exceptions import (
    BadRequestException,
    DuplicateUsernameException,
    InvalidCredentialsException,
    JobNotFoundException,
    UserNotFoundException,
)
from jobly.core.logging import get_logger
from jobly.core.security import hash_password, verify_password
from jobly.core.sql import bind_params
from jobly.repositories.base import BaseRepository

logger = get_logger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def shape_user(row: Dict[str, Any]) -> Dict[str, Any]:
    """API shape for a user row; the password hash never leaves."""
    shaped = {k: v for k, v in row.items() if k != "password"}
    shaped["isAdmin"] = bool(shaped.get("isAdmin"))
    return shaped


class UserRepository(BaseRepository):
    table = "users"
    key_column = "username"
    returning = USER_COLUMNS
    js_to_sql = {
        "firstName": "first_name",
        "lastName": "last_name",
        "isAdmin": "is_admin",
    }

    async def authenticate(
        self,
        db: AsyncSession,
        username: str,
        password: str,
    ) -> Dict[str, Any]:
        """
        Check a username/password pair.

        Raises:
            InvalidCredentialsException: If the user is unknown or the password is wrong
        """
        user = await self.fetch_one(
            db,
            f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :p1",
            bind_params([username]),
        )
        if user is None or not verify_password(password, user["password"]):
            raise InvalidCredentialsException()
        return shape_user(user)

    async def register(
        self,
        db: AsyncSession,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Insert a user, hashing the password.

        Raises:
            DuplicateUsernameException: If the username is taken
        """
        try:
            user = await self.fetch_one(
                db,
                f"""INSERT INTO users
                        (username, password, first_name, last_name, email, is_admin)
                    VALUES (:p1, :p2, :p3, :p4, :p5, :p6)
                    RETURNING {USER_COLUMNS}""",
                bind_params([
                    data["username"],
                    hash_password(data["password"]),
                    data["firstName"],
                    data["lastName"],
                    data["email"],
                    bool(data.get("isAdmin", False)),
                ]),
            )
        except IntegrityError as exc:
            raise DuplicateUsernameException(data["username"]) from exc

        logger.info("user_registered", username=user["username"], is_admin=user["isAdmin"])
        return shape_user(user)

    async def find_all(
        self,
        db: AsyncSession,
    ) -> List[Dict[str, Any]]:
        """All users, ordered by username."""
        rows = await self.fetch_all(
            db,
            f"SELECT {USER_COLUMNS} FROM users ORDER BY username",
        )
        return [shape_user(row) for row in rows]

    async def get(
        self,
        db: AsyncSession,
        username: str,
    ) -> Dict[str, Any]:
        """
        A user with the ids of the jobs they applied to.

        Raises:
            UserNotFoundException: If no user has ``username``
        """
        user = await self.fetch_one(
            db,
            f"SELECT {USER_COLUMNS} FROM users WHERE username = :p1",
            bind_params([username]),
        )
        if user is None:
            raise UserNotFoundException(username)

        applications = await self.fetch_all(
            db,
            """SELECT job_id AS "jobId"
               FROM applications
               WHERE username = :p1
               ORDER BY job_id""",
            bind_params([username]),
        )
        user = shape_user(user)
        user["applications"] = [row["jobId"] for row in applications]
        return user

    async def update(
        self,
        db: AsyncSession,
        username: str,
        data: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Partial update; a new password is hashed before it is stored.

        Raises:
            BadRequestException: If ``data`` is empty
            UserNotFoundException: If no user has ``username``
        """
        changes = dict(data)
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        user = await self.update_by_key(db, username, changes)
        if user is None:
            raise UserNotFoundException(username)

        logger.info("user_updated", username=username, fields=list(changes))
        return shape_user(user)

    async def remove(
        self,
        db: AsyncSession,
        username: str,
    ) -> None:
        """
        Raises:
            UserNotFoundException: If no user has ``username``
        """
        if not await self.delete_by_key(db, username):
            raise UserNotFoundException(username)
        logger.info("user_removed", username=username)

    async def apply_to_job(
        self,
        db: AsyncSession,
        username: str,
        job_id: int,
    ) -> None:
        """
        Record that ``username`` applied to ``job_id``.

        Raises:
            JobNotFoundException: If no job has ``job_id``
            UserNotFoundException: If no user has ``username``
            BadRequestException: If the user already applied
        """
        job = await self.fetch_one(
            db, "SELECT id FROM jobs WHERE id = :p1", bind_params([job_id])
        )
        if job is None:
            raise JobNotFoundException(job_id)

        user = await self.fetch_one(
            db, "SELECT username FROM users WHERE username = :p1", bind_params([username])
        )
        if user is None:
            raise UserNotFoundException(username)

        try:
            await self.fetch_one(
                db,
                """INSERT INTO applications (username, job_id)
                   VALUES (:p1, :p2)
                   RETURNING job_id""",
                bind_params([username, job_id]),
            )
        except IntegrityError as exc:
            raise BadRequestException(
                f"{username} already applied to job {job_id}",
                code="ALREADY_APPLIED",
            ) from exc

        logger.info("job_applied", username=username, job_id=job_id)
