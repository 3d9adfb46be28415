"""
Users service - parameterized SQL against the users table
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import ValidationError

from users_api.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[Any] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


def _row_to_user(row) -> User:
    # The id column is read along with the rest of the row and dropped here
    return User(name=row["name"], email=row["email"], location=row["location"])


def _affected_rows(status: str) -> int:
    """Parse the row count out of a command status tag such as ``DELETE 3``"""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0


class UsersService:
    """Storage accessor for the users table.

    Built once at startup around the shared connection pool and handed to
    request handlers. Database errors are logged here and reported back as
    a ``ServiceResult`` carrying a message that is safe to show to callers.
    """

    def __init__(self, db_pool):
        self.db_pool = db_pool

    async def insert_user(self, user: User) -> ServiceResult:
        """Insert a new row for ``user``"""
        try:
            async with self.db_pool.acquire() as conn:
                await conn.execute(
                    "INSERT INTO users (name, email, location) VALUES ($1, $2, $3)",
                    user.name, user.email, user.location
                )
        except Exception as e:
            logger.error(f"db insert: {e}")
            return ServiceResult(
                success=False,
                error="failed to add the user",
                error_type="DATABASE_ERROR"
            )

        return ServiceResult(success=True, data=user, count=1)

    async def list_users(self) -> ServiceResult:
        """
        Fetch every user in storage order

        Returns:
            ServiceResult whose data is a list of User, empty when the table is
        """
        try:
            async with self.db_pool.acquire() as conn:
                rows = await conn.fetch("SELECT id, name, email, location FROM users")
        except Exception as e:
            logger.error(f"db list: {e}")
            return ServiceResult(
                success=False,
                error="failed to collect user informations from db",
                error_type="DATABASE_ERROR"
            )

        users: List[User] = []
        for row in rows:
            try:
                users.append(_row_to_user(row))
            except (KeyError, ValidationError) as e:
                logger.error(f"db list: failed to scan the values from row object, {e}")
                return ServiceResult(
                    success=False,
                    error="failed to scan the values from db",
                    error_type="SCAN_ERROR"
                )

        return ServiceResult(success=True, data=users, count=len(users))

    async def get_user(self, name: str) -> ServiceResult:
        """Fetch the first user whose name matches"""
        not_found = ServiceResult(
            success=False,
            error="invalid username, failed to get user information from db",
            error_type="RESOURCE_NOT_FOUND"
        )

        try:
            async with self.db_pool.acquire() as conn:
                row = await conn.fetchrow(
                    "SELECT id, name, email, location FROM users WHERE name = $1",
                    name
                )
        except Exception as e:
            logger.error(f"db get: failed to query user {name!r}: {e}")
            return not_found

        if row is None:
            logger.info(f"db get: no user named {name!r}")
            return not_found

        try:
            user = _row_to_user(row)
        except (KeyError, ValidationError) as e:
            logger.error(f"db get: failed to parse the db row, {e}")
            return not_found

        return ServiceResult(success=True, data=user, count=1)

    async def update_user(self, user: User) -> ServiceResult:
        """
        Overwrite name, email and location of the row matching ``user.name``

        The number of matched rows is not checked, so updating a name that
        does not exist still reports success.
        """
        try:
            async with self.db_pool.acquire() as conn:
                await conn.execute(
                    "UPDATE users SET name = $1, email = $2, location = $3 WHERE name = $4",
                    user.name, user.email, user.location, user.name
                )
        except Exception as e:
            logger.error(f"db update: {e}")
            return ServiceResult(
                success=False,
                error="failed to update given user details",
                error_type="DATABASE_ERROR"
            )

        return ServiceResult(success=True, data=user)

    async def delete_user(self, name: str) -> ServiceResult:
        """Delete the rows matching ``name``; fails when nothing was removed"""
        try:
            async with self.db_pool.acquire() as conn:
                status = await conn.execute("DELETE FROM users WHERE name = $1", name)
        except Exception as e:
            logger.error(f"db remove: {e}")
            return ServiceResult(
                success=False,
                error="failed to remove the user",
                error_type="DATABASE_ERROR"
            )

        deleted = _affected_rows(status)
        if deleted == 0:
            logger.info("db remove: 0 row affected")
            return ServiceResult(
                success=False,
                error=f"given user `{name}` not exists",
                error_type="RESOURCE_NOT_FOUND"
            )

        return ServiceResult(success=True, count=deleted)
