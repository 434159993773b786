"""User repository for database operations."""

import asyncio
import sqlite3

import aiosqlite
import structlog

from src.infrastructure.database import Database
from src.modules.auth.exceptions import DuplicateUsernameError
from src.modules.auth.models import User

logger = structlog.get_logger()


def _log_detached_write(write: "asyncio.Future[aiosqlite.Cursor]") -> None:
    """Report the outcome of an insert whose caller was cancelled."""
    if write.cancelled():
        return

    error = write.exception()
    if error is not None:
        logger.warning("user_insert_failed_after_cancel", error_type=type(error).__name__)
    else:
        logger.info("user_created_after_cancel", user_id=write.result().lastrowid)


class UserRepository:
    """Repository for stored credentials.

    Username uniqueness is enforced by the table's UNIQUE constraint,
    which makes the check and the insert one atomic step.
    """

    def __init__(self, database: Database) -> None:
        """Initialize the repository.

        Args:
            database: Database connection.
        """
        self._db = database

    async def create(self, username: str, hashed_password: str) -> User:
        """Create a new user.

        The insert runs shielded from cancellation of the calling task, so
        a disconnecting client cannot leave a half-written record behind.

        Args:
            username: Unique login name.
            hashed_password: Bcrypt-hashed password.

        Returns:
            The created User.

        Raises:
            DuplicateUsernameError: If the username already exists.
        """
        write = asyncio.ensure_future(
            self._db.execute(
                "INSERT INTO users (username, hashed_password) VALUES (?, ?)",
                (username, hashed_password),
            )
        )
        try:
            cursor = await asyncio.shield(write)
        except asyncio.CancelledError:
            write.add_done_callback(_log_detached_write)
            raise
        except sqlite3.IntegrityError as e:
            if "UNIQUE constraint failed" in str(e):
                raise DuplicateUsernameError(username) from e
            raise

        user_id = cursor.lastrowid
        if user_id is None:
            raise RuntimeError("Database did not assign a user id")

        logger.info("user_created", user_id=user_id, username=username)

        return User(id=user_id, username=username, hashed_password=hashed_password)

    async def get_by_id(self, user_id: int) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's id.

        Returns:
            User if found, None otherwise.
        """
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE id = ?",
            (user_id,),
        )

        if row is None:
            return None

        return User.from_row(dict(row))

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by username.

        Args:
            username: The user's username.

        Returns:
            User if found, None otherwise.
        """
        row = await self._db.fetch_one(
            "SELECT * FROM users WHERE username = ?",
            (username,),
        )

        if row is None:
            return None

        return User.from_row(dict(row))

    async def list_all(self) -> list[User]:
        """List all users ordered by id."""
        rows = await self._db.fetch_all("SELECT * FROM users ORDER BY id ASC")
        return [User.from_row(dict(row)) for row in rows]

    async def count(self) -> int:
        """Count total users."""
        row = await self._db.fetch_one("SELECT COUNT(*) as count FROM users")
        return int(row["count"]) if row else 0
