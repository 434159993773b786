"""User domain model."""

from dataclasses import dataclass
from typing import Any


@dataclass
class User:
    """User domain model.

    Attributes:
        id: Store-assigned user identifier.
        username: Unique login name.
        hashed_password: Bcrypt digest of the user's password.
    """

    id: int
    username: str
    hashed_password: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        """Create a User from a database row.

        Args:
            row: Database row as a dictionary.

        Returns:
            User instance.
        """
        return cls(
            id=int(row["id"]),
            username=str(row["username"]),
            hashed_password=str(row["hashed_password"]),
        )

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
