"""Item domain model."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Item:
    """A stored item. Ids are assigned by the database only."""

    id: int
    name: str
    description: str | None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Item":
        return cls(
            id=int(row["id"]),
            name=str(row["name"]),
            description=(
                str(row["description"]) if row["description"] is not None else None
            ),
        )
