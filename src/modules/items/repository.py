"""Item repository for database operations."""

import structlog

from src.infrastructure.database import Database
from src.modules.items.exceptions import ItemNotFoundError
from src.modules.items.models import Item

logger = structlog.get_logger()


class ItemRepository:
    """Repository for item CRUD operations."""

    def __init__(self, database: Database) -> None:
        """Initialize the repository.

        Args:
            database: Database connection instance.
        """
        self._db = database

    async def create(self, name: str, description: str | None = None) -> Item:
        """Create a new item.

        Args:
            name: Item name.
            description: Optional item description.

        Returns:
            The created Item with its database-assigned id.
        """
        cursor = await self._db.execute(
            "INSERT INTO items (name, description) VALUES (?, ?)",
            (name, description),
        )
        item_id = cursor.lastrowid
        if item_id is None:
            raise RuntimeError("Database did not assign an item id")

        logger.info("item_created", item_id=item_id)
        return Item(id=item_id, name=name, description=description)

    async def get_by_id(self, item_id: int) -> Item:
        """Get an item by its id.

        Raises:
            ItemNotFoundError: If the item doesn't exist.
        """
        row = await self._db.fetch_one(
            "SELECT * FROM items WHERE id = ?",
            (item_id,),
        )
        if row is None:
            raise ItemNotFoundError(item_id)
        return Item.from_row(dict(row))

    async def list_all(self) -> list[Item]:
        """List all items ordered by id."""
        rows = await self._db.fetch_all("SELECT * FROM items ORDER BY id ASC")
        return [Item.from_row(dict(row)) for row in rows]

    async def update(
        self, item_id: int, name: str, description: str | None = None
    ) -> Item:
        """Replace an item's fields.

        Args:
            item_id: Item id.
            name: New name.
            description: New description (None clears it).

        Returns:
            The updated Item.

        Raises:
            ItemNotFoundError: If the item doesn't exist.
        """
        cursor = await self._db.execute(
            "UPDATE items SET name = ?, description = ? WHERE id = ?",
            (name, description, item_id),
        )
        if cursor.rowcount == 0:
            raise ItemNotFoundError(item_id)

        logger.info("item_updated", item_id=item_id)
        return Item(id=item_id, name=name, description=description)

    async def delete(self, item_id: int) -> None:
        """Delete an item.

        Raises:
            ItemNotFoundError: If the item doesn't exist.
        """
        cursor = await self._db.execute(
            "DELETE FROM items WHERE id = ?",
            (item_id,),
        )
        if cursor.rowcount == 0:
            raise ItemNotFoundError(item_id)

        logger.info("item_deleted", item_id=item_id)
