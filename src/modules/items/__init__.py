"""Items module: CRUD over the items table."""

from src.modules.items.exceptions import ItemError, ItemNotFoundError
from src.modules.items.models import Item
from src.modules.items.repository import ItemRepository
from src.modules.items.schemas import ItemCreate, ItemResponse

__all__ = [
    "Item",
    "ItemCreate",
    "ItemError",
    "ItemNotFoundError",
    "ItemRepository",
    "ItemResponse",
]
