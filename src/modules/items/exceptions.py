"""Item exceptions."""


class ItemError(Exception):
    """Base exception for item operations."""

    pass


class ItemNotFoundError(ItemError):
    """Raised when an item is not found."""

    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__("Item not found")
