"""Item Pydantic schemas for API validation."""

from pydantic import BaseModel, ConfigDict, Field


class ItemCreate(BaseModel):
    """Request schema for creating or replacing an item.

    Any ``id`` in the body is ignored; ids come from the database.
    """

    name: str = Field(min_length=1, description="Item name")
    description: str | None = None


class ItemResponse(BaseModel):
    """Response schema for a single item."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None


class MessageResponse(BaseModel):
    message: str
