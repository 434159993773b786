"""Item API routes. Every route requires a valid bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse

from src.modules.auth.dependencies import AuthenticatedRoute
from src.modules.items.exceptions import ItemNotFoundError
from src.modules.items.repository import ItemRepository
from src.modules.items.schemas import ItemCreate, ItemResponse, MessageResponse

router = APIRouter(prefix="/items", tags=["items"], route_class=AuthenticatedRoute)

# SQLite stores ids as signed 64-bit integers
ItemId = Annotated[int, Path(ge=1, le=2**63 - 1)]


def get_item_repository(request: Request) -> ItemRepository:
    """Get the item repository built by the application factory."""
    repository: ItemRepository = request.app.state.item_repository
    return repository


ItemRepo = Annotated[ItemRepository, Depends(get_item_repository)]


@router.get("", response_model=list[ItemResponse])
async def list_items(repository: ItemRepo) -> list[ItemResponse]:
    items = await repository.list_all()
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(item_id: ItemId, repository: ItemRepo) -> ItemResponse:
    return ItemResponse.model_validate(await repository.get_by_id(item_id))


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(data: ItemCreate, repository: ItemRepo) -> ItemResponse:
    item = await repository.create(data.name, data.description)
    return ItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: ItemId, data: ItemCreate, repository: ItemRepo
) -> ItemResponse:
    item = await repository.update(item_id, data.name, data.description)
    return ItemResponse.model_validate(item)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(item_id: ItemId, repository: ItemRepo) -> MessageResponse:
    await repository.delete(item_id)
    return MessageResponse(message="Item deleted")


async def item_not_found_handler(
    _request: Request, exc: ItemNotFoundError
) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(exc)})
