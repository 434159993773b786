"""Tests for the items module."""

import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.infrastructure.database import Database
from src.main import create_app
from src.modules.items import ItemNotFoundError, ItemRepository
from src.modules.items.models import Item


@pytest.fixture
async def database() -> Database:
    """Create a temporary test database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db = Database(Path(tmpdir) / "test.db")
        await db.connect()
        yield db
        await db.disconnect()


@pytest.fixture
async def repository(database: Database) -> ItemRepository:
    return ItemRepository(database)


class TestItemRepository:
    """Tests for ItemRepository."""

    async def test_create_and_get(self, repository: ItemRepository) -> None:
        created = await repository.create("Widget", "A small widget")

        found = await repository.get_by_id(created.id)

        assert found == Item(id=created.id, name="Widget", description="A small widget")

    async def test_create_without_description(self, repository: ItemRepository) -> None:
        created = await repository.create("Widget")

        assert (await repository.get_by_id(created.id)).description is None

    async def test_get_missing(self, repository: ItemRepository) -> None:
        with pytest.raises(ItemNotFoundError) as exc_info:
            await repository.get_by_id(42)

        assert exc_info.value.item_id == 42

    async def test_list_all_ordered_by_id(self, repository: ItemRepository) -> None:
        await repository.create("b")
        await repository.create("a")

        items = await repository.list_all()

        assert [item.name for item in items] == ["b", "a"]

    async def test_update(self, repository: ItemRepository) -> None:
        created = await repository.create("Widget", "old")

        updated = await repository.update(created.id, "Gadget", None)

        assert updated == Item(id=created.id, name="Gadget", description=None)
        assert await repository.get_by_id(created.id) == updated

    async def test_update_missing(self, repository: ItemRepository) -> None:
        with pytest.raises(ItemNotFoundError):
            await repository.update(42, "Gadget")

    async def test_delete(self, repository: ItemRepository) -> None:
        created = await repository.create("Widget")

        await repository.delete(created.id)

        with pytest.raises(ItemNotFoundError):
            await repository.get_by_id(created.id)

    async def test_delete_missing(self, repository: ItemRepository) -> None:
        with pytest.raises(ItemNotFoundError):
            await repository.delete(42)


@pytest.fixture
def client(tmp_path: Path) -> Iterator[TestClient]:
    settings = Settings(
        jwt_secret_key="test-secret-key-for-testing-only",  # type: ignore[arg-type]
        database_path=str(tmp_path / "test.db"),
        bcrypt_rounds=4,
        log_json=False,
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    client.post("/register", json={"username": "alice", "password": "secret1"})
    response = client.post("/login", json={"username": "alice", "password": "secret1"})
    return {"Authorization": f"Bearer {response.json()['token']}"}


class TestItemRoutes:
    """Tests for the /items endpoints."""

    def test_crud_flow(self, client: TestClient, auth_headers: dict[str, str]) -> None:
        created = client.post(
            "/items",
            json={"name": "Widget", "description": "A small widget"},
            headers=auth_headers,
        )
        assert created.status_code == 201
        item = created.json()
        assert item == {"id": 1, "name": "Widget", "description": "A small widget"}

        listed = client.get("/items", headers=auth_headers)
        assert listed.json() == [item]

        fetched = client.get("/items/1", headers=auth_headers)
        assert fetched.json() == item

        updated = client.put(
            "/items/1", json={"name": "Gadget"}, headers=auth_headers
        )
        assert updated.status_code == 200
        assert updated.json() == {"id": 1, "name": "Gadget", "description": None}

        deleted = client.delete("/items/1", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Item deleted"}

        gone = client.get("/items/1", headers=auth_headers)
        assert gone.status_code == 404
        assert gone.json() == {"message": "Item not found"}

    def test_client_supplied_id_ignored(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/items", json={"id": 99, "name": "Widget"}, headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["id"] == 1

        updated = client.put(
            "/items/1", json={"id": 99, "name": "Gadget"}, headers=auth_headers
        )
        assert updated.json()["id"] == 1

    def test_create_requires_name(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.post("/items", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["name"]

    def test_non_integer_id(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.get("/items/abc", headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_out_of_range_id(
        self, client: TestClient, auth_headers: dict[str, str], method: str
    ) -> None:
        """Ids beyond SQLite's 64-bit range are rejected as bad input."""
        kwargs = {"json": {"name": "Gadget"}} if method == "put" else {}

        for item_id in ("99999999999999999999", "0", "-1"):
            response = getattr(client, method)(
                f"/items/{item_id}", headers=auth_headers, **kwargs
            )

            assert response.status_code == 400
            assert [e["field"] for e in response.json()["errors"]] == ["item_id"]

    def test_largest_id_is_not_found(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        response = client.get(f"/items/{2**63 - 1}", headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.parametrize("method", ["put", "delete"])
    def test_missing_item(
        self, client: TestClient, auth_headers: dict[str, str], method: str
    ) -> None:
        kwargs = {"json": {"name": "Gadget"}} if method == "put" else {}

        response = getattr(client, method)("/items/7", headers=auth_headers, **kwargs)

        assert response.status_code == 404

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/items"),
            ("get", "/items/1"),
            ("post", "/items"),
            ("put", "/items/1"),
            ("delete", "/items/1"),
        ],
    )
    def test_requires_token(self, client: TestClient, method: str, path: str) -> None:
        """Unauthenticated requests never reach the handler."""
        kwargs = {"json": {"name": "Widget"}} if method in ("post", "put") else {}

        missing = getattr(client, method)(path, **kwargs)
        invalid = getattr(client, method)(
            path, headers={"Authorization": "Bearer garbage"}, **kwargs
        )

        assert missing.status_code == 401
        assert invalid.status_code == 403

    @pytest.mark.parametrize(
        ("headers", "status_code"),
        [({}, 401), ({"Authorization": "Bearer garbage"}, 403)],
    )
    def test_token_checked_before_body(
        self, client: TestClient, headers: dict[str, str], status_code: int
    ) -> None:
        """A malformed body on a protected route still gets the auth answer."""
        response = client.post(
            "/items",
            content=b"{not json",
            headers={"Content-Type": "application/json", **headers},
        )

        assert response.status_code == status_code

    def test_rejected_write_has_no_effect(
        self, client: TestClient, auth_headers: dict[str, str]
    ) -> None:
        client.post(
            "/items",
            json={"name": "Widget"},
            headers={"Authorization": "Bearer garbage"},
        )

        assert client.get("/items", headers=auth_headers).json() == []
