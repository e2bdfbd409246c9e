"""Tests for store API routes.

Service methods are patched so the routes are exercised without a database.
"""

from unittest.mock import AsyncMock, patch

from app.core.exceptions import NotFoundError
from app.features.stores.service import StoreService
from app.shared.schemas import PaginationParams
from app.shared.utils import paginate_response

BASE = "/api/v1/stores"


class TestCreateStoreEndpoint:
    """Tests for POST /stores."""

    async def test_create_returns_201_envelope(self, client, sample_store_data, sample_store):
        """Created store is wrapped in the success envelope with camelCase keys."""
        with patch.object(
            StoreService, "create_store", new=AsyncMock(return_value=sample_store)
        ) as create:
            response = await client.post(BASE, json=sample_store_data)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Store created successfully"
        assert body["data"]["id"] == 1
        assert body["data"]["zipCode"] == "62701"
        assert "createdAt" in body["data"]
        create.assert_awaited_once()

    async def test_missing_city_returns_400_with_field(self, client, sample_store_data):
        """Missing required field is reported by wire name."""
        del sample_store_data["city"]

        response = await client.post(BASE, json=sample_store_data)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert {"city"} <= {item["field"] for item in body["details"]}

    async def test_invalid_email_returns_400(self, client, sample_store_data):
        """Malformed email is rejected before reaching the service."""
        sample_store_data["email"] = "nope"

        with patch.object(StoreService, "create_store", new=AsyncMock()) as create:
            response = await client.post(BASE, json=sample_store_data)

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "email"
        create.assert_not_awaited()


class TestListStoresEndpoint:
    """Tests for GET /stores."""

    async def test_list_returns_pagination_meta(self, client, sample_store):
        """List responses carry pagination details in meta."""
        page = paginate_response([sample_store], 11, PaginationParams(page=1, limit=10))
        with patch.object(StoreService, "list_stores", new=AsyncMock(return_value=page)) as list_:
            response = await client.get(BASE, params={"city": "spring", "limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 1
        assert body["meta"] == {
            "page": 1,
            "limit": 10,
            "total": 11,
            "pages": 2,
            "hasNext": True,
            "hasPrev": False,
        }
        assert list_.await_args.kwargs["city"] == "spring"

    async def test_limit_above_maximum_returns_400(self, client):
        """Page size is capped at 100."""
        response = await client.get(BASE, params={"limit": 101})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "limit"


class TestStoreByIdEndpoints:
    """Tests for GET/PUT/DELETE /stores/{id}."""

    async def test_get_store(self, client, sample_store):
        """Existing store is returned."""
        with patch.object(StoreService, "get_store", new=AsyncMock(return_value=sample_store)):
            response = await client.get(f"{BASE}/1")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Downtown Market"

    async def test_get_unknown_store_returns_404(self, client):
        """NotFoundError becomes a 404 failure envelope."""
        with patch.object(
            StoreService,
            "get_store",
            new=AsyncMock(side_effect=NotFoundError("Store not found")),
        ):
            response = await client.get(f"{BASE}/999")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Store not found"
        assert "details" not in body

    async def test_non_positive_id_returns_400(self, client):
        """Path IDs must be positive integers."""
        response = await client.get(f"{BASE}/0")

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "id"

    async def test_update_store(self, client, sample_store):
        """Update passes only the supplied fields through."""
        with patch.object(
            StoreService, "update_store", new=AsyncMock(return_value=sample_store)
        ) as update:
            response = await client.put(f"{BASE}/1", json={"phoneNumber": "555-0199"})

        assert response.status_code == 200
        assert response.json()["message"] == "Store updated successfully"
        store_id, payload = update.await_args.args
        assert store_id == 1
        assert payload.model_dump(exclude_unset=True) == {"phone_number": "555-0199"}

    async def test_update_rejects_null_city(self, client):
        """Explicit null on a required column is a 400 on that field."""
        with patch.object(StoreService, "update_store", new=AsyncMock()) as update:
            response = await client.put(f"{BASE}/1", json={"city": None})

        assert response.status_code == 400
        assert [d["field"] for d in response.json()["details"]] == ["city"]
        update.assert_not_awaited()

    async def test_update_allows_clearing_email(self, client, sample_store):
        with patch.object(
            StoreService, "update_store", new=AsyncMock(return_value=sample_store)
        ) as update:
            response = await client.put(f"{BASE}/1", json={"email": None})

        assert response.status_code == 200
        _, payload = update.await_args.args
        assert payload.model_dump(exclude_unset=True) == {"email": None}

    async def test_delete_store(self, client):
        """Delete answers with a message and no data."""
        with patch.object(StoreService, "delete_store", new=AsyncMock(return_value=None)):
            response = await client.delete(f"{BASE}/1")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Store deleted successfully"
        assert "data" not in body

    async def test_delete_unknown_store_returns_404(self, client):
        """Delete of an unknown store is a 404."""
        with patch.object(
            StoreService,
            "delete_store",
            new=AsyncMock(side_effect=NotFoundError("Store not found")),
        ):
            response = await client.delete(f"{BASE}/999")

        assert response.status_code == 404
