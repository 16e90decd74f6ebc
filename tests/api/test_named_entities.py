"""Tests for the category and mark endpoints."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(params=["/categories", "/marks"])
def prefix(request: pytest.FixtureRequest) -> str:
    """URL prefix of the resource under test."""
    return request.param


class TestCreate:
    """Tests for POST /categories and /marks."""

    def test_create(self, client: TestClient, prefix: str) -> None:
        """Creating returns 201 and the stored row."""
        response = client.post(prefix, json={"name": "Audio"})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["name"] == "Audio"
        assert isinstance(body["data"]["id"], int)

    def test_duplicate_name_conflicts(self, client: TestClient, prefix: str) -> None:
        """A second row with the same name is rejected."""
        client.post(prefix, json={"name": "Audio"})

        response = client.post(prefix, json={"name": "Audio"})

        assert response.status_code == 409
        assert set(response.json()) == {"success", "error"}

    def test_missing_name_is_bad_request(self, client: TestClient, prefix: str) -> None:
        """A body without a name fails validation."""
        response = client.post(prefix, json={})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"].startswith("Bad request.")

    def test_blank_name_is_bad_request(self, client: TestClient, prefix: str) -> None:
        """Whitespace-only names are rejected."""
        response = client.post(prefix, json={"name": "   "})

        assert response.status_code == 400


class TestRead:
    """Tests for GET /categories and /marks."""

    def test_list(self, client: TestClient, prefix: str) -> None:
        """Listing returns rows in creation order."""
        client.post(prefix, json={"name": "A"})
        client.post(prefix, json={"name": "B"})

        response = client.get(prefix)

        assert response.status_code == 200
        assert [e["name"] for e in response.json()["data"]] == ["A", "B"]

    def test_get(self, client: TestClient, prefix: str) -> None:
        """Rows are fetched by id."""
        created = client.post(prefix, json={"name": "A"}).json()["data"]

        response = client.get(f"{prefix}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created

    def test_get_unknown_is_not_found(self, client: TestClient, prefix: str) -> None:
        """Unknown ids answer 404."""
        response = client.get(f"{prefix}/999")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_non_integer_id_is_bad_request(self, client: TestClient, prefix: str) -> None:
        """Ids must be integers."""
        response = client.get(f"{prefix}/abc")

        assert response.status_code == 400


class TestIncludeProducts:
    """Tests for includeProducts on GET /{id}."""

    def test_category_with_products(
        self, client: TestClient, category: dict, product: dict
    ) -> None:
        """The category embeds its products."""
        response = client.get(f"/categories/{category['id']}", params={"includeProducts": "true"})

        data = response.json()["data"]
        assert data["name"] == "Laptops"
        assert [p["id"] for p in data["products"]] == [product["id"]]
        assert data["products"][0]["categoryId"] == category["id"]

    def test_mark_with_products(self, client: TestClient, mark: dict, product: dict) -> None:
        """The mark embeds its products."""
        response = client.get(f"/marks/{mark['id']}", params={"includeProducts": "true"})

        assert [p["name"] for p in response.json()["data"]["products"]] == ["Acme Book 14"]

    def test_without_flag_omits_products(
        self, client: TestClient, category: dict, product: dict
    ) -> None:
        """Products are only embedded on request."""
        response = client.get(f"/categories/{category['id']}")

        assert "products" not in response.json()["data"]

    def test_empty_products(self, client: TestClient, prefix: str) -> None:
        """A row with no products embeds an empty list."""
        created = client.post(prefix, json={"name": "Empty"}).json()["data"]

        response = client.get(f"{prefix}/{created['id']}", params={"includeProducts": "true"})

        assert response.json()["data"]["products"] == []


class TestUpdate:
    """Tests for PUT /categories/{id} and /marks/{id}."""

    def test_rename(self, client: TestClient, prefix: str) -> None:
        """Renaming changes the stored name."""
        created = client.post(prefix, json={"name": "Old"}).json()["data"]

        response = client.put(f"{prefix}/{created['id']}", json={"name": "New"})

        assert response.status_code == 200
        assert response.json()["data"] == {"id": created["id"], "name": "New"}
        assert client.get(f"{prefix}/{created['id']}").json()["data"]["name"] == "New"

    def test_rename_to_taken_name_conflicts(self, client: TestClient, prefix: str) -> None:
        """Renaming onto another row's name is rejected."""
        client.post(prefix, json={"name": "A"})
        second = client.post(prefix, json={"name": "B"}).json()["data"]

        response = client.put(f"{prefix}/{second['id']}", json={"name": "A"})

        assert response.status_code == 409

    def test_rename_unknown_is_not_found(self, client: TestClient, prefix: str) -> None:
        """Renaming an unknown id answers 404."""
        response = client.put(f"{prefix}/999", json={"name": "X"})

        assert response.status_code == 404


class TestDelete:
    """Tests for DELETE /categories/{id} and /marks/{id}."""

    def test_delete(self, client: TestClient, prefix: str) -> None:
        """Deleting returns the removed row and it is gone afterwards."""
        created = client.post(prefix, json={"name": "Gone"}).json()["data"]

        response = client.delete(f"{prefix}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"] == created
        assert client.get(f"{prefix}/{created['id']}").status_code == 404

    def test_delete_unknown_is_not_found(self, client: TestClient, prefix: str) -> None:
        """Deleting an unknown id answers 404."""
        assert client.delete(f"{prefix}/999").status_code == 404

    def test_delete_referenced_category_conflicts(
        self, client: TestClient, category: dict, product: dict
    ) -> None:
        """A category still used by a product cannot be deleted."""
        response = client.delete(f"/categories/{category['id']}")

        assert response.status_code == 409
        assert client.get(f"/categories/{category['id']}").status_code == 200

    def test_delete_referenced_mark_conflicts(
        self, client: TestClient, mark: dict, product: dict
    ) -> None:
        """A mark still used by a product cannot be deleted."""
        response = client.delete(f"/marks/{mark['id']}")

        assert response.status_code == 409
        assert client.get(f"/products/{product['id']}").status_code == 200
