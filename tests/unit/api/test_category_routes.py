"""Unit tests for category routes."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from statustracker.tracker_store import StoreError, TrackerStore


@pytest.mark.unit
class TestListCategories:
    """Tests for GET /api/categories."""

    def test_list_categories_empty(self, client: TestClient) -> None:
        response = client.get("/api/categories")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_categories_ordered_by_name(
        self, client: TestClient, store: TrackerStore
    ) -> None:
        store.create_category("ui")
        store.create_category("backend")

        response = client.get("/api/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["backend", "ui"]

    def test_store_failure_returns_500(self, client: TestClient, store: TrackerStore) -> None:
        with patch.object(store, "list_categories", side_effect=StoreError("disk gone")):
            response = client.get("/api/categories")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


@pytest.mark.unit
class TestCreateCategory:
    """Tests for POST /api/categories."""

    def test_create_category_returns_201(self, client: TestClient) -> None:
        response = client.post("/api/categories", json={"name": "infra"})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "infra"
        assert data["id"] is not None

    def test_existing_category_returns_200(self, client: TestClient, store: TrackerStore) -> None:
        """Idempotent on name: the existing row comes back unchanged."""
        existing = store.create_category("infra")

        response = client.post("/api/categories", json={"name": "infra"})

        assert response.status_code == 200
        assert response.json()["id"] == existing.id
        assert len(store.list_categories()) == 1

    @pytest.mark.parametrize("body", [{"name": ""}, {"name": "   "}, {}])
    def test_empty_name_returns_400(self, client: TestClient, body: dict) -> None:
        response = client.post("/api/categories", json=body)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_malformed_body_returns_400(self, client: TestClient) -> None:
        response = client.post(
            "/api/categories", content="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
