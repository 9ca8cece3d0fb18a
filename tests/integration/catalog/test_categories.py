"""Integration tests for category endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.modules.categories.models import Category
from qrmenu.modules.products.models import Product
from qrmenu.modules.stores.models import Store


pytestmark = pytest.mark.integration


class TestCategories:
    async def test_create_derives_slug(
        self, client: AsyncClient, manager_headers, store: Store
    ):
        """POST /api/categories should build the slug from the name."""
        response = await client.post(
            "/api/categories",
            params={"storeId": str(store.id)},
            json={"name": "Minuman Dingin", "sortOrder": 2},
            headers=manager_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "minuman-dingin"
        assert data["storeId"] == str(store.id)
        assert data["isActive"] is True

    async def test_slug_unique_within_store(
        self, client: AsyncClient, manager_headers, category
    ):
        response = await client.post(
            "/api/categories",
            params={"storeId": str(category.store_id)},
            json={"name": "Makanan"},
            headers=manager_headers,
        )

        assert response.status_code == 409
        assert response.json()["code"] == "slug_exists"

    async def test_same_slug_in_another_store(
        self, client: AsyncClient, admin_headers, category, other_store: Store
    ):
        response = await client.post(
            "/api/categories",
            params={"storeId": str(other_store.id)},
            json={"name": "Makanan"},
            headers=admin_headers,
        )

        assert response.status_code == 201

    async def test_list_in_sort_order_with_counts(
        self,
        client: AsyncClient,
        db: AsyncSession,
        manager_headers,
        store: Store,
        category,
        product,
    ):
        """GET /api/categories should list by sortOrder with product counts."""
        db.add(Category(store_id=store.id, name="Snack", slug="snack", sort_order=0))
        await db.commit()

        response = await client.get(
            "/api/categories",
            params={"storeId": str(store.id)},
            headers=manager_headers,
        )

        assert response.status_code == 200
        rows = response.json()["data"]
        assert [(c["slug"], c["productCount"]) for c in rows] == [
            ("snack", 0),
            ("makanan", 1),
        ]

    async def test_store_id_is_required(self, client: AsyncClient, manager_headers):
        response = await client.get("/api/categories", headers=manager_headers)

        assert response.status_code == 400
        fields = [e["field"] for e in response.json()["details"]["errors"]]
        assert fields == ["storeId"]

    async def test_update(self, client: AsyncClient, manager_headers, category):
        response = await client.patch(
            f"/api/categories/{category.id}",
            json={"name": "Makanan Berat", "isActive": False},
            headers=manager_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Makanan Berat"
        assert data["slug"] == "makanan"
        assert data["isActive"] is False

    async def test_delete_removes_products(
        self, client: AsyncClient, db: AsyncSession, manager_headers, category, product
    ):
        response = await client.delete(
            f"/api/categories/{category.id}", headers=manager_headers
        )

        assert response.status_code == 200
        remaining = await db.scalar(
            select(func.count()).select_from(Product).where(
                Product.category_id == category.id
            )
        )
        assert remaining == 0

    async def test_other_tenant_is_forbidden(
        self, client: AsyncClient, other_owner_headers, category
    ):
        response = await client.patch(
            f"/api/categories/{category.id}",
            json={"name": "Hijacked"},
            headers=other_owner_headers,
        )

        assert response.status_code == 403
        assert response.json()["code"] == "tenant_mismatch"
