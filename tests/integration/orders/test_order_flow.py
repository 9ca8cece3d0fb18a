"""Integration tests for placing and fulfilling orders."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.modules.categories.models import Category
from qrmenu.modules.orders.models import Order, OrderItem
from qrmenu.modules.products.models import Product
from qrmenu.modules.stores.models import Store
from qrmenu.modules.tables.models import DiningTable


pytestmark = pytest.mark.integration


def cart(store_slug: str, *lines: tuple[Product, int], **fields) -> dict:
    return {
        "storeSlug": store_slug,
        "items": [
            {"productId": str(product.id), "quantity": quantity}
            for product, quantity in lines
        ],
        **fields,
    }


async def count_rows(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


class TestPlaceOrder:
    """Tests for POST /api/orders."""

    async def test_place_order(
        self, client: AsyncClient, store: Store, product: Product, table: DiningTable
    ):
        """POST /api/orders should price the cart from the catalog."""
        response = await client.post(
            "/api/orders",
            json=cart(
                store.slug,
                (product, 2),
                table="T5",
                guestName="Budi",
                notes="Tidak pedas",
            ),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order placed"
        order = body["data"]
        assert order["orderNumber"] == "ORD-KAFE-00001"
        assert order["status"] == "PENDING"
        assert order["nextStatus"] == "CONFIRMED"
        assert order["totalAmount"] == 50000
        assert order["guestName"] == "Budi"
        assert order["table"] == {"id": str(table.id), "number": 5, "label": "Meja 5"}
        [item] = order["items"]
        assert item["quantity"] == 2
        assert item["price"] == 25000
        assert item["subtotal"] == 50000
        assert item["product"]["name"] == "Nasi Goreng"

    async def test_order_numbers_increase_per_store(
        self,
        client: AsyncClient,
        store: Store,
        product: Product,
        other_store: Store,
        db: AsyncSession,
    ):
        other_category = Category(store_id=other_store.id, name="Kopi", slug="kopi")
        db.add(other_category)
        await db.flush()
        other_product = Product(
            store_id=other_store.id,
            category_id=other_category.id,
            name="Kopi Hitam",
            slug="kopi-hitam",
            price=10000,
        )
        db.add(other_product)
        await db.commit()

        numbers = []
        for _ in range(2):
            response = await client.post(
                "/api/orders", json=cart(store.slug, (product, 1))
            )
            numbers.append(response.json()["data"]["orderNumber"])
        other = await client.post(
            "/api/orders", json=cart(other_store.slug, (other_product, 1))
        )

        assert numbers == ["ORD-KAFE-00001", "ORD-KAFE-00002"]
        assert other.json()["data"]["orderNumber"].endswith("-00001")

    async def test_client_prices_are_ignored(
        self, client: AsyncClient, store: Store, product: Product
    ):
        payload = cart(store.slug, (product, 1))
        payload["items"][0]["price"] = 1
        payload["totalAmount"] = 1

        response = await client.post("/api/orders", json=payload)

        assert response.json()["data"]["totalAmount"] == 25000

    async def test_mixed_cart_total(
        self,
        client: AsyncClient,
        store: Store,
        category: Category,
        product: Product,
        make_product,
    ):
        teh = await make_product(category, "Es Teh Manis", "8000")

        response = await client.post(
            "/api/orders", json=cart(store.slug, (product, 1), (teh, 3))
        )

        assert response.json()["data"]["totalAmount"] == 49000

    async def test_unavailable_product_writes_nothing(
        self,
        client: AsyncClient,
        db: AsyncSession,
        store: Store,
        category: Category,
        product: Product,
        make_product,
    ):
        """POST /api/orders should reject the whole cart if an item is unavailable."""
        sate = await make_product(category, "Sate Ayam", "30000", is_available=False)

        response = await client.post(
            "/api/orders", json=cart(store.slug, (product, 1), (sate, 1))
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "products_unavailable"
        assert "Sate Ayam" in body["error"]
        assert await count_rows(db, Order) == 0
        assert await count_rows(db, OrderItem) == 0

    async def test_product_of_another_store(
        self,
        client: AsyncClient,
        db: AsyncSession,
        store: Store,
        product: Product,
        other_store: Store,
    ):
        response = await client.post(
            "/api/orders", json=cart(other_store.slug, (product, 1))
        )

        assert response.status_code == 400
        assert response.json()["code"] == "unknown_products"
        assert await count_rows(db, Order) == 0

    async def test_failed_order_does_not_consume_a_number(
        self,
        client: AsyncClient,
        store: Store,
        category: Category,
        product: Product,
        make_product,
    ):
        sold_out = await make_product(category, "Pisang Goreng", is_available=False)
        await client.post("/api/orders", json=cart(store.slug, (sold_out, 1)))

        response = await client.post("/api/orders", json=cart(store.slug, (product, 1)))

        assert response.json()["data"]["orderNumber"] == "ORD-KAFE-00001"

    async def test_unknown_table_is_tolerated(
        self, client: AsyncClient, store: Store, product: Product
    ):
        response = await client.post(
            "/api/orders", json=cart(store.slug, (product, 1), tableNumber=42)
        )

        assert response.status_code == 201
        assert response.json()["data"]["table"] is None

    async def test_inactive_store(
        self, client: AsyncClient, db: AsyncSession, store: Store, product: Product
    ):
        store.is_active = False
        await db.commit()

        response = await client.post("/api/orders", json=cart(store.slug, (product, 1)))

        assert response.status_code == 404

    @pytest.mark.parametrize(
        "items",
        [[], [{"productId": "00000000-0000-0000-0000-000000000000", "quantity": 0}]],
    )
    async def test_invalid_cart(self, client: AsyncClient, store: Store, items):
        response = await client.post(
            "/api/orders", json={"storeSlug": store.slug, "items": items}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"


class TestManageOrders:
    """Tests for the staff order endpoints."""

    @pytest.fixture
    async def placed(self, client: AsyncClient, store: Store, product: Product):
        orders = []
        for quantity in (1, 2, 3):
            response = await client.post(
                "/api/orders", json=cart(store.slug, (product, quantity))
            )
            orders.append(response.json()["data"])
        return orders

    async def test_list_is_paginated_newest_first(
        self, client: AsyncClient, manager_headers, store: Store, placed
    ):
        """GET /api/orders should page through orders newest first."""
        response = await client.get(
            "/api/orders",
            params={"storeId": str(store.id), "page": 1, "limit": 2},
            headers=manager_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert [o["orderNumber"] for o in body["data"]] == [
            "ORD-KAFE-00003",
            "ORD-KAFE-00002",
        ]
        assert body["pagination"] == {
            "page": 1,
            "limit": 2,
            "total": 3,
            "totalPages": 2,
        }

    async def test_filter_by_status(
        self, client: AsyncClient, manager_headers, store: Store, placed
    ):
        await client.patch(
            f"/api/orders/{placed[0]['id']}/status",
            json={"status": "CONFIRMED"},
            headers=manager_headers,
        )

        response = await client.get(
            "/api/orders",
            params={"storeId": str(store.id), "status": "CONFIRMED"},
            headers=manager_headers,
        )

        assert [o["id"] for o in response.json()["data"]] == [placed[0]["id"]]

    async def test_get_order(self, client: AsyncClient, manager_headers, placed):
        response = await client.get(
            f"/api/orders/{placed[1]['id']}", headers=manager_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["totalAmount"] == 50000

    async def test_update_status(self, client: AsyncClient, manager_headers, placed):
        """PATCH /api/orders/{id}/status should move the order along."""
        response = await client.patch(
            f"/api/orders/{placed[0]['id']}/status",
            json={"status": "READY"},
            headers=manager_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "READY"
        assert data["nextStatus"] == "SERVED"

    async def test_strict_transitions(
        self,
        client: AsyncClient,
        manager_headers,
        placed,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setattr(
            "qrmenu.modules.orders.services.settings.enforce_order_transitions", True
        )

        response = await client.patch(
            f"/api/orders/{placed[0]['id']}/status",
            json={"status": "SERVED"},
            headers=manager_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_status_transition"

    async def test_unknown_status(self, client: AsyncClient, manager_headers, placed):
        response = await client.patch(
            f"/api/orders/{placed[0]['id']}/status",
            json={"status": "EATEN"},
            headers=manager_headers,
        )

        assert response.status_code == 400

    async def test_other_tenant_is_forbidden(
        self, client: AsyncClient, other_owner_headers, store: Store, placed
    ):
        listing = await client.get(
            "/api/orders",
            params={"storeId": str(store.id)},
            headers=other_owner_headers,
        )
        update = await client.patch(
            f"/api/orders/{placed[0]['id']}/status",
            json={"status": "CANCELLED"},
            headers=other_owner_headers,
        )

        assert listing.status_code == 403
        assert update.status_code == 403

    async def test_listing_requires_staff(self, client: AsyncClient, store: Store):
        response = await client.get("/api/orders", params={"storeId": str(store.id)})

        assert response.status_code == 401
