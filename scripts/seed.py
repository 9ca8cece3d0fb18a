#!/usr/bin/env python
"""
Create a demo store with categories, tables and products.

Run ``POST /api/auth/setup`` first; the store is attached to the first
tenant that has a user. Re-running the script skips existing rows.
"""

import argparse
import asyncio
import sys
from decimal import Decimal

from sqlalchemy import select

from qrmenu.config import settings
from qrmenu.core.database import async_engine, async_session_factory
from qrmenu.core.utils.text import generate_slug
from qrmenu.models import Category, DiningTable, Product, Store, User
from qrmenu.modules.tables.services import build_qr_url


STORE = {
    "name": "Kafe Nusantara",
    "slug": "kafe-nusantara",
    "address": "Jl. Contoh No. 123, Jakarta",
    "phone": "08123456789",
    "description": "Kafe dengan menu nusantara modern",
}

CATEGORIES = [
    ("Makanan", 1),
    ("Minuman", 2),
    ("Snack", 3),
    ("Dessert", 4),
]

PRODUCTS = {
    "Makanan": [
        ("Nasi Goreng", "25000"),
        ("Mie Goreng", "23000"),
        ("Sate Ayam", "30000"),
    ],
    "Minuman": [
        ("Es Teh Manis", "8000"),
        ("Kopi Susu", "18000"),
    ],
    "Snack": [
        ("Pisang Goreng", "12000"),
    ],
    "Dessert": [
        ("Es Campur", "15000"),
    ],
}


async def seed(table_count: int) -> None:
    """Create the demo store for the first tenant with a user."""
    async with async_session_factory() as session:
        result = await session.execute(
            select(User).where(User.tenant_id.is_not(None)).limit(1)
        )
        user = result.scalar_one_or_none()
        if user is None:
            print("No tenant user found. Run POST /api/auth/setup first.")
            sys.exit(1)

        print(f"User: {user.name} ({user.role})")

        result = await session.execute(
            select(Store).where(Store.slug == STORE["slug"])
        )
        store = result.scalar_one_or_none()
        if store is None:
            store = Store(tenant_id=user.tenant_id, **STORE)
            session.add(store)
            await session.flush()
            print(f"Created store: {store.name} (slug: {store.slug})")
        else:
            print(f"Store already exists: {store.name}")

        for name, sort_order in CATEGORIES:
            slug = generate_slug(name)
            result = await session.execute(
                select(Category).where(
                    Category.store_id == store.id, Category.slug == slug
                )
            )
            category = result.scalar_one_or_none()
            if category is None:
                category = Category(
                    store_id=store.id,
                    name=name,
                    slug=slug,
                    sort_order=sort_order,
                )
                session.add(category)
                await session.flush()
                print(f"Created category: {name}")

            for position, (product_name, price) in enumerate(PRODUCTS[name]):
                product_slug = generate_slug(product_name)
                result = await session.execute(
                    select(Product.id).where(
                        Product.store_id == store.id, Product.slug == product_slug
                    )
                )
                if result.first() is not None:
                    continue
                session.add(
                    Product(
                        store_id=store.id,
                        category_id=category.id,
                        name=product_name,
                        slug=product_slug,
                        price=Decimal(price),
                        sort_order=position,
                    )
                )
                print(f"Created product: {product_name} ({price})")

        for number in range(1, table_count + 1):
            result = await session.execute(
                select(DiningTable.id).where(
                    DiningTable.store_id == store.id, DiningTable.number == number
                )
            )
            if result.first() is None:
                session.add(
                    DiningTable(
                        store_id=store.id, number=number, label=f"Meja {number}"
                    )
                )
                print(f"Created table: Meja {number}")

        await session.commit()

        print("\nSeed complete. Menu URL for table 1:")
        print(f"   {build_qr_url(store.slug, 1, settings.public_menu_base_url)}")

    await async_engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed a demo store")
    parser.add_argument(
        "--tables",
        "-t",
        type=int,
        default=5,
        help="Number of tables to create (default 5)",
    )
    args = parser.parse_args()

    asyncio.run(seed(args.tables))
