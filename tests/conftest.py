"""Pytest configuration and shared fixtures."""

import os
import tempfile


# Settings are read at import time, so configure them before importing qrmenu
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="qrmenu-uploads-"))
os.environ["RATE_LIMIT_ENABLED"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from decimal import Decimal  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from qrmenu.core.auth.backend import create_access_token, hash_password  # noqa: E402
from qrmenu.core.database import get_db  # noqa: E402
from qrmenu.core.permissions import UserRole  # noqa: E402
from qrmenu.core.realtime import EventPublisher, TopicHub, get_publisher  # noqa: E402
from qrmenu.main import create_app  # noqa: E402
from qrmenu.models import (  # noqa: E402
    Base,
    Category,
    DiningTable,
    Product,
    Store,
    Subscription,
    Tenant,
    User,
)
from tests.factories import (  # noqa: E402
    DEFAULT_PASSWORD,
    StoreCreateFactory,
    TenantCreateFactory,
    unique_email,
)


# Hashing once keeps bcrypt out of every user fixture
PASSWORD_HASH = hash_password(DEFAULT_PASSWORD)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine(tmp_path: Path):
    """Create a fresh SQLite database file with every table."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging and inspecting data.

    Fixtures commit what they create so the requests under test, which use
    their own sessions, can see it.
    """
    async with session_factory() as session:
        yield session


@pytest.fixture
def topic_hub() -> TopicHub:
    """Isolated hub that receives the events published during a test."""
    return TopicHub(send_timeout=1.0)


@pytest.fixture
async def app(session_factory: async_sessionmaker[AsyncSession], topic_hub: TopicHub):
    """Create test application instance."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_publisher] = lambda: EventPublisher(topic_hub)

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Tenant and User Fixtures
# ============================================================


@pytest.fixture
def make_tenant(db: AsyncSession) -> Callable[..., Awaitable[Tenant]]:
    """Return a coroutine function that persists a tenant with a subscription."""

    async def _make(max_stores: int = 1, **overrides: Any) -> Tenant:
        data = TenantCreateFactory.build()
        tenant = Tenant(
            name=overrides.pop("name", data.name),
            slug=overrides.pop("slug", data.slug),
            **overrides,
        )
        tenant.subscription = Subscription(plan="FREE", max_stores=max_stores)
        db.add(tenant)
        await db.commit()
        return tenant

    return _make


@pytest.fixture
def make_user(db: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Return a coroutine function that persists a user.

    Every user's password is ``DEFAULT_PASSWORD``.
    """

    async def _make(
        role: UserRole,
        tenant_id: UUID | None,
        email: str | None = None,
    ) -> User:
        user = User(
            tenant_id=tenant_id,
            name=f"{role.title()} User",
            email=email or unique_email(role.lower()),
            password_hash=PASSWORD_HASH,
            role=role,
        )
        db.add(user)
        await db.commit()
        return user

    return _make


def headers_for(user: User) -> dict[str, str]:
    """Authorization header carrying a fresh access token for ``user``."""
    token = create_access_token(user.id, user.tenant_id, str(user.role))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_for() -> Callable[[User], dict[str, str]]:
    """Return the helper that builds an Authorization header for a user."""
    return headers_for


@pytest.fixture
async def tenant(make_tenant) -> Tenant:
    return await make_tenant()


@pytest.fixture
async def owner(make_user, tenant: Tenant) -> User:
    return await make_user(UserRole.OWNER, tenant.id)


@pytest.fixture
async def manager(make_user, tenant: Tenant) -> User:
    return await make_user(UserRole.MANAGER, tenant.id)


@pytest.fixture
async def super_admin(make_user) -> User:
    return await make_user(UserRole.SUPER_ADMIN, None)


@pytest.fixture
def owner_headers(owner: User) -> dict[str, str]:
    return headers_for(owner)


@pytest.fixture
def manager_headers(manager: User) -> dict[str, str]:
    return headers_for(manager)


@pytest.fixture
def admin_headers(super_admin: User) -> dict[str, str]:
    return headers_for(super_admin)


# ============================================================
# Store and Menu Fixtures
# ============================================================


@pytest.fixture
def make_store(db: AsyncSession) -> Callable[..., Awaitable[Store]]:
    async def _make(tenant_id: UUID, **overrides: Any) -> Store:
        data = StoreCreateFactory.build()
        fields = data.model_dump(exclude={"tenant_id"}) | overrides
        store = Store(tenant_id=tenant_id, **fields)
        db.add(store)
        await db.commit()
        return store

    return _make


@pytest.fixture
async def store(make_store, tenant: Tenant) -> Store:
    """The demo store from the seed data."""
    return await make_store(tenant.id, name="Kafe Nusantara", slug="kafe-nusantara")


@pytest.fixture
async def category(db: AsyncSession, store: Store) -> Category:
    category = Category(store_id=store.id, name="Makanan", slug="makanan", sort_order=1)
    db.add(category)
    await db.commit()
    return category


@pytest.fixture
def make_product(db: AsyncSession) -> Callable[..., Awaitable[Product]]:
    async def _make(
        category: Category,
        name: str,
        price: str = "15000",
        **overrides: Any,
    ) -> Product:
        product = Product(
            store_id=category.store_id,
            category_id=category.id,
            name=name,
            slug=overrides.pop("slug", name.lower().replace(" ", "-")),
            price=Decimal(price),
            **overrides,
        )
        db.add(product)
        await db.commit()
        return product

    return _make


@pytest.fixture
async def product(make_product, category: Category) -> Product:
    return await make_product(category, "Nasi Goreng", "25000")


@pytest.fixture
async def table(db: AsyncSession, store: Store) -> DiningTable:
    table = DiningTable(store_id=store.id, number=5, label="Meja 5")
    db.add(table)
    await db.commit()
    return table


# ============================================================
# Second tenant, for isolation checks
# ============================================================


@pytest.fixture
async def other_tenant(make_tenant) -> Tenant:
    return await make_tenant()


@pytest.fixture
async def other_owner(make_user, other_tenant: Tenant) -> User:
    return await make_user(UserRole.OWNER, other_tenant.id)


@pytest.fixture
def other_owner_headers(other_owner: User) -> dict[str, str]:
    return headers_for(other_owner)


@pytest.fixture
async def other_store(make_store, other_tenant: Tenant) -> Store:
    return await make_store(other_tenant.id)
