"""Unit tests for ProductService image handling with mocked repositories."""

import io
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from starlette.datastructures import Headers

from qrmenu.core.permissions import Principal, UserRole
from qrmenu.core.storage import uploads
from qrmenu.modules.products.schemas import ProductCreate, ProductUpdate
from qrmenu.modules.products.services import ProductService


def duplicate_slug() -> IntegrityError:
    return IntegrityError("INSERT INTO products", {}, Exception("UNIQUE constraint"))


def stored_images(root: Path) -> list[Path]:
    return sorted((root / "menu" / "food").glob("*"))


@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(uploads.settings, "upload_dir", str(tmp_path))
    return tmp_path


@pytest.fixture
def photo() -> UploadFile:
    return UploadFile(
        file=io.BytesIO(b"\x89PNG\r\n\x1a\n" + b"\x00" * 64),
        filename="es-teh.png",
        headers=Headers({"content-type": "image/png"}),
    )


@pytest.fixture
def store():
    return SimpleNamespace(id=uuid4(), tenant_id=uuid4())


@pytest.fixture
def owner(store) -> Principal:
    return Principal(user_id=uuid4(), tenant_id=store.tenant_id, role=UserRole.OWNER)


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.slug_exists = AsyncMock(return_value=False)
    repo.create = AsyncMock(side_effect=duplicate_slug())
    repo.update = AsyncMock(side_effect=duplicate_slug())
    return repo


@pytest.fixture
def service(repo, store) -> ProductService:
    categories = MagicMock()
    categories.get_by_id = AsyncMock(return_value=SimpleNamespace(store_id=store.id))
    stores = MagicMock()
    stores.get_by_id = AsyncMock(return_value=store)
    return ProductService(repo, categories, stores, MagicMock())


class TestImageCleanup:
    async def test_create_failure_removes_new_image(
        self, service: ProductService, store, owner, photo, upload_dir: Path
    ):
        data = ProductCreate(
            name="Es Teh Manis", price=Decimal("8000"), category_id=uuid4()
        )

        with pytest.raises(IntegrityError):
            await service.create_product(store.id, data, owner, image=photo)

        assert stored_images(upload_dir) == []

    async def test_update_failure_keeps_old_image(
        self, service: ProductService, repo, store, owner, photo, upload_dir: Path
    ):
        """A failed update removes the replacement and leaves the old image."""
        old = upload_dir / "menu" / "food" / "old.png"
        old.parent.mkdir(parents=True)
        old.write_bytes(b"old")
        product = SimpleNamespace(
            id=uuid4(),
            store_id=store.id,
            slug="es-teh-manis",
            image="/uploads/menu/food/old.png",
            is_available=True,
        )
        repo.get_by_id = AsyncMock(return_value=product)

        with pytest.raises(IntegrityError):
            await service.update_product(
                product.id, ProductUpdate(name="Es Teh"), owner, image=photo
            )

        assert stored_images(upload_dir) == [old]
