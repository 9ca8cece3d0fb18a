"""Tests for product image storage."""

import io
from pathlib import Path

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from qrmenu.core.errors import ValidationError
from qrmenu.core.storage import uploads
from qrmenu.core.storage.uploads import (
    delete_stored_image,
    save_product_image,
    validate_image,
)


MB = 1024 * 1024


@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(uploads.settings, "upload_dir", str(tmp_path))
    return tmp_path


def image_upload(content: bytes, content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename="nasi-goreng.png",
        headers=Headers({"content-type": content_type}),
    )


class TestValidateImage:
    @pytest.mark.parametrize(
        ("content_type", "extension"),
        [
            ("image/jpeg", ".jpg"),
            ("image/png", ".png"),
            ("image/webp", ".webp"),
            ("IMAGE/GIF", ".gif"),
        ],
    )
    def test_allowed_types(self, content_type, extension):
        assert validate_image(content_type, 1024) == extension

    @pytest.mark.parametrize("content_type", ["application/pdf", "image/svg+xml", None])
    def test_rejects_other_types(self, content_type):
        with pytest.raises(ValidationError) as exc_info:
            validate_image(content_type, 1024)

        assert exc_info.value.error_code == "invalid_image_type"
        assert exc_info.value.status_code == 400

    def test_rejects_large_files(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_image("image/jpeg", 5 * MB + 1, max_size=5 * MB)

        assert exc_info.value.error_code == "image_too_large"

    def test_accepts_file_at_the_cap(self):
        assert validate_image("image/jpeg", 5 * MB, max_size=5 * MB) == ".jpg"


class TestStoredImages:
    """Tests for save_product_image and delete_stored_image."""

    async def test_save_writes_below_menu_food(self, upload_dir: Path):
        public_path = await save_product_image(image_upload(b"\x89PNG data"))

        assert public_path.startswith("/uploads/menu/food/")
        assert public_path.endswith(".png")
        stored = upload_dir / public_path.removeprefix("/uploads/")
        assert stored.read_bytes() == b"\x89PNG data"

    async def test_save_rejects_wrong_type(self, upload_dir: Path):
        with pytest.raises(ValidationError):
            await save_product_image(image_upload(b"%PDF", "application/pdf"))

        assert not (upload_dir / "menu").exists()

    async def test_delete_removes_file(self, upload_dir: Path):
        public_path = await save_product_image(image_upload(b"img"))

        await delete_stored_image(public_path)

        assert not (upload_dir / public_path.removeprefix("/uploads/")).exists()

    async def test_delete_ignores_missing_and_foreign_paths(
        self, upload_dir: Path, tmp_path_factory: pytest.TempPathFactory
    ):
        outside = tmp_path_factory.mktemp("outside") / "keep.txt"
        outside.write_text("keep")

        await delete_stored_image(None)
        await delete_stored_image("/uploads/menu/food/missing.png")
        await delete_stored_image("https://cdn.example.com/menu/food/a.png")
        await delete_stored_image(f"/uploads/../{outside.parent.name}/keep.txt")

        assert outside.read_text() == "keep"
