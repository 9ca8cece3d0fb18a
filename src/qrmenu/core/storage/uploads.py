"""Product image storage on the local filesystem.

Images are written below ``settings.upload_dir`` and served by the
StaticFiles mount at ``/uploads``.
"""

import uuid
from pathlib import Path

import structlog
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from qrmenu.config import settings
from qrmenu.core.constants import (
    ALLOWED_IMAGE_TYPES,
    PRODUCT_IMAGE_SUBDIR,
    UPLOADS_URL_PREFIX,
)
from qrmenu.core.errors import ValidationError


logger = structlog.get_logger()


def upload_root() -> Path:
    return Path(settings.upload_dir)


def validate_image(
    content_type: str | None,
    size: int,
    max_size: int | None = None,
) -> str:
    """Check an uploaded image's type and size.

    Args:
        content_type: MIME type reported by the client
        size: Size in bytes
        max_size: Size cap, defaults to ``settings.max_upload_size``

    Returns:
        File extension to store the image under

    Raises:
        ValidationError: If the type is not an allowed image or the file is too large
    """
    max_size = max_size or settings.max_upload_size
    extension = ALLOWED_IMAGE_TYPES.get((content_type or "").lower())
    if extension is None:
        raise ValidationError(
            "Only JPEG, PNG, WebP and GIF images are allowed",
            errors=[{"field": "image", "message": f"Unsupported type {content_type}"}],
            error_code="invalid_image_type",
        )
    if size > max_size:
        raise ValidationError(
            f"Image must be at most {max_size // (1024 * 1024)}MB",
            errors=[{"field": "image", "message": "File too large"}],
            error_code="image_too_large",
        )
    return extension


async def save_product_image(upload: UploadFile) -> str:
    """Validate and store a product image.

    Args:
        upload: The multipart file field

    Returns:
        Public URL path of the stored image, e.g. ``/uploads/menu/food/<id>.jpg``
    """
    # Read one byte past the cap so oversized files are detected without
    # buffering them completely
    data = await upload.read(settings.max_upload_size + 1)
    extension = validate_image(upload.content_type, len(data))

    relative = f"{PRODUCT_IMAGE_SUBDIR}/{uuid.uuid4().hex}{extension}"
    target = upload_root() / relative

    def _write() -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    await run_in_threadpool(_write)
    logger.info("image_stored", path=relative, size=len(data))
    return f"{UPLOADS_URL_PREFIX}/{relative}"


async def delete_stored_image(public_path: str | None) -> None:
    """Remove a previously stored image. Missing files are ignored."""
    if not public_path or not public_path.startswith(f"{UPLOADS_URL_PREFIX}/"):
        return

    root = upload_root().resolve()
    target = (root / public_path.removeprefix(f"{UPLOADS_URL_PREFIX}/")).resolve()
    if root not in target.parents:
        return

    await run_in_threadpool(target.unlink, missing_ok=True)
    logger.info("image_deleted", path=public_path)
