"""Uploaded file storage."""

from qrmenu.core.storage.uploads import (
    delete_stored_image,
    save_product_image,
    upload_root,
    validate_image,
)


__all__ = [
    "delete_stored_image",
    "save_product_image",
    "upload_root",
    "validate_image",
]
