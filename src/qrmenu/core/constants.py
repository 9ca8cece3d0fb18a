"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# Slugs
MAX_SLUG_LENGTH = 63
SLUG_PATTERN = r"^[a-z0-9-]+$"

# Hash lengths
SHA256_HEX_LENGTH = 64

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_PHONE_LENGTH = 32
MAX_LABEL_LENGTH = 100
MAX_IMAGE_PATH_LENGTH = 512

# Password requirements
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Token settings
ACCESS_TOKEN_JTI_LENGTH = 32
REFRESH_TOKEN_BYTES = 32

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Orders
ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_SLUG_CHARS = 4
ORDER_NUMBER_DIGITS = 5

# Reports
TOP_PRODUCTS_LIMIT = 10
AFFINITY_PAIRS_LIMIT = 20

# Uploads
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
PRODUCT_IMAGE_SUBDIR = "menu/food"
UPLOADS_URL_PREFIX = "/uploads"

# Subscription defaults
DEFAULT_PLAN = "FREE"
DEFAULT_MAX_STORES = 1
