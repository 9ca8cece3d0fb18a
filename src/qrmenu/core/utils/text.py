"""Text processing utilities."""

import re

from qrmenu.core.constants import (
    MAX_SLUG_LENGTH,
    ORDER_NUMBER_DIGITS,
    ORDER_NUMBER_PREFIX,
    ORDER_NUMBER_SLUG_CHARS,
)


TABLE_TOKEN_PATTERN = re.compile(r"^[Tt]?(\d+)$")


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a name.

    Args:
        name: The input string to slugify
        max_length: Maximum length of output slug (default 63)

    Returns:
        URL-safe lowercase slug

    Examples:
        >>> generate_slug("Kafe Nusantara")
        'kafe-nusantara'
        >>> generate_slug("Es Teh  Manis!")
        'es-teh-manis'
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
    slug = re.sub(r"[-\s_]+", "-", slug).strip("-")
    return slug[:max_length]


def parse_table_token(token: str | None) -> int | None:
    """Parse a ``T<number>`` table token from a QR link.

    The leading ``T`` is optional and case-insensitive.

    Examples:
        >>> parse_table_token("T5")
        5
        >>> parse_table_token("t12")
        12
        >>> parse_table_token("bar") is None
        True
    """
    if not token:
        return None
    match = TABLE_TOKEN_PATTERN.match(token.strip())
    if not match:
        return None
    number = int(match.group(1))
    return number if number > 0 else None


def format_order_number(store_slug: str, sequence: int) -> str:
    """Build a human-readable order number.

    Examples:
        >>> format_order_number("kafe-nusantara", 1)
        'ORD-KAFE-00001'
    """
    prefix = store_slug[:ORDER_NUMBER_SLUG_CHARS].upper()
    return f"{ORDER_NUMBER_PREFIX}-{prefix}-{sequence:0{ORDER_NUMBER_DIGITS}d}"
