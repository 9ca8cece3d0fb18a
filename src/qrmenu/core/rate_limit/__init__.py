"""Rate limiting with Redis sliding window algorithm."""

from qrmenu.core.rate_limit.backend import (
    RateLimitResult,
    SlidingWindowRateLimiter,
    rate_limiter,
)
from qrmenu.core.rate_limit.decorators import rate_limit


__all__ = [
    "RateLimitResult",
    "SlidingWindowRateLimiter",
    "rate_limit",
    "rate_limiter",
]
