"""Redis sliding window rate limiter implementation.

Uses Redis sorted sets (ZSET) for sliding window rate limiting, which
avoids bursts at fixed window boundaries.
"""

import time
from dataclasses import dataclass

import structlog
from redis.exceptions import RedisError

from qrmenu.core.cache.redis import redis_client


logger = structlog.get_logger()


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_time: int
    retry_after: int | None = None


class SlidingWindowRateLimiter:
    """Redis-based sliding window rate limiter.

    Each request is stored in a sorted set with its timestamp as the
    score, so old entries can be trimmed and the rest counted.
    If Redis cannot be reached the limiter lets the request through.
    """

    def __init__(self, prefix: str = "ratelimit") -> None:
        self.prefix = prefix

    def _build_key(self, identifier: str, endpoint: str | None = None) -> str:
        """Build a Redis key for the rate limit.

        Args:
            identifier: User ID or IP address
            endpoint: Optional endpoint path for per-route limits

        Returns:
            Redis key string
        """
        if endpoint:
            endpoint_key = endpoint.replace("/", "_").strip("_")
            return f"{self.prefix}:{identifier}:{endpoint_key}"
        return f"{self.prefix}:{identifier}"

    async def is_allowed(
        self,
        identifier: str,
        limit: int,
        window: int,
        endpoint: str | None = None,
    ) -> RateLimitResult:
        """Check if a request is allowed under the rate limit.

        Args:
            identifier: User ID or IP address to rate limit
            limit: Maximum number of requests allowed in the window
            window: Time window in seconds
            endpoint: Optional endpoint for per-route limits

        Returns:
            RateLimitResult with allowed status and metadata
        """
        key = self._build_key(identifier, endpoint)
        now = time.time()
        window_start = now - window
        reset_time = int(now + window)

        try:
            async with (
                redis_client() as client,
                client.pipeline(transaction=True) as pipe,
            ):
                pipe.zremrangebyscore(key, 0, window_start)
                pipe.zadd(key, {str(now): now})
                pipe.zcard(key)
                pipe.expire(key, window)

                results = await pipe.execute()
                count = results[2]
        except (RedisError, OSError) as exc:
            logger.warning(
                "rate_limit_backend_unavailable",
                key=key,
                error=str(exc),
            )
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=limit,
                reset_time=reset_time,
            )

        allowed = count <= limit
        return RateLimitResult(
            allowed=allowed,
            limit=limit,
            remaining=max(0, limit - count),
            reset_time=reset_time,
            retry_after=window if not allowed else None,
        )

    async def reset(self, identifier: str, endpoint: str | None = None) -> bool:
        """Reset rate limit for an identifier.

        Returns:
            True if key was deleted
        """
        key = self._build_key(identifier, endpoint)
        async with redis_client() as client:
            result = await client.delete(key)
            return result > 0


# Global rate limiter instance
rate_limiter = SlidingWindowRateLimiter()
