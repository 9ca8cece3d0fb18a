"""Redis connection management."""

from qrmenu.core.cache.redis import close_redis_pool, ping, redis_client


__all__ = [
    "close_redis_pool",
    "ping",
    "redis_client",
]
