"""
Redis client - backing store for server-side sessions.
Single shared client; redis-py manages the connection pool.
"""

from redis.asyncio import Redis

from todo_app.config import get_settings

settings = get_settings()

_redis: Redis | None = None


async def get_redis() -> Redis:
    """Get the shared Redis client, creating it on first use."""
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def close_redis() -> None:
    """Close the shared client on application shutdown."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
