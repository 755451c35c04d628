# edudesk/core/redis.py
import redis.asyncio as redis

from edudesk.core.config import settings

_redis: redis.Redis | None = None

async def get_redis(url: str | None = None) -> redis.Redis:
    """Shared client for the redis session backend, created on first use."""
    global _redis
    if _redis is None:
        _redis = redis.from_url(url or settings.REDIS_URL, decode_responses=True)
    return _redis

async def close_redis():
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
