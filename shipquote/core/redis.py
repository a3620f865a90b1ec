import logging
from typing import Optional
from redis.asyncio import Redis
from shipquote.core.config import settings

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Redis:
    global redis
    url = settings.REDIS_URL
    if not url:
        raise RuntimeError("REDIS_URL is not configured")
    try:
        redis = Redis.from_url(url, decode_responses=False)
        await redis.ping()
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        redis = None
        raise

async def close_redis():
    global redis
    if redis:
        await redis.aclose()
        redis = None

def get_redis() -> Optional[Redis]:
    """Return the shared client, or None when caching is unavailable."""
    return redis
