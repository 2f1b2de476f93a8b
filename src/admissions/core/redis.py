"""
Redis Configuration

Shared async Redis client. Used by the rate limiter; the API keeps
working without it outside production.
"""

import logging

from redis.asyncio import Redis, from_url

from admissions.core.config import settings

logger = logging.getLogger(__name__)

# Set by init_redis() during application startup
redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Initialize the Redis connection.

    Call this on application startup.
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await client.ping()
    redis_client = client
    return redis_client


def get_redis() -> Redis | None:
    """Return the shared client, or None when Redis was never connected."""
    return redis_client


def is_redis_available() -> bool:
    return redis_client is not None


async def close_redis() -> None:
    """Close the Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")
