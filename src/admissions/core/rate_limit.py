"""
Rate Limiting Module

Provides rate limiting for API endpoints using Redis as the backend.
Falls back to in-memory storage if Redis is unavailable.

Applied to:
- Login and registration (prevents brute force and account spam)
- Officer verification decisions (prevents mass operations)
"""

import logging
import time
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Request

from admissions.core import redis as redis_module
from admissions.core.errors import RateLimitExceededError

logger = logging.getLogger(__name__)

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}


async def _check_rate_limit_redis(
    client,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using Redis.

    Uses a sliding window with a Redis sorted set per key.

    Args:
        client: Redis client
        key: Rate limit key (e.g., "login:127.0.0.1")
        limit: Maximum requests allowed
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _check_rate_limit_memory(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using in-memory storage.

    Only limits within a single process.
    """
    now = time.time()
    window_start = now - window_seconds

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]
    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    return True


async def check_rate_limit(
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check if a request is within rate limits.

    Tries the shared Redis client first, falls back to in-memory storage.

    Args:
        key: Unique key for this rate limit
        limit: Maximum requests allowed in the window
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    client = redis_module.get_redis()

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


async def enforce_rate_limit(key: str, limit: int, window_seconds: int) -> None:
    """
    Raise when the caller identified by ``key`` is over its limit.

    Raises:
        RateLimitExceededError: When rate limit is exceeded (HTTP 429)
    """
    allowed = await check_rate_limit(key, limit, window_seconds)
    if not allowed:
        logger.warning(f"Rate limit exceeded for {key}: {limit}/{window_seconds}s")
        raise RateLimitExceededError(limit, window_seconds)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit(
    action: str,
    limit: int = 10,
    window_seconds: int = 60,
) -> Callable[[Request], Coroutine[Any, Any, None]]:
    """
    Build a per-IP rate limiting dependency for public endpoints.

    Usage:
        @router.post("/login", dependencies=[Depends(rate_limit("login", 10, 60))])
        async def login(...):
            ...
    """

    async def dependency(request: Request) -> None:
        await enforce_rate_limit(f"rate_limit:{action}:{client_ip(request)}", limit, window_seconds)

    return dependency


__all__ = [
    "check_rate_limit",
    "client_ip",
    "enforce_rate_limit",
    "rate_limit",
]
