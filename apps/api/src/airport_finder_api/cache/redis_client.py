"""Redis connection pool backing the persistent cache tier."""

from __future__ import annotations

import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)


async def init_redis(url: str) -> redis.Redis | None:
    """Create a Redis connection pool, or return *None* when *url* is empty."""
    if not url:
        logger.info("Redis URL not configured, persistent cache tier disabled")
        return None
    pool = redis.from_url(url, decode_responses=True)
    logger.info("Redis pool initialised: %s", url)
    return pool


async def close_redis(pool: redis.Redis | None) -> None:
    """Gracefully close the Redis pool."""
    if pool is not None:
        await pool.aclose()
        logger.info("Redis pool closed")
