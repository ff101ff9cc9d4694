"""Persistent cache tier."""

from .persistent import PersistentAirportCache, PersistentRead
from .redis_client import close_redis, init_redis

__all__ = ["PersistentAirportCache", "PersistentRead", "close_redis", "init_redis"]
