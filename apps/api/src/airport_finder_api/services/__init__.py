"""API service layer."""

from .airport_cache import AirportCache, AirportSource, CacheState

__all__ = ["AirportCache", "AirportSource", "CacheState"]
