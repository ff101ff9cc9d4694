"""API routers."""

from . import airports

__all__ = ["airports"]
