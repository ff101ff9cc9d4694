"""Cache key builders for consistent namespacing."""

from __future__ import annotations


def airports_snapshot_key(source: str = "aviationstack") -> str:
    """Build cache key for the full airport snapshot of a provider."""
    return f"airports:snapshot:{source}"
