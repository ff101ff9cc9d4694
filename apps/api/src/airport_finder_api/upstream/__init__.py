"""Upstream airport data provider clients."""

from .aviationstack import AviationstackClient, UpstreamPage

__all__ = ["AviationstackClient", "UpstreamPage"]
