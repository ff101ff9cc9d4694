"""Core schemas for Airport Finder."""

from .airport import AirportRecord, AirportSnapshot
from .provider import ProviderAirport, ProviderPagination, ProviderResponse

__all__ = [
    "AirportRecord",
    "AirportSnapshot",
    "ProviderAirport",
    "ProviderPagination",
    "ProviderResponse",
]
