"""API response schemas."""

from .airports import AirportListResponse
from .common import ErrorResponse, PaginatedResponse

__all__ = ["AirportListResponse", "ErrorResponse", "PaginatedResponse"]
