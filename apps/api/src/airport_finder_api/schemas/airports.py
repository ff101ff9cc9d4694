"""Airport schemas."""

from __future__ import annotations

from pydantic import BaseModel

from airport_finder_core.schemas import AirportRecord


class AirportListResponse(BaseModel):
    """Full airport list as served to clients."""

    airports: list[AirportRecord]
    total: int
