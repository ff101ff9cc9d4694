"""FastAPI dependency injection providers."""

from __future__ import annotations

from fastapi import Request  # noqa: TC002

from airport_finder_api.services import AirportCache  # noqa: TC001


def get_airport_cache(request: Request) -> AirportCache:
    """Return the coordinator attached to the running application."""
    return request.app.state.airport_cache
