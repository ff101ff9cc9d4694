"""Airport directory router."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import JSONResponse

from airport_finder_api.dependencies import get_airport_cache
from airport_finder_api.schemas import (
    AirportListResponse,
    ErrorResponse,
    PaginatedResponse,
)
from airport_finder_api.services import AirportCache
from airport_finder_core.filtering import filter_airports, find_airport
from airport_finder_core.schemas import AirportRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/airports", tags=["airports"])

AIRPORT_NOT_FOUND_MESSAGE = "Aeropuerto no encontrado"

CacheDep = Annotated[AirportCache, Depends(get_airport_cache)]

_ERROR_RESPONSES: dict[int | str, dict] = {500: {"model": ErrorResponse}}


@router.get("", response_model=AirportListResponse, responses=_ERROR_RESPONSES)
async def list_airports(cache: CacheDep) -> AirportListResponse:
    """Return every cached airport with the provider-reported total."""
    snapshot = await cache.get_airports()
    return AirportListResponse(airports=list(snapshot.airports), total=snapshot.total)


@router.get(
    "/search",
    response_model=PaginatedResponse[AirportRecord],
    responses=_ERROR_RESPONSES,
)
async def search_airports(
    cache: CacheDep,
    q: Annotated[str, Query(max_length=100)] = "",
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1, le=100)] = 20,
) -> PaginatedResponse[AirportRecord]:
    snapshot = await cache.get_airports()
    matches = filter_airports(snapshot.airports, q)
    start = (page - 1) * page_size
    total = len(matches) if q.strip() else snapshot.total
    return PaginatedResponse[AirportRecord](
        items=list(matches[start : start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{iata_code}",
    response_model=AirportRecord,
    responses={404: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def get_airport(
    cache: CacheDep,
    iata_code: Annotated[str, Path(min_length=1, max_length=10)],
) -> AirportRecord | JSONResponse:
    snapshot = await cache.get_airports()
    airport = find_airport(snapshot.airports, iata_code)
    if airport is None:
        logger.debug("Airport %s not found among %d", iata_code, len(snapshot.airports))
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error=AIRPORT_NOT_FOUND_MESSAGE).model_dump(),
        )
    return airport
