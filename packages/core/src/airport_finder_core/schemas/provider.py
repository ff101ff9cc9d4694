"""Aviationstack ``/v1/airports`` wire schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProviderAirport(BaseModel):
    """One entry of the provider's ``data`` array."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str | None = None
    airport_id: str | None = None
    airport_name: str
    iata_code: str
    city_iata_code: str
    icao_code: str | None = None
    country_iso2: str | None = None
    country_name: str | None = None
    geoname_id: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    timezone: str | None = None
    phone_number: str | None = None
    gmt: str | None = None


class ProviderPagination(BaseModel):
    """Pagination block returned alongside every page."""

    model_config = ConfigDict(extra="ignore")

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)
    count: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class ProviderResponse(BaseModel):
    """Full response body for a single page."""

    model_config = ConfigDict(extra="ignore")

    pagination: ProviderPagination
    data: list[ProviderAirport] = Field(default_factory=list)
