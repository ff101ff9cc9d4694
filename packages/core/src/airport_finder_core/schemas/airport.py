"""Domain airport record and server snapshot schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AirportRecord(BaseModel):
    """UI-ready airport entry.

    Serialized with camelCase keys (``iataCode``, ``countryCode``...) so the
    internal API and the client snapshot share one wire shape.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )

    name: str
    city: str
    country: str
    iata_code: str
    icao_code: str | None = None
    country_code: str | None = None
    latitude: str | None = None
    longitude: str | None = None
    timezone: str | None = None
    phone_number: str | None = None
    gmt: str | None = None
    geoname_id: str | None = None


class AirportSnapshot(BaseModel):
    """A complete airport list as loaded by the server, stamped at load time."""

    model_config = ConfigDict(frozen=True)

    airports: tuple[AirportRecord, ...] = Field(default_factory=tuple)
    total: int = Field(default=0, ge=0)
    timestamp: float
