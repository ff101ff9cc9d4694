"""Convert Aviationstack payloads into :class:`AirportRecord` objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from airport_finder_core.schemas import AirportRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from airport_finder_core.schemas import ProviderAirport, ProviderResponse

UNKNOWN_COUNTRY = "Unknown"


def to_domain(payloads: Iterable[ProviderAirport]) -> list[AirportRecord]:
    """Rename provider fields to the domain model, keeping input order.

    Only ``country_name`` is defaulted; every other optional field passes
    through as ``None``.
    """
    return [
        AirportRecord(
            name=p.airport_name,
            city=p.city_iata_code,
            country=p.country_name or UNKNOWN_COUNTRY,
            iata_code=p.iata_code,
            icao_code=p.icao_code,
            country_code=p.country_iso2,
            latitude=p.latitude,
            longitude=p.longitude,
            timezone=p.timezone,
            phone_number=p.phone_number,
            gmt=p.gmt,
            geoname_id=p.geoname_id,
        )
        for p in payloads
    ]


def response_to_domain(response: ProviderResponse) -> list[AirportRecord]:
    return to_domain(response.data)
