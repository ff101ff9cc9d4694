"""Bundled sample airport data used when the provider cannot be reached.

Contains a single airport in the provider's wire format. Real data must be
obtained with an Aviationstack API key.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from airport_finder_core.mapper import response_to_domain
from airport_finder_core.schemas import AirportSnapshot, ProviderResponse

if TYPE_CHECKING:
    from collections.abc import Callable

SAMPLE_PROVIDER_RESPONSE: dict = {
    "pagination": {"offset": 0, "limit": 1, "count": 1, "total": 1},
    "data": [
        {
            "id": "1",
            "gmt": "-10",
            "airport_id": "1",
            "iata_code": "AAA",
            "city_iata_code": "AAA",
            "icao_code": "NTGA",
            "country_iso2": "PF",
            "geoname_id": "6947726",
            "latitude": "-17.05",
            "longitude": "-145.41667",
            "airport_name": "Anaa",
            "country_name": "French Polynesia",
            "phone_number": None,
            "timezone": "Pacific/Tahiti",
        },
    ],
}


class SampleDataProvider:
    """Builds an :class:`AirportSnapshot` from the bundled provider payload."""

    def __init__(
        self,
        payload: dict | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._payload = SAMPLE_PROVIDER_RESPONSE if payload is None else payload
        self._clock = clock

    def load(self) -> AirportSnapshot:
        response = ProviderResponse.model_validate(self._payload)
        return AirportSnapshot(
            airports=tuple(response_to_domain(response)),
            total=response.pagination.total,
            timestamp=self._clock(),
        )
