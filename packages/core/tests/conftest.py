"""Shared fixtures for core tests."""

from __future__ import annotations

import pytest

from airport_finder_core.schemas import AirportRecord


@pytest.fixture
def airports() -> list[AirportRecord]:
    return [
        AirportRecord(
            name="El Prat", city="Barcelona", country="Spain", iata_code="BCN"
        ),
        AirportRecord(
            name="Adolfo Suárez Madrid-Barajas",
            city="Madrid",
            country="Spain",
            iata_code="MAD",
        ),
        AirportRecord(
            name="Benito Juárez International",
            city="Ciudad de México",
            country="México",
            iata_code="MEX",
        ),
        AirportRecord(
            name="Heathrow", city="London", country="United Kingdom", iata_code="LHR"
        ),
    ]
