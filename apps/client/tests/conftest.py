"""Shared fixtures and fakes for client tests."""

from __future__ import annotations

import asyncio

import pytest

from airport_finder_client.storage import MemoryKeyValueStore
from airport_finder_client.store import AirportsStore
from airport_finder_core.schemas import AirportRecord

DAY = 24 * 60 * 60


def _airports() -> list[AirportRecord]:
    return [
        AirportRecord(name="El Prat", city="Barcelona", country="Spain", iata_code="BCN"),
        AirportRecord(name="Barajas", city="Madrid", country="Spain", iata_code="MAD"),
        AirportRecord(name="Orly", city="Paris", country="France", iata_code="ORY"),
        AirportRecord(name="Charles de Gaulle", city="Paris", country="France", iata_code="CDG"),
        AirportRecord(name="Heathrow", city="London", country="United Kingdom", iata_code="LHR"),
    ]


class FakeApi:
    """Stands in for :class:`AirportsApiClient`."""

    def __init__(self) -> None:
        self.airports = _airports()
        self.total = 6711
        self.calls = 0
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def fetch_all_airports(self) -> tuple[list[AirportRecord], int]:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.airports), self.total

    async def close(self) -> None:
        pass


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def day() -> int:
    return DAY


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_store(api, storage, clock):
    """Factory fixture so tests can rebuild a store over the same storage."""

    def _make(**overrides) -> AirportsStore:
        kwargs = {"clock": clock, "cache_ttl_seconds": DAY, "history_limit": 10}
        kwargs.update(overrides)
        return AirportsStore(api, storage, **kwargs)

    return _make
