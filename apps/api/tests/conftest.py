"""Shared fixtures and fakes for API tests."""

from __future__ import annotations

import asyncio

import pytest

from airport_finder_api.sample_data import SampleDataProvider
from airport_finder_api.services import AirportCache
from airport_finder_api.upstream import UpstreamPage
from airport_finder_core.schemas import ProviderAirport


def provider_airport(iata: str, city: str = "", country: str | None = "Spain") -> ProviderAirport:
    return ProviderAirport(
        airport_name=f"{iata} International",
        iata_code=iata,
        city_iata_code=city or iata,
        country_name=country,
    )


class FakeUpstream:
    """Stands in for :class:`AviationstackClient`; counts calls."""

    def __init__(self, records: list[ProviderAirport] | None = None, total: int | None = None) -> None:
        self.records = records if records is not None else [provider_airport("BCN"), provider_airport("MAD")]
        self.total = len(self.records) if total is None else total
        self.calls = 0
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def fetch_all(self, api_key: str, *, page_size: int, max_pages: int = 1) -> UpstreamPage:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return UpstreamPage(records=list(self.records), total=self.total)


class FakeRedis:
    """In-memory subset of ``redis.asyncio.Redis`` used by the persistent tier."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.expiry: dict[str, int | None] = {}
        self.fail = False

    async def get(self, key: str) -> str | None:
        if self.fail:
            raise ConnectionError("redis unavailable")
        return self.data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        if self.fail:
            raise ConnectionError("redis unavailable")
        self.data[key] = value
        self.expiry[key] = ex

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def make_provider_airport():
    return provider_airport


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_cache(upstream: FakeUpstream, clock: FakeClock):
    """Factory fixture for :class:`AirportCache` wired to fakes."""

    def _make(**overrides) -> AirportCache:
        kwargs = {
            "upstream": upstream,
            "api_key": "test-key",
            "sample_data": SampleDataProvider(clock=clock),
            "allow_sample_fallback": False,
            "clock": clock,
        }
        kwargs.update(overrides)
        return AirportCache(**kwargs)

    return _make
