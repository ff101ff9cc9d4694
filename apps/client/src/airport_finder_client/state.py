"""Client state schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from airport_finder_core.schemas import AirportRecord

# Provider-reported dataset size, shown by pagination before the first load.
DEFAULT_TOTAL_AIRPORTS = 6711

PERSISTED_FIELDS = frozenset(
    {"all_airports", "total_airports", "airports_cache_timestamp", "search_history"}
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class SearchHistoryEntry(_CamelModel):
    query: str
    timestamp: float


class AirportsState(_CamelModel):
    """Everything the presentation layer reads from the store.

    ``filtered_airports`` is always ``filter_airports(all_airports, search_query)``
    and is never persisted.
    """

    all_airports: tuple[AirportRecord, ...] = ()
    filtered_airports: tuple[AirportRecord, ...] = ()
    total_airports: int = DEFAULT_TOTAL_AIRPORTS
    airports_cache_timestamp: float | None = None
    search_query: str = ""
    search_history: tuple[SearchHistoryEntry, ...] = ()
    is_loading: bool = False
    error: str | None = None

    def persisted(self) -> PersistedSnapshot:
        return PersistedSnapshot(
            all_airports=self.all_airports,
            total_airports=self.total_airports,
            airports_cache_timestamp=self.airports_cache_timestamp,
            search_history=self.search_history,
        )


class PersistedSnapshot(_CamelModel):
    """The subset of :class:`AirportsState` written to local storage."""

    all_airports: tuple[AirportRecord, ...] = ()
    total_airports: int = DEFAULT_TOTAL_AIRPORTS
    airports_cache_timestamp: float | None = None
    search_history: tuple[SearchHistoryEntry, ...] = ()
