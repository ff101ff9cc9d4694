"""Client-side airport store with a locally persisted, expiring snapshot.

Every change replaces the whole :class:`AirportsState`; changes that touch a
persisted field are written to the key-value store right away.
"""

from __future__ import annotations

import logging
import math
import time
from typing import TYPE_CHECKING, Protocol

from pydantic import ValidationError

from airport_finder_client.state import (
    PERSISTED_FIELDS,
    AirportsState,
    PersistedSnapshot,
    SearchHistoryEntry,
)
from airport_finder_core.filtering import filter_airports, find_airport

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from airport_finder_client.storage import KeyValueStore
    from airport_finder_core.schemas import AirportRecord

logger = logging.getLogger(__name__)

STORAGE_KEY = "airports-storage"
UNKNOWN_ERROR_MESSAGE = "Error desconocido"


class AirportsSource(Protocol):
    async def fetch_all_airports(self) -> tuple[list[AirportRecord], int]: ...


class AirportsStore:
    """Owns the full airport list, the filtered view and the search history."""

    def __init__(
        self,
        api: AirportsSource,
        storage: KeyValueStore,
        *,
        clock: Callable[[], float] = time.time,
        cache_ttl_seconds: int = 24 * 60 * 60,
        history_limit: int = 10,
    ) -> None:
        self._api = api
        self._storage = storage
        self._clock = clock
        self.cache_ttl_seconds = cache_ttl_seconds
        self.history_limit = history_limit
        self._state = self._hydrate()

    @property
    def state(self) -> AirportsState:
        return self._state

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def is_cache_valid(self) -> bool:
        state = self._state
        if not state.all_airports or state.airports_cache_timestamp is None:
            return False
        return self._clock() - state.airports_cache_timestamp < self.cache_ttl_seconds

    async def load_all_airports(self) -> None:
        """Make sure ``all_airports`` is populated, fetching only when needed.

        Errors are recorded in ``state.error``; this method never raises.
        """
        state = self._state
        if self.is_cache_valid():
            self._set(filtered_airports=self._filter(state.all_airports, state.search_query))
            return

        if state.all_airports or state.airports_cache_timestamp is not None:
            logger.info("Airport cache expired, purging %d airports", len(state.all_airports))
            self._set(all_airports=(), filtered_airports=(), airports_cache_timestamp=None)

        self._set(is_loading=True, error=None)
        try:
            airports, total = await self._api.fetch_all_airports()
        except Exception as exc:
            logger.error("Error loading airports: %s", exc)
            self._set(is_loading=False, error=str(exc) or UNKNOWN_ERROR_MESSAGE)
            return

        all_airports = tuple(airports)
        self._set(
            all_airports=all_airports,
            filtered_airports=self._filter(all_airports, self._state.search_query),
            total_airports=total,
            airports_cache_timestamp=self._clock(),
            is_loading=False,
            error=None,
        )
        logger.info("Loaded %d airports (total=%d)", len(all_airports), total)

    def clear_cache(self) -> None:
        """Forget the airport snapshot, keeping the search history."""
        self._set(all_airports=(), filtered_airports=(), airports_cache_timestamp=None)

    def clear_error(self) -> None:
        self._set(error=None)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def set_search_query(self, query: str) -> None:
        self._set(
            search_query=query,
            filtered_airports=self._filter(self._state.all_airports, query),
        )

    def add_to_search_history(self, query: str) -> None:
        """Record *query* as the most recent search, case-insensitively unique."""
        trimmed = query.strip()
        if not trimmed:
            return

        key = trimmed.casefold()
        others = [
            entry
            for entry in self._state.search_history
            if entry.query.strip().casefold() != key
        ]
        entry = SearchHistoryEntry(query=trimmed, timestamp=self._clock())
        self._set(search_history=tuple([entry, *others][: self.history_limit]))

    def clear_search_history(self) -> None:
        self._set(search_history=())

    def get_airport(self, iata_code: str) -> AirportRecord | None:
        return find_airport(self._state.all_airports, iata_code)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def get_airports_for_page(self, page: int, page_size: int) -> list[AirportRecord]:
        """Return one 1-based page of the filtered view, or of all airports."""
        _check_page_args(page, page_size)
        state = self._state
        source = state.filtered_airports if state.search_query.strip() else state.all_airports
        start = (page - 1) * page_size
        return list(source[start : start + page_size])

    def get_total_pages(self, page_size: int) -> int:
        _check_page_args(1, page_size)
        state = self._state
        if state.search_query.strip():
            return math.ceil(len(state.filtered_airports) / page_size)
        return math.ceil(state.total_airports / page_size)

    # ------------------------------------------------------------------
    # State replacement and persistence
    # ------------------------------------------------------------------

    @staticmethod
    def _filter(
        airports: Sequence[AirportRecord], query: str
    ) -> tuple[AirportRecord, ...]:
        return tuple(filter_airports(airports, query))

    def _set(self, **changes: object) -> None:
        self._state = self._state.model_copy(update=changes)
        if PERSISTED_FIELDS.intersection(changes):
            self._persist()

    def _persist(self) -> None:
        payload = self._state.persisted().model_dump_json(by_alias=True).encode()
        try:
            self._storage.set(STORAGE_KEY, payload)
        except Exception:
            logger.exception("Failed to persist airport snapshot")

    def _hydrate(self) -> AirportsState:
        try:
            raw = self._storage.get(STORAGE_KEY)
        except Exception:
            logger.exception("Failed to read persisted airport snapshot")
            return AirportsState()
        if raw is None:
            return AirportsState()

        try:
            persisted = PersistedSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Ignoring corrupt airport snapshot: %s", exc)
            return AirportsState()

        return AirportsState(
            all_airports=persisted.all_airports,
            filtered_airports=persisted.all_airports,
            total_airports=persisted.total_airports,
            airports_cache_timestamp=persisted.airports_cache_timestamp,
            search_history=persisted.search_history,
        )


def _check_page_args(page: int, page_size: int) -> None:
    if page < 1:
        msg = f"page must be >= 1, got {page}"
        raise ValueError(msg)
    if page_size < 1:
        msg = f"page_size must be >= 1, got {page_size}"
        raise ValueError(msg)
