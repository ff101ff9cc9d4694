"""Process-wide airport cache with in-flight load deduplication.

Lookup precedence is memory -> persistent tier -> origin (Aviationstack),
with the bundled sample data as a last resort outside production.
"""

from __future__ import annotations

import asyncio
import logging
import time
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from airport_finder_core.errors import (
    AirportFinderError,
    ConfigurationError,
    UnknownError,
)
from airport_finder_core.mapper import to_domain
from airport_finder_core.schemas import AirportSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from airport_finder_api.cache import PersistentAirportCache
    from airport_finder_api.sample_data import SampleDataProvider
    from airport_finder_api.upstream import UpstreamPage

logger = logging.getLogger(__name__)


class AirportSource(Protocol):
    async def fetch_all(
        self, api_key: str, *, page_size: int, max_pages: int = 1
    ) -> UpstreamPage: ...


class CacheState(StrEnum):
    """Lifecycle of the in-memory tier."""

    EMPTY = "empty"
    LOADING = "loading"
    POPULATED = "populated"


class AirportCache:
    """Serves the airport snapshot, loading it at most once at a time."""

    def __init__(
        self,
        *,
        upstream: AirportSource,
        api_key: str = "",
        persistent: PersistentAirportCache | None = None,
        sample_data: SampleDataProvider | None = None,
        allow_sample_fallback: bool = False,
        page_size: int = 10_000,
        max_pages: int = 1,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._upstream = upstream
        self._api_key = api_key
        self._persistent = persistent
        self._sample_data = sample_data
        self._allow_sample_fallback = allow_sample_fallback
        self._page_size = page_size
        self._max_pages = max_pages
        self._clock = clock

        self._snapshot: AirportSnapshot | None = None
        self._inflight: asyncio.Task[AirportSnapshot] | None = None
        self._revalidation: asyncio.Task[None] | None = None
        # Bumped by invalidate(); background work started earlier must not
        # repopulate memory.
        self._generation = 0

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def state(self) -> CacheState:
        if self._snapshot is not None:
            return CacheState.POPULATED
        if self._inflight is not None:
            return CacheState.LOADING
        return CacheState.EMPTY

    @property
    def snapshot(self) -> AirportSnapshot | None:
        return self._snapshot

    async def get_airports(self) -> AirportSnapshot:
        """Return the cached snapshot, loading it first if necessary.

        Concurrent callers share a single load; a failed load leaves the
        cache empty so the next call starts over.
        """
        if self._snapshot is not None:
            return self._snapshot

        if self._inflight is None:
            task = asyncio.create_task(self._load(), name="airport-cache-load")
            task.add_done_callback(self._on_load_done)
            self._inflight = task

        # Shield so one cancelled caller does not cancel the shared load.
        return await asyncio.shield(self._inflight)

    def invalidate(self) -> None:
        """Drop the in-memory snapshot and forget any in-flight load."""
        self._snapshot = None
        self._inflight = None
        self._generation += 1
        logger.info("Airport cache invalidated")

    async def aclose(self) -> None:
        """Cancel any background revalidation still running."""
        task = self._revalidation
        self._revalidation = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _on_load_done(self, task: asyncio.Task[AirportSnapshot]) -> None:
        if self._inflight is not task:
            # Invalidated while loading: the result must not repopulate memory.
            return
        self._inflight = None
        if task.cancelled() or task.exception() is not None:
            return
        self._snapshot = task.result()

    async def _load(self) -> AirportSnapshot:
        cached = await self._read_persistent()
        if cached is not None:
            return cached

        try:
            snapshot = await self._load_from_origin()
        except Exception as exc:
            fallback = self._load_sample_data()
            if fallback is not None:
                logger.warning(
                    "Falling back to bundled sample data (%d airports): %s",
                    len(fallback.airports),
                    exc,
                )
                return fallback
            logger.error("Airport load failed with no fallback available: %s", exc)
            if isinstance(exc, AirportFinderError):
                raise
            raise UnknownError.wrap(exc) from exc

        await self._write_persistent(snapshot)
        return snapshot

    async def _load_from_origin(self) -> AirportSnapshot:
        if not self._api_key:
            msg = "AVIATIONSTACK_API_KEY is not configured; an API key is required in production."
            raise ConfigurationError(msg)

        page = await self._upstream.fetch_all(
            self._api_key,
            page_size=self._page_size,
            max_pages=self._max_pages,
        )
        airports = to_domain(page.records)
        logger.info("Loaded %d airports from Aviationstack", len(airports))
        return AirportSnapshot(
            airports=tuple(airports),
            total=page.total,
            timestamp=self._clock(),
        )

    def _load_sample_data(self) -> AirportSnapshot | None:
        if not self._allow_sample_fallback or self._sample_data is None:
            return None
        try:
            return self._sample_data.load()
        except Exception:
            logger.exception("Failed to load bundled sample data")
            return None

    # ------------------------------------------------------------------
    # Persistent tier
    # ------------------------------------------------------------------

    async def _read_persistent(self) -> AirportSnapshot | None:
        if self._persistent is None:
            return None
        try:
            snapshot, freshness = await self._persistent.read()
        except Exception:
            logger.exception("Persistent airport cache read failed, treating as miss")
            return None

        if snapshot is None:
            return None
        if freshness == "stale":
            self._schedule_revalidation()
        logger.info(
            "Serving %d airports from persistent cache (%s)",
            len(snapshot.airports),
            freshness,
        )
        return snapshot

    async def _write_persistent(self, snapshot: AirportSnapshot) -> None:
        if self._persistent is None:
            return
        try:
            await self._persistent.write(snapshot)
        except Exception:
            logger.exception("Persistent airport cache write failed")

    def _schedule_revalidation(self) -> None:
        if self._revalidation is not None and not self._revalidation.done():
            return
        self._revalidation = asyncio.create_task(
            self._revalidate(), name="airport-cache-revalidate"
        )

    async def _revalidate(self) -> None:
        generation = self._generation
        try:
            snapshot = await self._load_from_origin()
        except Exception as exc:
            logger.warning("Background revalidation failed, keeping stale data: %s", exc)
            return
        await self._write_persistent(snapshot)
        if self._generation == generation and self._inflight is None:
            self._snapshot = snapshot
        logger.info("Revalidated airport cache with %d airports", len(snapshot.airports))
