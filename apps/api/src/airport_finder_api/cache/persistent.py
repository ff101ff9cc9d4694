"""Persistent airport snapshot tier on top of Redis.

The snapshot is stored inside a stale-while-revalidate envelope: it is
*fresh* for ``revalidate_seconds`` after the write, then *stale* (usable but
due for a reload) for ``stale_seconds`` more, after which Redis expires it.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Literal, NamedTuple, TypedDict

from airport_finder_core.schemas import AirportSnapshot

from .cache_keys import airports_snapshot_key

if TYPE_CHECKING:
    from collections.abc import Callable

    import redis.asyncio as redis

Freshness = Literal["fresh", "stale", "miss"]


class SnapshotEnvelope(TypedDict):
    """Wrapper stored in Redis containing data + freshness timestamps."""

    data: dict
    fresh_until: float
    stale_until: float


class PersistentRead(NamedTuple):
    snapshot: AirportSnapshot | None
    freshness: Freshness


class PersistentAirportCache:
    """Read/write the airport snapshot with a fixed revalidation window."""

    def __init__(
        self,
        pool: redis.Redis,
        *,
        revalidate_seconds: int = 86_400,
        stale_seconds: int = 0,
        key: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._pool = pool
        self.revalidate_seconds = revalidate_seconds
        self.stale_seconds = stale_seconds
        self.key = key or airports_snapshot_key()
        self._clock = clock

    async def read(self) -> PersistentRead:
        raw = await self._pool.get(self.key)
        if raw is None:
            return PersistentRead(None, "miss")

        envelope: SnapshotEnvelope = json.loads(raw)
        now = self._clock()
        if now < envelope["fresh_until"]:
            freshness: Freshness = "fresh"
        elif now < envelope["stale_until"]:
            freshness = "stale"
        else:
            return PersistentRead(None, "miss")

        return PersistentRead(
            AirportSnapshot.model_validate(envelope["data"]), freshness
        )

    async def write(self, snapshot: AirportSnapshot) -> None:
        now = self._clock()
        envelope = SnapshotEnvelope(
            data=snapshot.model_dump(mode="json", by_alias=True),
            fresh_until=now + self.revalidate_seconds,
            stale_until=now + self.revalidate_seconds + self.stale_seconds,
        )
        await self._pool.set(
            self.key,
            json.dumps(envelope),
            ex=max(self.revalidate_seconds + self.stale_seconds, 1),
        )

    async def clear(self) -> None:
        await self._pool.delete(self.key)
