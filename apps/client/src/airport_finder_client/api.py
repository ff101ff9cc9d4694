"""HTTP client for the internal ``/airports`` endpoint."""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ValidationError

from airport_finder_client.config import settings
from airport_finder_core.errors import (
    AirportFinderError,
    UpstreamFormatError,
    body_snippet,
)
from airport_finder_core.schemas import AirportRecord

logger = logging.getLogger(__name__)


class AirportsApiError(AirportFinderError):
    """The internal API answered with a non-success status."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"API error: {status} {message}".rstrip())


class _AirportsPayload(BaseModel):
    airports: list[AirportRecord]
    total: int


class AirportsApiClient:
    """Async wrapper around ``GET /airports`` of the Airport Finder API."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=httpx.Timeout(timeout or settings.request_timeout),
            headers={"Cache-Control": "no-store"},
            transport=transport,
        )

    async def fetch_all_airports(self) -> tuple[list[AirportRecord], int]:
        """Return ``(airports, total)``; raises on non-2xx or malformed bodies."""
        resp = await self._client.get("/airports")
        if not resp.is_success:
            message = resp.reason_phrase
            try:
                message = resp.json().get("error", message)
            except (ValueError, AttributeError):
                pass
            raise AirportsApiError(resp.status_code, message)

        try:
            payload = _AirportsPayload.model_validate_json(resp.content)
        except ValidationError as exc:
            msg = "Airport API returned an unexpected body"
            raise UpstreamFormatError(
                msg,
                content_type=resp.headers.get("content-type"),
                body_snippet=body_snippet(resp.text),
            ) from exc

        logger.debug("Fetched %d airports (total=%d)", len(payload.airports), payload.total)
        return payload.airports, payload.total

    async def close(self) -> None:
        """Shut down the underlying HTTPX client."""
        await self._client.aclose()
