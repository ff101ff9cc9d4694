"""HTTP client for the Aviationstack airports API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from airport_finder_api.config import settings
from airport_finder_core.errors import (
    UpstreamFormatError,
    UpstreamHttpError,
    body_snippet,
)
from airport_finder_core.schemas import ProviderAirport, ProviderPagination

logger = logging.getLogger(__name__)

_AIRPORTS_PATH = "/airports"


@dataclass(frozen=True)
class UpstreamPage:
    """Records of one page plus the provider's reported dataset size."""

    records: list[ProviderAirport]
    total: int


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class _RawPage(BaseModel):
    """Page envelope; records are validated one by one afterwards."""

    model_config = ConfigDict(extra="ignore")

    pagination: ProviderPagination
    data: list[Any] = Field(default_factory=list)


def _valid_records(items: list[Any]) -> list[ProviderAirport]:
    records: list[ProviderAirport] = []
    skipped = 0
    for item in items:
        try:
            records.append(ProviderAirport.model_validate(item))
        except ValidationError as exc:
            skipped += 1
            logger.debug("Skipping malformed airport record: %s", exc)
    if skipped:
        logger.warning("Skipped %d malformed airport records of %d", skipped, len(items))
    return records


class AviationstackClient:
    """Thin async wrapper around ``GET /v1/airports``.

    Single attempt per call: failures are raised to the caller, which decides
    whether to fall back.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.aviationstack_base_url,
            timeout=httpx.Timeout(timeout or settings.upstream_timeout),
            transport=transport,
        )

    async def fetch_page(
        self,
        api_key: str,
        offset: int | None = None,
        limit: int | None = None,
    ) -> UpstreamPage:
        """Fetch one page of airports and validate the response."""
        if not api_key:
            msg = "api_key must be a non-empty string"
            raise ValueError(msg)

        params: dict[str, object] = {"access_key": api_key}
        for name, value in (("offset", offset), ("limit", limit)):
            if value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                msg = f"{name} must be a non-negative integer, got {value!r}"
                raise ValueError(msg)
            params[name] = value

        resp = await self._client.get(_AIRPORTS_PATH, params=params)
        page = self._parse(resp)
        logger.debug(
            "Aviationstack returned %d airports (offset=%s, total=%d)",
            len(page.records),
            offset,
            page.total,
        )
        return page

    async def fetch_all(
        self,
        api_key: str,
        *,
        page_size: int,
        max_pages: int = 1,
    ) -> UpstreamPage:
        """Walk pages until the reported total is collected or *max_pages* is hit."""
        records: list[ProviderAirport] = []
        total = 0
        for page_no in range(max(max_pages, 1)):
            page = await self.fetch_page(
                api_key, offset=page_no * page_size, limit=page_size
            )
            records.extend(page.records)
            total = page.total
            # Malformed records are dropped, so progress is tracked by offset.
            if not page.records or (page_no + 1) * page_size >= total:
                break
        return UpstreamPage(records=records, total=total)

    @staticmethod
    def _parse(resp: httpx.Response) -> UpstreamPage:
        if not resp.is_success:
            raise UpstreamHttpError(
                resp.status_code,
                resp.reason_phrase,
                body_snippet(resp.text),
            )

        content_type = resp.headers.get("content-type", "")
        if not _is_json(content_type):
            msg = f"Expected JSON from Aviationstack, got {content_type or 'no content type'}"
            raise UpstreamFormatError(
                msg,
                content_type=content_type,
                body_snippet=body_snippet(resp.text),
            )

        try:
            body = resp.json()
        except ValueError as exc:
            msg = "Aviationstack returned malformed JSON"
            raise UpstreamFormatError(
                msg,
                content_type=content_type,
                body_snippet=body_snippet(resp.text),
            ) from exc

        if isinstance(body, dict) and "error" in body:
            error = body["error"]
            code = error.get("code") if isinstance(error, dict) else error
            msg = f"Aviationstack returned an error payload: {code}"
            raise UpstreamFormatError(
                msg,
                content_type=content_type,
                body_snippet=body_snippet(resp.text),
            )

        try:
            parsed = _RawPage.model_validate(body)
        except ValidationError as exc:
            msg = "Aviationstack response does not match the airports schema"
            raise UpstreamFormatError(
                msg,
                content_type=content_type,
                body_snippet=body_snippet(resp.text),
            ) from exc

        return UpstreamPage(
            records=_valid_records(parsed.data), total=parsed.pagination.total
        )

    async def close(self) -> None:
        """Shut down the underlying HTTPX client."""
        await self._client.aclose()
