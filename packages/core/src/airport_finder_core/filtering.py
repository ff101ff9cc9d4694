"""Substring filter over airport records."""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from airport_finder_core.schemas import AirportRecord


def normalize_search_string(value: str | None) -> str:
    """Fold *value* for comparison: strip accents, casefold, trim.

    ``"México "`` and ``"mexico"`` both normalize to ``"mexico"``.
    """
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold().strip()


def _searchable_fields(airport: AirportRecord) -> tuple[str, ...]:
    return (
        normalize_search_string(airport.name),
        normalize_search_string(airport.city),
        normalize_search_string(airport.country),
        normalize_search_string(airport.iata_code),
    )


def filter_airports(
    airports: Sequence[AirportRecord],
    query: str,
) -> Sequence[AirportRecord]:
    """Return the airports whose name, city, country or IATA code contain *query*.

    A blank query returns *airports* itself. Matching keeps input order.
    """
    if not query.strip():
        return airports

    needle = normalize_search_string(query)
    return [
        airport
        for airport in airports
        if any(needle in field for field in _searchable_fields(airport))
    ]


def find_airport(
    airports: Sequence[AirportRecord],
    iata_code: str,
) -> AirportRecord | None:
    """Return the first airport with the given IATA code (case-insensitive)."""
    code = iata_code.strip().upper()
    if not code:
        return None
    for airport in airports:
        if airport.iata_code.upper() == code:
            return airport
    return None
