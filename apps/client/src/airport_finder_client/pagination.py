"""Page-number window for pagination controls."""

from __future__ import annotations

GAP = "..."


def visible_pages(current: int, total: int, max_visible: int = 5) -> list[int | str]:
    """Return the page numbers to show, with ``"..."`` marking skipped ranges.

    >>> visible_pages(1, 10)
    [1, 2, 3, 4, '...', 10]
    >>> visible_pages(5, 10)
    [1, '...', 4, 5, 6, '...', 10]
    """
    if total <= max_visible:
        return list(range(1, total + 1))
    if current <= 3:
        return [1, 2, 3, 4, GAP, total]
    if current >= total - 2:
        return [1, GAP, *range(total - 3, total + 1)]
    return [1, GAP, current - 1, current, current + 1, GAP, total]
