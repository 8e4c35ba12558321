from __future__ import annotations

import logging
from collections.abc import Iterable

from page_selection.errors import PageOutOfBoundsError
from page_selection.ranges import Range, sort_ranges

logger = logging.getLogger(__name__)


def _last_page(r: Range, page_count: int) -> int:
    return page_count if r.is_unbounded else r.int_end


def validate_page_count(ranges: Iterable[Range], page_count: int) -> None:
    """Raise :class:`PageOutOfBoundsError` for the first range past ``page_count``."""
    if page_count < 1:
        raise ValueError(f"Invalid page count: {page_count}")
    bad = next(
        (
            r
            for r in sort_ranges(ranges)
            if r.start > page_count or _last_page(r, page_count) > page_count
        ),
        None,
    )
    if bad is not None:
        raise PageOutOfBoundsError(bad, page_count)


def resolve_pages(ranges: Iterable[Range], page_count: int) -> list[int]:
    """Return ascending page numbers selected from a ``page_count`` page document.

    Open-ended ranges stop at ``page_count``. An empty selection selects
    every page.
    """
    items = tuple(ranges)
    validate_page_count(items, page_count)
    if not items:
        return list(range(1, page_count + 1))
    pages = sorted(
        {p for r in items for p in range(r.start, _last_page(r, page_count) + 1)}
    )
    logger.debug("resolved %d ranges to %d of %d pages", len(items), len(pages), page_count)
    return pages


__all__ = ["resolve_pages", "validate_page_count"]
