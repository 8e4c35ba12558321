from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from page_selection.errors import (
    AmbiguousRangeError,
    InvalidNumberError,
    InvalidRangeError,
)
from page_selection.ranges import TO_END, Range, RangeSet

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[0-9]+")


def _to_int(part: str) -> int:
    """Return a validated 1-based page number from ``part``."""
    text = part.strip()
    if not _NUMBER.fullmatch(text) or int(text) < 1:
        raise InvalidNumberError(text)
    return int(text)


def to_range(token: str) -> Range:
    """Convert one trimmed token into a :class:`Range`.

    ``end < start`` is not rejected here; see :func:`iter_selector`.
    """
    dashes = token.count("-")
    if dashes > 1:
        raise AmbiguousRangeError(token)
    if dashes == 0:
        page = _to_int(token)
        return Range(page, page)
    head, tail = token.split("-")
    if token.endswith("-"):
        return Range(_to_int(head), TO_END)
    if token.startswith("-"):
        return Range(1, _to_int(tail))
    return Range(_to_int(head), _to_int(tail))


def _checked(r: Range) -> Range:
    if r.is_bounded and r.int_end < r.start:
        raise InvalidRangeError(r.start, r.int_end)
    return r


def _tokens(selector: str) -> Iterator[str]:
    return (t.strip() for t in selector.split(",") if t.strip())


def iter_selector(selector: str | None) -> Iterator[Range]:
    """Yield validated ranges of ``selector`` in token order.

    Raises the first :class:`~page_selection.errors.SelectorError` met while
    scanning left to right.
    """
    if not selector or not selector.strip():
        return
    for token in _tokens(selector):
        r = _checked(to_range(token))
        logger.debug("token %r -> %s", token, r)
        yield r


def parse_selector(selector: str | None) -> RangeSet:
    """Convert a selector like ``"2,5-7,12-"`` into a set of ranges.

    Blank input yields an empty set. Duplicate tokens collapse by value; no
    merging happens here (see :func:`page_selection.normalize.normalize`).
    """
    return frozenset(iter_selector(selector))


__all__ = ["iter_selector", "parse_selector", "to_range"]
