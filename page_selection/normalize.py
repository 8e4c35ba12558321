"""Collapse a set of page ranges into its canonical union.

The canonical form of a selection is the minimal set of maximal,
pairwise-disjoint, non-adjacent ranges covering the same pages. At most one
open-ended range survives: the one with the smallest start, since every
open-ended range runs to the same last page.

Two implementations share that contract:

- :func:`normalize` sorts by start and sweeps, merging on overlap or
  adjacency. Memory is proportional to the number of ranges.
- :func:`normalize_by_expansion` expands every bounded range into pages,
  truncates at the open tail and re-segments consecutive runs. Memory is
  proportional to the largest bounded page; it is kept as a reference for
  differential tests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from page_selection.ranges import (
    TO_END,
    End,
    Range,
    RangeSet,
    bounded,
    covered_pages,
    unbounded,
)

logger = logging.getLogger(__name__)


def _open_tail(ranges: Sequence[Range]) -> Range | None:
    """Return the open-ended range with the smallest start, if any."""
    tails = sorted(unbounded(ranges), key=lambda r: r.start)
    if len(tails) > 1:
        logger.info(
            "dropping open-ended ranges covered by %s: %s",
            tails[0],
            ", ".join(str(r) for r in tails[1:]),
        )
    return tails[0] if tails else None


def _merge_runs(ranges: Iterable[Range]) -> list[Range]:
    """Merge bounded ranges that overlap or touch, ascending."""
    runs: list[Range] = []
    for r in sorted(bounded(ranges), key=Range.sort_key):
        last = runs[-1] if runs else None
        if last is not None and r.start <= last.int_end + 1:
            runs[-1] = Range(last.start, max(last.int_end, r.int_end))
        else:
            runs.append(r)
    return runs


def _fold_tail(runs: list[Range], tail: Range | None) -> list[Range]:
    """Absorb every run reaching ``tail.start - 1`` or beyond into ``tail``."""
    if tail is None:
        return runs
    kept = [r for r in runs if r.start < tail.start]
    if kept and kept[-1].int_end >= tail.start - 1:
        return [*kept[:-1], Range(kept[-1].start, TO_END)]
    return [*kept, tail]


def normalize(ranges: Iterable[Range]) -> RangeSet:
    """Return the canonical union of ``ranges``.

    >>> from page_selection.parsing import parse_selector
    >>> sorted(map(str, normalize(parse_selector("1-3,2-5,8-,10-12"))))
    ['1-5', '8-']
    """
    items = tuple(ranges)
    if not items:
        return frozenset()
    result = _fold_tail(_merge_runs(items), _open_tail(items))
    logger.debug("normalized %d ranges into %d", len(items), len(result))
    return frozenset(result)


def _resegment(sequence: Iterable[End]) -> set[Range]:
    """Group consecutive pages into ranges; ``TO_END`` opens the current group."""
    out: set[Range] = set()
    start: int | None = None
    prev = 0
    for value in sequence:
        if not isinstance(value, int):
            # the marker is always last and always follows the tail start
            if start is not None:
                out.add(Range(start, TO_END))
            return out
        if start is None or value != prev + 1:
            if start is not None:
                out.add(Range(start, prev))
            start = value
        prev = value
    if start is not None:
        out.add(Range(start, prev))
    return out


def normalize_by_expansion(ranges: Iterable[Range]) -> RangeSet:
    """Canonical union computed by expanding bounded ranges into pages."""
    items = tuple(ranges)
    if not items:
        return frozenset()
    pages = sorted(covered_pages(items))
    tail = _open_tail(items)
    sequence: list[End] = list(pages)
    if tail is not None:
        sequence = [*(p for p in pages if p < tail.start), tail.start, TO_END]
    return frozenset(_resegment(sequence))


__all__ = ["normalize", "normalize_by_expansion"]
