"""Turn per-document selections into inputs for a merge job.

Each row of a merge job names a source document and an optional selector.
Ranges of one document may intersect, so by default every range becomes its
own :class:`MergeInput`; the merge then emits the pages of each range in
order, duplicates included.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from page_selection.config import SelectionOptions
from page_selection.errors import InvalidSelectionError, NoInputError, SelectorError
from page_selection.normalize import normalize
from page_selection.parsing import iter_selector
from page_selection.ranges import Range, RangeSet, sort_ranges

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeItem:
    """One source document with the selector typed for it."""

    source: str
    selection: str | None = None


@dataclass(frozen=True)
class MergeInput:
    """Source document plus the ranges to take from it; empty means every page."""

    source: str
    ranges: RangeSet = frozenset()

    def to_dict(self) -> dict[str, object]:
        return {
            "source": self.source,
            "ranges": [r.to_dict() for r in sort_ranges(self.ranges)],
        }


def _ordered_ranges(item: MergeItem, options: SelectionOptions) -> list[Range]:
    try:
        if options.normalize:
            return sort_ranges(normalize(iter_selector(item.selection)))
        return list(dict.fromkeys(iter_selector(item.selection)))
    except SelectorError as exc:
        raise InvalidSelectionError(item.source, exc) from exc


def _inputs_for(item: MergeItem, options: SelectionOptions) -> list[MergeInput]:
    selection = (item.selection or "").strip()
    if selection == options.skip_marker:
        logger.debug("skipping %s", item.source)
        return []
    if not selection:
        return [MergeInput(item.source)]
    ranges = _ordered_ranges(item, options)
    if options.split_ranges:
        return [MergeInput(item.source, frozenset((r,))) for r in ranges]
    return [MergeInput(item.source, frozenset(ranges))]


def plan_merge(
    items: Iterable[MergeItem], options: SelectionOptions | None = None
) -> list[MergeInput]:
    """Build the ordered merge inputs for ``items``.

    Raises :class:`InvalidSelectionError` for the first item whose selection
    does not parse and :class:`NoInputError` when nothing is selected.
    """
    opts = options or SelectionOptions()
    inputs = [mi for item in items for mi in _inputs_for(item, opts)]
    if not inputs:
        raise NoInputError("no document selected")
    logger.info("planned %d merge inputs", len(inputs))
    return inputs


__all__ = ["MergeInput", "MergeItem", "plan_merge"]
