"""Page range value type shared by the parser and the normalizer.

A :class:`Range` is one contiguous span of 1-based page numbers. Its upper
bound is either a concrete page or :data:`TO_END`, a tagged marker meaning
"continues to the last page of the document". The marker is never a reserved
integer, so comparisons against real page numbers cannot collide with it.

Usage:
    from page_selection.ranges import Range, TO_END, format_selection

    Range(5, 7)            # pages 5, 6, 7
    Range(12, TO_END)      # page 12 up to the end of the document
    format_selection({Range(12, TO_END), Range(2, 2)})   # "2,12-"
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Union


class _ToEnd(Enum):
    """Open upper bound of a page range."""

    TO_END = "to-end"

    def __repr__(self) -> str:
        return "TO_END"


TO_END = _ToEnd.TO_END

End = Union[int, _ToEnd]


@dataclass(frozen=True)
class Range:
    """Contiguous span of pages; equality and hash are by ``(start, end)``."""

    start: int
    end: End

    @property
    def is_unbounded(self) -> bool:
        return self.end is TO_END

    @property
    def is_bounded(self) -> bool:
        return self.end is not TO_END

    @property
    def int_end(self) -> int:
        """Last page of a bounded range; open-ended ranges have none."""
        if isinstance(self.end, int):
            return self.end
        raise ValueError(f"Open-ended range {self} has no last page")

    def contains(self, page: int) -> bool:
        """Return True if ``page`` falls inside this range."""
        if page < self.start:
            return False
        return self.is_unbounded or page <= self.int_end

    def overlaps(self, other: Range) -> bool:
        """Return True if both ranges share at least one page."""
        return _upper(self) >= other.start and _upper(other) >= self.start

    def is_adjacent(self, other: Range) -> bool:
        """Return True if one range ends exactly one page before the other starts."""
        return (self.is_bounded and self.end == other.start - 1) or (
            other.is_bounded and other.end == self.start - 1
        )

    def pages(self) -> range:
        """Concrete page numbers of a bounded range."""
        return range(self.start, self.int_end + 1)

    def sort_key(self) -> tuple[int, float]:
        return (self.start, _upper(self))

    def to_dict(self) -> dict[str, int | None]:
        """JSON-friendly form; ``end`` is ``None`` for open-ended ranges."""
        return {"start": self.start, "end": None if self.is_unbounded else self.int_end}

    def __str__(self) -> str:
        if self.is_unbounded:
            return f"{self.start}-"
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}-{self.end}"


RangeSet = FrozenSet[Range]


def _upper(r: Range) -> float:
    """Upper bound usable in comparisons; open ranges sort after every page."""
    return float("inf") if r.is_unbounded else r.int_end


def sort_ranges(ranges: Iterable[Range]) -> list[Range]:
    """Return ``ranges`` ordered by start, then end, with ``TO_END`` last."""
    return sorted(ranges, key=Range.sort_key)


def bounded(ranges: Iterable[Range]) -> Iterator[Range]:
    return (r for r in ranges if r.is_bounded)


def unbounded(ranges: Iterable[Range]) -> Iterator[Range]:
    return (r for r in ranges if r.is_unbounded)


def covered_pages(ranges: Iterable[Range]) -> set[int]:
    """Return every page covered by the bounded members of ``ranges``."""
    return {page for r in bounded(ranges) for page in r.pages()}


def format_selection(ranges: Iterable[Range]) -> str:
    """Render ``ranges`` as a selector string, ascending."""
    return ",".join(str(r) for r in sort_ranges(ranges))
