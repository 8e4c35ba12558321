from page_selection.errors import (
    AmbiguousRangeError,
    InvalidNumberError,
    InvalidRangeError,
    SelectorError,
)
from page_selection.normalize import normalize
from page_selection.parsing import parse_selector
from page_selection.ranges import TO_END, Range, RangeSet, format_selection

__all__: list[str] = [
    "TO_END",
    "AmbiguousRangeError",
    "InvalidNumberError",
    "InvalidRangeError",
    "Range",
    "RangeSet",
    "SelectorError",
    "format_selection",
    "normalize",
    "parse_selector",
]
