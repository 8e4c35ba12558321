"""Error taxonomy for page selections.

Every error carries structured data only. ``str(error)`` is the offending
payload; turning it into a sentence is left to the presentation layer
(see :func:`page_selection.cli.describe_error`).
"""

from __future__ import annotations

from page_selection.ranges import Range


class SelectorError(ValueError):
    """Base class for malformed selector input."""

    kind = "selector"


class AmbiguousRangeError(SelectorError):
    """A token contains more than one ``-`` delimiter."""

    kind = "ambiguous_range"

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token


class InvalidNumberError(SelectorError):
    """A numeric field is not a positive base-10 integer."""

    kind = "invalid_number"

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.text = text


class InvalidRangeError(SelectorError):
    """A bounded range ends before it starts."""

    kind = "invalid_range"

    def __init__(self, start: int, end: int) -> None:
        super().__init__(f"{start}-{end}")
        self.start = start
        self.end = end

    @property
    def range(self) -> Range:
        return Range(self.start, self.end)


class PageOutOfBoundsError(ValueError):
    """A range refers to pages past the end of the document."""

    kind = "page_out_of_bounds"

    def __init__(self, range_: Range, page_count: int) -> None:
        super().__init__(f"{range_} > {page_count}")
        self.range = range_
        self.page_count = page_count


class MergePlanError(ValueError):
    """Base class for errors raised while planning a merge."""

    kind = "merge_plan"


class InvalidSelectionError(MergePlanError):
    """The selection of one merge item failed to parse."""

    kind = "invalid_selection"

    def __init__(self, source: str, error: SelectorError) -> None:
        super().__init__(source, str(error))
        self.source = source
        self.error = error


class NoInputError(MergePlanError):
    """No document contributes pages to the merge."""

    kind = "no_input"


__all__ = [
    "SelectorError",
    "AmbiguousRangeError",
    "InvalidNumberError",
    "InvalidRangeError",
    "PageOutOfBoundsError",
    "MergePlanError",
    "InvalidSelectionError",
    "NoInputError",
]
