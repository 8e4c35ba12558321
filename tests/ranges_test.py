import pytest

from page_selection.parsing import parse_selector
from page_selection.ranges import (
    TO_END,
    Range,
    covered_pages,
    format_selection,
    sort_ranges,
)


def test_equality_is_structural() -> None:
    assert Range(2, 2) == Range(2, 2)
    assert len({Range(2, 2), Range(2, 2), Range(1, 3)}) == 2
    assert Range(4, TO_END) == Range(4, TO_END)
    assert Range(4, TO_END) != Range(4, 4)


def test_ranges_are_immutable() -> None:
    r = Range(1, 2)
    with pytest.raises(AttributeError):
        r.start = 3  # type: ignore[misc]


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (Range(1, 3), Range(2, 4), True),
        (Range(1, 3), Range(4, 6), False),
        (Range(1, 3), Range(3, 3), True),
        (Range(5, TO_END), Range(100, 200), True),
        (Range(5, TO_END), Range(1, 4), False),
        (Range(5, TO_END), Range(9, TO_END), True),
    ],
)
def test_overlaps(a: Range, b: Range, expected: bool) -> None:
    assert a.overlaps(b) is expected
    assert b.overlaps(a) is expected


def test_adjacency() -> None:
    assert Range(1, 3).is_adjacent(Range(4, 6))
    assert Range(4, 6).is_adjacent(Range(1, 3))
    assert Range(1, 3).is_adjacent(Range(4, TO_END))
    assert not Range(1, 3).is_adjacent(Range(5, 6))
    assert not Range(1, 3).is_adjacent(Range(3, 6))


def test_contains() -> None:
    assert Range(3, 5).contains(5)
    assert not Range(3, 5).contains(6)
    assert Range(3, TO_END).contains(10_000)
    assert not Range(3, TO_END).contains(2)


def test_pages_of_open_range_raise() -> None:
    assert list(Range(2, 4).pages()) == [2, 3, 4]
    with pytest.raises(ValueError):
        Range(2, TO_END).pages()


def test_sort_puts_open_end_last() -> None:
    ranges = [Range(3, TO_END), Range(3, 9), Range(1, 1)]
    assert sort_ranges(ranges) == [Range(1, 1), Range(3, 9), Range(3, TO_END)]


def test_covered_pages_ignores_open_ranges() -> None:
    assert covered_pages([Range(1, 2), Range(2, 3), Range(9, TO_END)]) == {1, 2, 3}


def test_str_and_format() -> None:
    assert str(Range(2, 2)) == "2"
    assert str(Range(5, 7)) == "5-7"
    assert str(Range(12, TO_END)) == "12-"
    assert format_selection({Range(12, TO_END), Range(2, 2), Range(5, 7)}) == "2,5-7,12-"
    assert format_selection([]) == ""


def test_format_parses_back() -> None:
    ranges = parse_selector("12-,5-7,2,1-3")
    assert parse_selector(format_selection(ranges)) == ranges


def test_to_dict() -> None:
    assert Range(5, 7).to_dict() == {"start": 5, "end": 7}
    assert Range(5, TO_END).to_dict() == {"start": 5, "end": None}


def test_int_end_only_for_bounded_ranges() -> None:
    assert Range(3, 8).int_end == 8
    with pytest.raises(ValueError, match="no last page"):
        Range(3, TO_END).int_end
