from hypothesis import given, settings, strategies as st

from page_selection.normalize import normalize, normalize_by_expansion
from page_selection.parsing import parse_selector
from page_selection.ranges import (
    TO_END,
    Range,
    bounded,
    covered_pages,
    format_selection,
    sort_ranges,
    unbounded,
)

page = st.integers(min_value=1, max_value=60)
bounded_range = st.builds(
    lambda start, length: Range(start, start + length), page, st.integers(0, 15)
)
open_range = st.builds(lambda start: Range(start, TO_END), page)
bounded_sets = st.frozensets(bounded_range, max_size=12)
mixed_sets = st.frozensets(st.one_of(bounded_range, open_range), max_size=12)


def _covers(ranges, limit: int) -> set[int]:
    """Pages up to ``limit`` covered by ``ranges``, open tails included."""
    return {p for p in range(1, limit + 1) if any(r.contains(p) for r in ranges)}


def _is_canonical(ranges) -> bool:
    ordered = sort_ranges(ranges)
    pairs = zip(ordered, ordered[1:])
    return len(list(unbounded(ranges))) <= 1 and all(
        a.is_bounded and a.end + 1 < b.start for a, b in pairs
    )


@given(bounded_sets)
@settings(deadline=None)
def test_union_is_preserved(ranges) -> None:
    assert covered_pages(normalize(ranges)) == covered_pages(ranges)


@given(mixed_sets)
@settings(deadline=None)
def test_union_is_preserved_with_open_tails(ranges) -> None:
    assert _covers(normalize(ranges), 120) == _covers(ranges, 120)


@given(mixed_sets)
@settings(deadline=None)
def test_idempotent(ranges) -> None:
    once = normalize(ranges)
    assert normalize(once) == once


@given(mixed_sets)
@settings(deadline=None)
def test_result_is_canonical(ranges) -> None:
    assert _is_canonical(normalize(ranges))


@given(mixed_sets)
@settings(deadline=None)
def test_matches_expansion_reference(ranges) -> None:
    assert normalize(ranges) == normalize_by_expansion(ranges)


@given(st.lists(st.one_of(bounded_range, open_range), max_size=12), st.randoms())
@settings(deadline=None)
def test_insertion_order_is_irrelevant(ranges, rnd) -> None:
    shuffled = list(ranges)
    rnd.shuffle(shuffled)
    assert normalize(shuffled) == normalize(ranges)


@given(mixed_sets)
@settings(deadline=None)
def test_canonical_input_round_trips(ranges) -> None:
    canonical = normalize(ranges)
    assert normalize(set(canonical)) == canonical
    assert parse_selector(format_selection(canonical)) == canonical


@given(bounded_sets, st.lists(open_range, min_size=1, max_size=4))
@settings(deadline=None)
def test_single_open_tail_from_smallest_start(ranges, tails) -> None:
    result = normalize(ranges | frozenset(tails))
    u = min(r.start for r in tails)
    (tail,) = unbounded(result)
    pages = covered_pages(ranges)
    assert tail.start <= u
    assert set(range(tail.start, u)) <= pages
    assert tail.start - 1 not in pages
    assert all(r.start < tail.start for r in bounded(result))


def test_smallest_start_wins() -> None:
    assert normalize({Range(5, TO_END), Range(10, TO_END)}) == {Range(5, TO_END)}
