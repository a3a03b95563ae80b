"""Tests for query string parsing, serialization and validation."""

from datetime import date

from hypothesis import given, settings, strategies as st

from campus_housing.models import RoomType, SearchFilters, SortOption
from campus_housing.query import (
    build_search_url,
    parse_filters,
    serialize_filters,
    validate_filters,
)


class TestParse:
    def test_parse_all_keys(self) -> None:
        f = parse_filters(
            "campus=Harvard+University&start=2025-09-01&end=2026-05-31&min=1000&max=2500"
            "&room=private&beds=2&baths=1.5&amenities=wifi,laundry&sort=price_asc"
        )
        assert f == SearchFilters(
            campus="Harvard University",
            start=date(2025, 9, 1),
            end=date(2026, 5, 31),
            min_price=1000,
            max_price=2500,
            room_type=RoomType.PRIVATE,
            beds=2,
            baths=1.5,
            amenities=frozenset({"wifi", "laundry"}),
            sort=SortOption.PRICE_ASC,
        )

    def test_leading_question_mark(self) -> None:
        assert parse_filters("?campus=mit").campus == "mit"

    def test_empty_string(self) -> None:
        assert parse_filters("") == SearchFilters()

    def test_malformed_numbers_dropped(self) -> None:
        f = parse_filters("min=abc&max=12x&beds=-1&baths=nan")
        assert f.min_price is None
        assert f.max_price is None
        assert f.beds is None
        assert f.baths is None

    def test_integral_numbers_are_ints(self) -> None:
        f = parse_filters("min=1000.0&max=2000")
        assert f.min_price == 1000
        assert isinstance(f.min_price, int)

    def test_unknown_room_dropped(self) -> None:
        assert parse_filters("room=penthouse").room_type is None

    def test_unknown_sort_defaults_to_relevance(self) -> None:
        assert parse_filters("sort=cheapest").sort == SortOption.RELEVANCE

    def test_amenities_split_and_empty_dropped(self) -> None:
        f = parse_filters("amenities=wifi,,gym,")
        assert f.amenities == frozenset({"wifi", "gym"})

    def test_bad_dates_dropped(self) -> None:
        f = parse_filters("start=2025-13-01&end=tomorrow")
        assert f.start is None
        assert f.end is None

    def test_blank_values_and_unknown_keys_ignored(self) -> None:
        assert parse_filters("campus=&min=&foo=bar") == SearchFilters()

    def test_first_value_wins(self) -> None:
        assert parse_filters("campus=mit&campus=nyu").campus == "mit"


class TestSerialize:
    def test_empty_filters(self) -> None:
        assert serialize_filters(SearchFilters()) == ""

    def test_omits_unset_and_default_sort(self) -> None:
        f = SearchFilters(
            campus="Harvard University",
            min_price=1000,
            amenities=frozenset({"wifi", "gym"}),
            sort=SortOption.RELEVANCE,
        )
        assert serialize_filters(f) == "campus=Harvard+University&min=1000&amenities=gym%2Cwifi"

    def test_zero_is_kept(self) -> None:
        assert serialize_filters(SearchFilters(min_price=0, beds=0)) == "min=0&beds=0"

    def test_enums_and_dates(self) -> None:
        f = SearchFilters(
            start=date(2025, 9, 1),
            room_type=RoomType.SHARED,
            sort=SortOption.NEWEST,
        )
        assert serialize_filters(f) == "start=2025-09-01&room=shared&sort=newest"

    def test_build_search_url(self) -> None:
        assert build_search_url(SearchFilters()) == "/search"
        assert build_search_url(SearchFilters(campus="mit"), "/s") == "/s?campus=mit"


campus_text = st.text(
    alphabet=st.characters(whitelist_categories=("L", "N", "Zs"), max_codepoint=0x2FFF),
    min_size=1,
    max_size=30,
)
amount = st.one_of(st.none(), st.integers(min_value=0, max_value=100_000))
half_counts = st.one_of(st.none(), st.sampled_from([0, 1, 1.5, 2, 2.5, 3, 4]))
dates = st.one_of(st.none(), st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 12, 31)))
tags = st.from_regex(r"[a-z_]{1,12}", fullmatch=True)

filters_strategy = st.builds(
    SearchFilters,
    campus=st.one_of(st.none(), campus_text),
    start=dates,
    end=dates,
    min_price=amount,
    max_price=amount,
    room_type=st.one_of(st.none(), st.sampled_from(list(RoomType))),
    beds=half_counts,
    baths=half_counts,
    amenities=st.frozensets(tags, max_size=5),
    sort=st.sampled_from(list(SortOption)),
)


@given(f=filters_strategy)
@settings(max_examples=200)
def test_round_trip(f: SearchFilters) -> None:
    assert parse_filters(serialize_filters(f)) == f


class TestValidate:
    def test_valid(self) -> None:
        f = SearchFilters(min_price=100, max_price=100, start=date(2025, 1, 1), end=date(2025, 1, 2))
        assert validate_filters(f) == []

    def test_min_above_max_flags_max(self) -> None:
        errors = validate_filters(SearchFilters(min_price=2000, max_price=1000))
        assert [e.field for e in errors] == ["max"]

    def test_end_not_after_start_flags_end(self) -> None:
        same = date(2025, 9, 1)
        assert [e.field for e in validate_filters(SearchFilters(start=same, end=same))] == ["end"]
        errors = validate_filters(SearchFilters(start=same, end=date(2025, 8, 1)))
        assert [e.field for e in errors] == ["end"]

    def test_single_bounds_are_fine(self) -> None:
        assert validate_filters(SearchFilters(min_price=5000)) == []
        assert validate_filters(SearchFilters(end=date(2025, 1, 1))) == []

    def test_campus_not_required(self) -> None:
        assert validate_filters(SearchFilters()) == []
