"""Tests for the campus directory."""

from campus_housing.campuses import CampusDirectory
from campus_housing.models import Campus


def test_find_by_name_harvard(directory: CampusDirectory) -> None:
    campus = directory.find_by_name("harvard")
    assert campus is not None
    assert campus.name == "Harvard University"
    assert campus.lat == 42.3744
    assert campus.lng == -71.1169


def test_find_by_name_trims_and_ignores_case(directory: CampusDirectory) -> None:
    campus = directory.find_by_name("  HARVARD Univ ")
    assert campus is not None
    assert campus.slug == "harvard-university"


def test_find_by_name_city_state_composite(directory: CampusDirectory) -> None:
    campus = directory.find_by_name("new york ny")
    assert campus is not None
    assert campus.slug == "nyu"


def test_find_by_name_slug(directory: CampusDirectory) -> None:
    campus = directory.find_by_name("ut-austin")
    assert campus is not None
    assert campus.city == "Austin"


def test_find_by_name_miss(directory: CampusDirectory) -> None:
    assert directory.find_by_name("Nonexistent U") is None


def test_find_by_name_blank_returns_first_campus(directory: CampusDirectory) -> None:
    assert directory.find_by_name("").slug == "harvard-university"
    assert directory.find_by_name("   ").slug == "harvard-university"


def test_find_by_slug_exact_only(directory: CampusDirectory) -> None:
    campus = directory.find_by_slug("uc-berkeley")
    assert campus is not None
    assert campus.name == "University of California, Berkeley"
    assert directory.find_by_slug("berkeley") is None


def test_search_prefix_before_alphabetical(directory: CampusDirectory) -> None:
    names = [c.name for c in directory.search("boston", 10)]
    # BU starts with "boston"; Northeastern only matches on city
    assert names == ["Boston University", "Northeastern University"]


def test_search_alphabetical_within_prefix_matches(directory: CampusDirectory) -> None:
    names = [c.name for c in directory.search("university", 3)]
    assert names == [
        "University of California, Berkeley",
        "University of California, Los Angeles",
        "University of Chicago",
    ]


def test_search_exact_match_first() -> None:
    d = CampusDirectory([
        Campus(id="b", name="Test U North", slug="b"),
        Campus(id="c", name="Another Test U", slug="c"),
        Campus(id="a", name="Test U", slug="a"),
    ])
    assert [c.id for c in d.search("test u", 10)] == ["a", "b", "c"]


def test_search_matches_state(directory: CampusDirectory) -> None:
    results = directory.search("ca", 20)
    assert all(
        "ca" in (c.name.lower() + (c.city or "").lower() + (c.state or "").lower() + (c.slug or ""))
        for c in results
    )
    assert any(c.slug == "stanford-university" for c in results)


def test_search_empty_query_returns_directory_order(directory: CampusDirectory) -> None:
    results = directory.search("", 3)
    assert [c.slug for c in results] == [c.slug for c in list(directory)[:3]]


def test_search_respects_limit(directory: CampusDirectory) -> None:
    assert len(directory.search("university", 2)) == 2
