import itertools

import pytest

from roster_architect.models import Player
from roster_architect.pool import FilterCriteria, PlayerCatalog, clamp_page, page_count, paginate
from roster_architect.pool.filtering import (
    _matches_position,
    _matches_search,
    _matches_team,
)


def _pool() -> list[Player]:
    return [
        Player(athlete_id="1", name="Alyssa Guard", team="CHI", position="G"),
        Player(athlete_id="2", name="Brea Wing", team="LVA", position="G-F"),
        Player(athlete_id="3", name="Cara Big", team="CHI", position="C"),
        Player(athlete_id="4", name="Dana Forward", team="NYL", position="F-G"),
        Player(athlete_id="5", name="Chicago Native", team="SEA", position="F-C"),
        Player(athlete_id="6", name="No Team", team=None, position=None),
    ]


def test_list_teams_sorted_and_distinct():
    catalog = PlayerCatalog(_pool())

    assert catalog.list_teams() == ["CHI", "LVA", "NYL", "SEA"]


def test_search_matches_name_or_team_case_insensitive():
    catalog = PlayerCatalog(_pool())

    result = catalog.filter(FilterCriteria(search_term="chi"))

    assert [p.athlete_id for p in result] == ["1", "3", "5"]


def test_empty_search_matches_everyone():
    catalog = PlayerCatalog(_pool())

    assert len(catalog.filter(FilterCriteria())) == 6


def test_position_filter_is_substring_match():
    catalog = PlayerCatalog(_pool())

    result = catalog.filter(FilterCriteria(position="G"))

    assert [p.athlete_id for p in result] == ["1", "2", "4"]


def test_team_filter_is_exact():
    catalog = PlayerCatalog(_pool())

    result = catalog.filter(FilterCriteria(team="CH"))

    assert result == []
    assert [p.athlete_id for p in catalog.filter(FilterCriteria(team="CHI"))] == ["1", "3"]


def test_exclude_ids_hides_rostered_players():
    catalog = PlayerCatalog(_pool())

    result = catalog.filter(FilterCriteria(team="CHI"), exclude_ids={"1"})

    assert [p.athlete_id for p in result] == ["3"]


def test_filter_is_idempotent():
    catalog = PlayerCatalog(_pool())
    criteria = FilterCriteria(search_term="a", position="F")

    first = catalog.filter(criteria, {"2"})
    second = catalog.filter(criteria, {"2"})

    assert first == second


def test_predicate_order_does_not_matter():
    pool = _pool()
    criteria = FilterCriteria(search_term="a", position="F", team="NYL")
    excluded = {"2"}
    predicates = [
        lambda p: _matches_search(p, criteria.search_term),
        lambda p: _matches_position(p, criteria.position),
        lambda p: _matches_team(p, criteria.team),
        lambda p: p.athlete_id not in excluded,
    ]
    expected = PlayerCatalog(pool).filter(criteria, excluded)

    for order in itertools.permutations(predicates):
        result = [p for p in pool if all(pred(p) for pred in order)]
        assert result == expected


def test_get_prefers_later_duplicate():
    first = Player(athlete_id="dup", name="First")
    second = Player(athlete_id="dup", name="Second")

    catalog = PlayerCatalog([first, second])

    assert catalog.get("dup") is second
    assert catalog.get("missing") is None


@pytest.mark.parametrize(
    ("total", "expected"),
    [(0, 1), (1, 1), (12, 1), (13, 2), (25, 3)],
)
def test_page_count(total, expected):
    assert page_count(total) == expected


def test_clamp_page():
    assert clamp_page(0, 30) == 1
    assert clamp_page(5, 30) == 3
    assert clamp_page(2, 0) == 1


def test_paginate_returns_contiguous_slice():
    players = [Player(athlete_id=str(i), name=f"Player {i}") for i in range(30)]

    page_two = paginate(players, 2)
    last_page = paginate(players, 3)

    assert [p.athlete_id for p in page_two] == [str(i) for i in range(12, 24)]
    assert len(last_page) == 6


def test_view_clamps_page():
    players = [Player(athlete_id=str(i), name=f"Player {i}") for i in range(14)]
    catalog = PlayerCatalog(players)

    view = catalog.view(FilterCriteria(), page=9)

    assert view.page == 2
    assert view.total_pages == 2
    assert view.total_players == 14
    assert len(view.players) == 2
