"""Predicates and pagination for browsing the player catalog."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence

from roster_architect.config import ALL_FILTER
from roster_architect.models import Player


DEFAULT_PAGE_SIZE = 12


@dataclass(frozen=True)
class FilterCriteria:
    """Search/filter configuration for the catalog view."""

    search_term: str = ""
    position: str = ALL_FILTER
    team: str = ALL_FILTER

    def with_search(self, search_term: str) -> "FilterCriteria":
        return replace(self, search_term=search_term)

    def with_position(self, position: str) -> "FilterCriteria":
        return replace(self, position=position)

    def with_team(self, team: str) -> "FilterCriteria":
        return replace(self, team=team)


def _contains(value: Optional[str], term: str) -> bool:
    return value is not None and term in value.lower()


def _matches_search(player: Player, term: str) -> bool:
    if not term:
        return True
    term = term.lower()
    return _contains(player.name, term) or _contains(player.team, term)


def _matches_position(player: Player, position: str) -> bool:
    if position == ALL_FILTER:
        return True
    return player.position is not None and position in player.position


def _matches_team(player: Player, team: str) -> bool:
    return team == ALL_FILTER or player.team == team


def passes_criteria(
    player: Player,
    criteria: FilterCriteria,
    exclude_ids: frozenset[Optional[str]] = frozenset(),
) -> bool:
    if player.athlete_id in exclude_ids:
        return False
    return (
        _matches_search(player, criteria.search_term)
        and _matches_position(player, criteria.position)
        and _matches_team(player, criteria.team)
    )


def filter_players(
    players: Sequence[Player],
    criteria: FilterCriteria,
    exclude_ids: Iterable[Optional[str]] = (),
) -> list[Player]:
    """Return players passing every predicate, preserving catalog order."""

    excluded = frozenset(exclude_ids)
    return [player for player in players if passes_criteria(player, criteria, excluded)]


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages for ``total`` items; an empty view still has one page."""

    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return min(max(page, 1), page_count(total, page_size))


def paginate(
    players: Sequence[Player],
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Player]:
    start = (page - 1) * page_size
    return list(players[start : start + page_size])


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FilterCriteria",
    "clamp_page",
    "filter_players",
    "page_count",
    "paginate",
    "passes_criteria",
]
