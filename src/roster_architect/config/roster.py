"""Roster construction rules for supported leagues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple

# Sentinel accepted by the position and team filters.
ALL_FILTER = "All"


@dataclass(frozen=True)
class RosterRules:
    league: str
    roster_size: int
    page_size: int
    salary_cap: int
    positions: Tuple[str, ...]
    high_usage_threshold: float
    defensive_threshold: float


_ROSTER_RULES: Dict[str, RosterRules] = {
    "WNBA": RosterRules(
        league="WNBA",
        roster_size=12,
        page_size=12,
        salary_cap=1_463_000,
        positions=("G", "F", "C", "G-F", "F-G", "F-C", "C-F"),
        high_usage_threshold=0.70,
        defensive_threshold=0.70,
    ),
}

DEFAULT_LEAGUE = "WNBA"


def iter_rules() -> Iterable[RosterRules]:
    """Return an iterator of all configured rule sets."""

    return _ROSTER_RULES.values()


def get_rules(league: str = DEFAULT_LEAGUE) -> RosterRules:
    """Fetch rules for a league, raising KeyError if missing."""

    key = league.upper()
    if key not in _ROSTER_RULES:
        raise KeyError(f"No roster rules configured for league={league!r}")
    return _ROSTER_RULES[key]
