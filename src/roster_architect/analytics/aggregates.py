"""Aggregate salary and percentile statistics for a roster."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from roster_architect.config import get_rules
from roster_architect.models import Player


_RULES = get_rules()

SALARY_CAP = _RULES.salary_cap
HIGH_USAGE_THRESHOLD = _RULES.high_usage_threshold
DEFENSIVE_THRESHOLD = _RULES.defensive_threshold


@dataclass(frozen=True)
class RosterAggregates:
    """Derived statistics; never stored on their own."""

    member_count: int
    total_salary: float
    avg_ts: float
    avg_usage: float
    avg_def: float
    avg_ast: float


def total_salary(players: Iterable[Player]) -> float:
    """Sum of salaries, counting unknown salaries as zero."""

    return sum(player.salary or 0 for player in players)


def _mean(values: Iterable[Optional[float]], count: int) -> float:
    # Missing values still count toward the divisor.
    return sum(value or 0.0 for value in values) / count


def compute_aggregates(roster: Sequence[Player]) -> Optional[RosterAggregates]:
    """Return aggregates for ``roster`` or ``None`` when it is empty."""

    count = len(roster)
    if count == 0:
        return None
    return RosterAggregates(
        member_count=count,
        total_salary=total_salary(roster),
        avg_ts=_mean((p.ts_percentile for p in roster), count),
        avg_usage=_mean((p.usage_percentile for p in roster), count),
        avg_def=_mean((p.def_percentile for p in roster), count),
        avg_ast=_mean((p.ast_percentile for p in roster), count),
    )


def is_over_cap(salary: float, cap: int = SALARY_CAP) -> bool:
    return salary > cap


def cap_usage_percent(salary: float, cap: int = SALARY_CAP) -> float:
    """Share of the cap consumed, capped at 100 for display."""

    return min(salary / cap * 100, 100.0)


def composition_label(aggregates: RosterAggregates) -> str:
    if aggregates.avg_usage > HIGH_USAGE_THRESHOLD:
        return "High-Volume"
    return "Efficiency-Based"


def roster_meta_label(aggregates: RosterAggregates) -> str:
    if aggregates.avg_def > DEFENSIVE_THRESHOLD:
        return "Defensive Juggernaut"
    return "Neutral Profile"
