from __future__ import annotations

from typing import List

from pydantic import BaseModel

from roster_architect.analytics import (
    SALARY_CAP,
    RosterAggregates,
    cap_usage_percent,
    composition_label,
    is_over_cap,
    roster_meta_label,
)

from .player import PlayerResponse


class RosterAnalyticsResponse(BaseModel):
    member_count: int
    total_salary: float
    salary_cap: int
    over_cap: bool
    cap_usage_percent: float
    avg_ts: float
    avg_usage: float
    avg_def: float
    avg_ast: float
    composition: str
    roster_meta: str

    @classmethod
    def from_aggregates(cls, aggregates: RosterAggregates) -> "RosterAnalyticsResponse":
        return cls(
            member_count=aggregates.member_count,
            total_salary=aggregates.total_salary,
            salary_cap=SALARY_CAP,
            over_cap=is_over_cap(aggregates.total_salary),
            cap_usage_percent=cap_usage_percent(aggregates.total_salary),
            avg_ts=aggregates.avg_ts,
            avg_usage=aggregates.avg_usage,
            avg_def=aggregates.avg_def,
            avg_ast=aggregates.avg_ast,
            composition=composition_label(aggregates),
            roster_meta=roster_meta_label(aggregates),
        )


class RosterResponse(BaseModel):
    players: List[PlayerResponse]
    remaining_slots: int
    analytics: RosterAnalyticsResponse | None
    share_url: str | None = None
    changed: bool | None = None
