from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel

from roster_architect.analytics import (
    contract_label,
    format_salary,
    percentile_display,
    percentile_tier,
    primary_position,
)
from roster_architect.models import Player


class PercentileBadge(BaseModel):
    value: int
    tier: str

    @classmethod
    def from_fraction(cls, fraction: Optional[float]) -> "PercentileBadge":
        return cls(value=percentile_display(fraction), tier=percentile_tier(fraction))


class PlayerResponse(BaseModel):
    athlete_id: str | None
    name: str
    team: str | None
    position: str | None
    primary_position: str | None
    contract_type: str | None
    contract_label: str | None
    salary: float | None
    salary_display: str
    ts_percentile: float | None
    usage_percentile: float | None
    def_percentile: float | None
    ast_percentile: float | None
    badges: Dict[str, PercentileBadge]

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(
            athlete_id=player.athlete_id,
            name=player.name,
            team=player.team,
            position=player.position,
            primary_position=primary_position(player.position),
            contract_type=player.contract_type,
            contract_label=contract_label(player.contract_type),
            salary=player.salary,
            salary_display=format_salary(player.salary),
            ts_percentile=player.ts_percentile,
            usage_percentile=player.usage_percentile,
            def_percentile=player.def_percentile,
            ast_percentile=player.ast_percentile,
            badges={
                "ts": PercentileBadge.from_fraction(player.ts_percentile),
                "usage": PercentileBadge.from_fraction(player.usage_percentile),
                "def": PercentileBadge.from_fraction(player.def_percentile),
                "ast": PercentileBadge.from_fraction(player.ast_percentile),
            },
        )


class PlayerPageResponse(BaseModel):
    page: int
    total_pages: int
    total_players: int
    players: List[PlayerResponse]


class ImportResponse(BaseModel):
    success: bool
    players_loaded: int
    dropped_rows: int
    error: Optional[str] = None
