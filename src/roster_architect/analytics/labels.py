"""Display helpers for individual player attributes."""

from __future__ import annotations

import math
from typing import Literal, Optional


PercentileTier = Literal["elite", "strong", "average", "low"]


def contract_label(contract_type: Optional[str]) -> Optional[str]:
    """Single-letter contract badge; only the first character carries meaning."""

    if not contract_type:
        return None
    return contract_type[0].upper()


def percentile_display(value: Optional[float]) -> int:
    # Halves round up.
    return math.floor((value or 0.0) * 100 + 0.5)


def percentile_tier(value: Optional[float]) -> PercentileTier:
    pct = percentile_display(value)
    if pct >= 90:
        return "elite"
    if pct >= 75:
        return "strong"
    if pct >= 50:
        return "average"
    return "low"


def format_salary(salary: Optional[float]) -> str:
    if salary is None:
        return "---"
    return f"${salary:,.0f}"


def primary_position(position: Optional[str]) -> Optional[str]:
    if not position:
        return None
    return position.split("-")[0]
