"""Roster analytics derived from the current selection."""

from .aggregates import (
    SALARY_CAP,
    RosterAggregates,
    cap_usage_percent,
    composition_label,
    compute_aggregates,
    is_over_cap,
    roster_meta_label,
    total_salary,
)
from .labels import contract_label, format_salary, percentile_display, percentile_tier, primary_position

__all__ = [
    "SALARY_CAP",
    "RosterAggregates",
    "cap_usage_percent",
    "composition_label",
    "compute_aggregates",
    "contract_label",
    "format_salary",
    "is_over_cap",
    "percentile_display",
    "percentile_tier",
    "primary_position",
    "roster_meta_label",
    "total_salary",
]
