"""Configuration helpers for league roster rules."""

from .roster import ALL_FILTER, RosterRules, get_rules, iter_rules

__all__ = [
    "ALL_FILTER",
    "RosterRules",
    "get_rules",
    "iter_rules",
]
