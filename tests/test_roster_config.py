import pytest

from roster_architect.config import get_rules, iter_rules


def test_get_rules_handles_lowercase_league():
    rules = get_rules("wnba")
    assert rules.league == "WNBA"
    assert rules.roster_size == 12
    assert rules.salary_cap == 1_463_000
    assert "F-C" in rules.positions


def test_default_rules_are_listed():
    assert get_rules() in list(iter_rules())


def test_get_rules_missing_raises():
    with pytest.raises(KeyError):
        get_rules("CURLING")
