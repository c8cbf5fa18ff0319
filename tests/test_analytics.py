import pytest

from roster_architect.analytics import (
    SALARY_CAP,
    cap_usage_percent,
    composition_label,
    compute_aggregates,
    contract_label,
    format_salary,
    is_over_cap,
    percentile_display,
    percentile_tier,
    primary_position,
    roster_meta_label,
    total_salary,
)
from roster_architect.models import Player


def test_empty_roster_has_no_aggregates():
    assert compute_aggregates([]) is None


def test_missing_fields_still_count_in_divisor():
    roster = [
        Player(athlete_id="1", name="One", salary=100_000, ts_percentile=0.9, usage_percentile=0.6),
        Player(athlete_id="2", name="Two", ts_percentile=0.5),
        Player(athlete_id="3", name="Three", salary=50_000),
    ]

    aggregates = compute_aggregates(roster)

    assert aggregates is not None
    assert aggregates.member_count == 3
    assert aggregates.total_salary == 150_000
    assert aggregates.avg_ts == pytest.approx((0.9 + 0.5) / 3)
    assert aggregates.avg_usage == pytest.approx(0.2)
    assert aggregates.avg_def == 0.0
    assert aggregates.avg_ast == 0.0


def test_over_cap_scenario():
    roster = [Player(athlete_id=str(i), name=f"P{i}", salary=125_000) for i in range(12)]

    aggregates = compute_aggregates(roster)

    assert aggregates is not None
    assert aggregates.total_salary == 1_500_000
    assert SALARY_CAP == 1_463_000
    assert is_over_cap(aggregates.total_salary)
    assert cap_usage_percent(aggregates.total_salary) == 100.0


def test_cap_boundary_is_not_over():
    assert not is_over_cap(1_463_000)
    assert cap_usage_percent(731_500) == pytest.approx(50.0)


def test_total_salary_treats_unknown_as_zero():
    assert total_salary([Player(name="A"), Player(name="B", salary=10)]) == 10


def test_labels_use_strict_thresholds():
    base = [Player(athlete_id="1", name="One", usage_percentile=0.70, def_percentile=0.70)]
    high = [Player(athlete_id="1", name="One", usage_percentile=0.71, def_percentile=0.71)]

    assert composition_label(compute_aggregates(base)) == "Efficiency-Based"
    assert roster_meta_label(compute_aggregates(base)) == "Neutral Profile"
    assert composition_label(compute_aggregates(high)) == "High-Volume"
    assert roster_meta_label(compute_aggregates(high)) == "Defensive Juggernaut"


def test_player_display_helpers():
    assert contract_label("rookie scale") == "R"
    assert contract_label("") is None
    assert contract_label(None) is None
    assert format_salary(1_234_567) == "$1,234,567"
    assert format_salary(None) == "---"
    assert primary_position("F-C") == "F"
    assert primary_position(None) is None


@pytest.mark.parametrize(
    ("value", "display", "tier"),
    [(0.91, 91, "elite"), (0.75, 75, "strong"), (0.5, 50, "average"), (0.125, 13, "low"), (None, 0, "low")],
)
def test_percentile_tiers(value, display, tier):
    assert percentile_display(value) == display
    assert percentile_tier(value) == tier
