from __future__ import annotations

import pytest

from randomuser_mcp.domain.models import NATIONALITIES, PlannedRequest
from randomuser_mcp.planner import (
    count_for_pair,
    plan_distribution,
    planned_total,
    round_half_up,
)


@pytest.mark.parametrize(
    "value,expected",
    [(0.0, 0), (0.49, 0), (0.5, 1), (2.5, 3), (2.4, 2), (7.5, 8), (10.0, 10)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_gender_filter_uses_full_share_and_skips_other_gender():
    plan = plan_distribution(10, gender="female", nationality=["US", "GB"])
    assert plan == (
        PlannedRequest("US", "female", 5),
        PlannedRequest("GB", "female", 5),
    )


def test_unconstrained_gender_orders_female_then_male():
    plan = plan_distribution(10, nationality=["US", "GB"])
    assert [(entry.gender, entry.nationality) for entry in plan] == [
        ("female", "US"),
        ("female", "GB"),
        ("male", "US"),
        ("male", "GB"),
    ]
    # 10 * 0.5 * 0.5 = 2.5 rounds up for every pair; drift is accepted.
    assert [entry.count for entry in plan] == [3, 3, 3, 3]
    assert planned_total(plan) == 12


def test_single_code_splits_across_genders():
    plan = plan_distribution(10, nationality="FR")
    assert plan == (
        PlannedRequest("FR", "female", 5),
        PlannedRequest("FR", "male", 5),
    )


def test_explicit_weights_are_not_renormalized():
    plan = plan_distribution(100, gender="male", nationality=["US", "GB"], weights={"US": 0.8})
    assert plan == (
        PlannedRequest("US", "male", 80),
        PlannedRequest("GB", "male", 50),
    )


def test_zero_weight_keeps_zero_count_entry():
    plan = plan_distribution(20, gender="female", nationality=["US", "GB"], weights={"GB": 0.0})
    assert plan == (
        PlannedRequest("US", "female", 10),
        PlannedRequest("GB", "female", 0),
    )


def test_weights_for_unrequested_codes_are_ignored():
    plan = plan_distribution(8, gender="male", nationality=["NO"], weights={"DK": 1.0})
    assert plan == (PlannedRequest("NO", "male", 8),)


def test_no_nationality_yields_empty_plan():
    assert plan_distribution(50) == ()
    assert plan_distribution(50, gender="male", nationality=[]) == ()


def test_count_for_pair_zero_cases():
    assert count_for_pair(10, "US", "female") == 0
    assert count_for_pair(10, "US", "male", gender="female", nationality=["US"]) == 0
    assert count_for_pair(10, "DE", "female", nationality=["US", "GB"]) == 0
    assert count_for_pair(10, "DE", "female", nationality="US") == 0


def test_count_for_pair_matches_plan():
    nationality = ["AU", "BR", "CA"]
    weights = {"BR": 0.5}
    plan = plan_distribution(31, nationality=nationality, weights=weights)
    for entry in plan:
        assert entry.count == count_for_pair(
            31, entry.nationality, entry.gender, nationality=nationality, weights=weights
        )


@pytest.mark.parametrize("size", [1, 2, 3, 5, 7, len(NATIONALITIES)])
def test_unweighted_plan_drift_is_bounded(size):
    codes = list(NATIONALITIES[:size])
    for total in range(0, 120):
        plan = plan_distribution(total, nationality=codes)
        assert len(plan) == size * 2
        assert all(entry.count >= 0 for entry in plan)
        assert abs(planned_total(plan) - total) <= size * 2


def test_gender_filtered_plan_drift_is_bounded():
    codes = ["US", "GB", "IE"]
    for total in range(1, 200):
        plan = plan_distribution(total, gender="female", nationality=codes)
        assert abs(planned_total(plan) - total) <= len(codes)
