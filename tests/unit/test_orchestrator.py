from __future__ import annotations

import json

import pytest

from randomuser_mcp.domain.models import MultipleUsersRequest, PlannedRequest, RandomUserRequest
from randomuser_mcp.errors import UpstreamTransportError
from randomuser_mcp.orchestrator import build_request_plan, get_multiple_users, get_random_user


def _multi(**payload) -> MultipleUsersRequest:
    return MultipleUsersRequest.model_validate(payload)


def test_female_only_issues_one_call_per_nationality(fake_source):
    request = _multi(count=10, nationality=["US", "GB"], gender="female")

    text = get_multiple_users(request, fake_source)

    assert fake_source.calls == [
        {"gender": "female", "nat": "US", "results": 5},
        {"gender": "female", "nat": "GB", "results": 5},
    ]
    records = json.loads(text)
    assert len(records) == 10
    assert [record["nat"] for record in records] == ["US"] * 5 + ["GB"] * 5


def test_unconstrained_gender_preserves_call_order(fake_source):
    get_multiple_users(_multi(count=8, nationality=["US", "GB"]), fake_source)

    assert [(call["gender"], call["nat"], call["results"]) for call in fake_source.calls] == [
        ("female", "US", 2),
        ("female", "GB", 2),
        ("male", "US", 2),
        ("male", "GB", 2),
    ]


def test_results_are_concatenated_in_plan_order(fake_source):
    text = get_multiple_users(_multi(count=4, nationality=["DE", "FR"]), fake_source)
    records = json.loads(text)
    assert [(r["gender"], r["nat"]) for r in records] == [
        ("female", "DE"),
        ("female", "FR"),
        ("male", "DE"),
        ("male", "FR"),
    ]


def test_zero_count_entries_are_not_requested(fake_source):
    request = _multi(
        count=10, nationality=["US", "GB"], gender="male", nationalityWeights={"GB": 0}
    )

    get_multiple_users(request, fake_source)

    assert build_request_plan(request) == (
        PlannedRequest("US", "male", 5),
        PlannedRequest("GB", "male", 0),
    )
    assert fake_source.calls == [{"gender": "male", "nat": "US", "results": 5}]


def test_no_nationality_issues_single_unplanned_call(fake_source):
    text = get_multiple_users(_multi(count=7, gender="male"), fake_source)

    assert fake_source.calls == [{"gender": "male", "results": 7}]
    assert len(json.loads(text)) == 7


def test_fields_and_password_reach_every_call(fake_source):
    request = _multi(
        count=2,
        nationality=["NZ", "AU"],
        gender="female",
        fields={"mode": "exclude", "values": ["login"]},
        password={"charsets": ["special"], "minLength": 12},
    )

    get_multiple_users(request, fake_source)

    assert len(fake_source.calls) == 2
    for call in fake_source.calls:
        assert call["exc"] == "login"
        assert call["password"] == "special,12"
        assert "inc" not in call


def test_failure_mid_sequence_aborts_invocation(failing_source):
    request = _multi(count=10, nationality=["US", "GB"], gender="female")

    with pytest.raises(UpstreamTransportError, match="API Error: Uh oh"):
        get_multiple_users(request, failing_source)

    assert len(failing_source.calls) == 2


def test_multiple_users_renders_requested_format(fake_source):
    request = _multi(
        count=2,
        nationality="GB",
        format={"type": "csv", "csv": {"includeHeader": False}},
    )

    text = get_multiple_users(request, fake_source)

    lines = text.split("\n")
    assert len(lines) == 2
    assert lines[0].startswith("female,Ms,User0,")
    assert lines[1].startswith("male,Ms,User0,")


def test_get_random_user_issues_single_call(fake_source):
    request = RandomUserRequest.model_validate(
        {
            "gender": "female",
            "nationality": "ie",
            "fields": {"mode": "include", "values": ["name", "nat"]},
            "format": {"type": "xml"},
        }
    )

    text = get_random_user(request, fake_source)

    assert fake_source.calls == [{"gender": "female", "nat": "IE", "inc": "name,nat"}]
    assert text.count("<user>") == 1
    assert "<nat>IE</nat>" in text


def test_get_random_user_without_arguments(fake_source):
    text = get_random_user(RandomUserRequest(), fake_source)

    assert fake_source.calls == [{}]
    assert len(json.loads(text)) == 1
