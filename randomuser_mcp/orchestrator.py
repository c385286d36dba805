"""
Request orchestration for the two tools.

`get_random_user` issues one upstream call. `get_multiple_users` plans the
(nationality, gender) split, issues one call per non-zero entry strictly in plan
order, concatenates the results and renders them once. Any upstream failure
aborts the invocation; records already gathered are discarded.

Usage:
    from randomuser_mcp.infrastructure.client import RandomUserClient
    from randomuser_mcp.orchestrator import get_multiple_users

    with RandomUserClient() as client:
        text = get_multiple_users(request, client)
"""

from __future__ import annotations

from typing import Any, Dict, List

from randomuser_mcp.domain.models import MultipleUsersRequest, RandomUserRequest, RequestPlan
from randomuser_mcp.infrastructure.client import UserRecord, UserSource
from randomuser_mcp.params import build_upstream_params
from randomuser_mcp.planner import plan_distribution, planned_total
from randomuser_mcp.renderers import render
from randomuser_mcp.utils.logging import get_logger

log = get_logger(__name__)


def get_random_user(request: RandomUserRequest, source: UserSource) -> str:
    """Fetch a single user and render it."""
    params = build_upstream_params(
        gender=request.gender,
        nationality=request.nationality,
        fields=request.fields,
        password=request.password,
    )
    log.info("[UPSTREAM CALL] single user", extra={"params": params})
    results = source.fetch_users(params)
    return render(results, request.format_spec)


def build_request_plan(request: MultipleUsersRequest) -> RequestPlan:
    """Distribution plan for a multi-user request (empty when no nationality is given)."""
    return plan_distribution(
        request.count,
        gender=request.gender,
        nationality=request.nationality,
        weights=request.nationality_weights,
    )


def _fetch_planned(
    request: MultipleUsersRequest, plan: RequestPlan, source: UserSource
) -> List[UserRecord]:
    base_params = build_upstream_params(fields=request.fields, password=request.password)
    total_calls = sum(1 for entry in plan if entry.count)
    gathered: List[UserRecord] = []
    call_number = 0

    for entry in plan:
        if entry.count == 0:
            continue
        call_number += 1
        params: Dict[str, Any] = dict(base_params)
        params.update(gender=entry.gender, nat=entry.nationality, results=entry.count)
        log.info(
            f"[UPSTREAM CALL {call_number}/{total_calls}] {entry.nationality}/{entry.gender}",
            extra={
                "nationality": entry.nationality,
                "gender": entry.gender,
                "count": entry.count,
            },
        )
        gathered.extend(source.fetch_users(params))

    return gathered


def get_multiple_users(request: MultipleUsersRequest, source: UserSource) -> str:
    """
    Fetch `request.count` users, split across nationalities and genders, and render them.

    Without a nationality the split is skipped: one call asks for the whole count,
    with the gender filter if one was given.
    """
    if not request.nationality:
        params: Dict[str, Any] = dict(
            build_upstream_params(
                gender=request.gender, fields=request.fields, password=request.password
            )
        )
        params["results"] = request.count
        log.info("[UPSTREAM CALL] unplanned", extra={"count": request.count})
        return render(source.fetch_users(params), request.format_spec)

    plan = build_request_plan(request)
    log.info(
        "[PLAN] distribution computed",
        extra={
            "requested": request.count,
            "planned": planned_total(plan),
            "entries": len(plan),
        },
    )
    records = _fetch_planned(request, plan, source)
    log.info("[GATHERED] upstream records", extra={"records": len(records)})
    return render(records, request.format_spec)


__all__ = [
    "build_request_plan",
    "get_multiple_users",
    "get_random_user",
]
