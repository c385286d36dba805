"""
Distribution planning for the multi-user tool.

Splits a requested total across (nationality, gender) pairs. Per-pair counts are
rounded independently; the plan does not renormalize, so the planned sum may
drift from the requested total by at most one unit per pair.
"""
from __future__ import annotations

import math
from typing import List, Mapping, Optional, Sequence, Union

from randomuser_mcp.domain.models import GENDERS, PlannedRequest, RequestPlan

NationalitySpec = Union[str, Sequence[str]]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (counts are never negative)."""
    return int(math.floor(value + 0.5))


def _candidates(nationality: NationalitySpec) -> List[str]:
    if isinstance(nationality, str):
        return [nationality]
    return list(nationality)


def count_for_pair(
    total_count: int,
    code: str,
    candidate_gender: str,
    gender: Optional[str] = None,
    nationality: Optional[NationalitySpec] = None,
    weights: Optional[Mapping[str, float]] = None,
) -> int:
    """Planned count for one (nationality, gender) pair; 0 when the pair is not requested."""
    if not nationality:
        return 0
    if gender and gender != candidate_gender:
        return 0
    candidates = _candidates(nationality)
    if code not in candidates:
        return 0
    weights = weights or {}
    weight = weights[code] if code in weights else 1 / len(candidates)
    gender_ratio = 1.0 if gender else 0.5
    return round_half_up(total_count * weight * gender_ratio)


def plan_distribution(
    total_count: int,
    gender: Optional[str] = None,
    nationality: Optional[NationalitySpec] = None,
    weights: Optional[Mapping[str, float]] = None,
) -> RequestPlan:
    """
    Compute how many records to request for each (nationality, gender) pair.

    Parameters
    ----------
    total_count : int
        Requested number of users across the whole invocation.
    gender : str | None
        Gender filter; when set, pairs of the other gender are left out.
    nationality : str | sequence[str] | None
        A single code or an ordered list of codes. When absent every pair counts 0
        and the plan is empty: callers handle that case with one unplanned request.
    weights : mapping[str, float] | None
        Optional per-code share. Codes without a weight get ``1 / len(candidates)``.

    Returns
    -------
    RequestPlan
        Entries in {female, male} x {nationality order}. Zero-count entries stay in
        the plan; callers skip them when issuing requests.
    """
    if not nationality:
        return ()

    plan: List[PlannedRequest] = []
    for candidate_gender in GENDERS:
        if gender and gender != candidate_gender:
            continue
        for code in _candidates(nationality):
            count = count_for_pair(total_count, code, candidate_gender, gender, nationality, weights)
            plan.append(PlannedRequest(nationality=code, gender=candidate_gender, count=count))
    return tuple(plan)


def planned_total(plan: RequestPlan) -> int:
    """Sum of counts across a plan."""
    return sum(entry.count for entry in plan)


__all__ = [
    "NationalitySpec",
    "count_for_pair",
    "plan_distribution",
    "planned_total",
    "round_half_up",
]
