"""
Translation of tool options into upstream query parameters.

Pure mapping construction, no I/O. The orchestrator adds `results` (and, on the
multi-user path, the per-call `gender`/`nat`) on top of what is built here.
"""
from __future__ import annotations

from typing import Dict, Optional

from randomuser_mcp.domain.models import (
    DEFAULT_CHARSETS,
    MIN_PASSWORD_LENGTH,
    FieldSelector,
    PasswordPolicy,
)

ParameterMap = Dict[str, str]


def encode_password_policy(policy: PasswordPolicy) -> str:
    """
    Encode a password policy as upstream's single `password` parameter.

    Examples: ``upper,lower,number,8`` or ``special,upper,10-20``.
    """
    charsets = ",".join(policy.charsets or DEFAULT_CHARSETS)
    min_length = policy.min_length or MIN_PASSWORD_LENGTH
    if policy.max_length:
        return f"{charsets},{min_length}-{policy.max_length}"
    return f"{charsets},{min_length}"


def build_upstream_params(
    gender: Optional[str] = None,
    nationality: Optional[str] = None,
    fields: Optional[FieldSelector] = None,
    password: Optional[PasswordPolicy] = None,
) -> ParameterMap:
    """
    Build the flat key/value parameters the upstream API expects.

    Exactly one of `inc`/`exc` is emitted for a field selector.
    """
    params: ParameterMap = {}

    if gender:
        params["gender"] = gender
    if nationality:
        params["nat"] = nationality

    if fields is not None:
        if fields.mode == "include":
            params["inc"] = ",".join(fields.values)
        elif fields.mode == "exclude":
            params["exc"] = ",".join(fields.values)

    if password is not None:
        params["password"] = encode_password_policy(password)

    return params


__all__ = ["ParameterMap", "build_upstream_params", "encode_password_policy"]
