"""
Domain package for the Random User MCP server.

Exports the request, format and plan models used across the pipeline.
Keep this package focused on data definitions and validation concerns.
"""

from randomuser_mcp.domain.models import (
    FIELD_NAMES,
    GENDERS,
    MAX_USERS,
    NATIONALITIES,
    CsvOptions,
    FieldSelector,
    FormatSpec,
    MultipleUsersRequest,
    PasswordPolicy,
    PlannedRequest,
    RandomUserRequest,
    RequestPlan,
    SqlOptions,
    StructureOptions,
)

__all__ = [
    "FIELD_NAMES",
    "GENDERS",
    "MAX_USERS",
    "NATIONALITIES",
    "CsvOptions",
    "FieldSelector",
    "FormatSpec",
    "MultipleUsersRequest",
    "PasswordPolicy",
    "PlannedRequest",
    "RandomUserRequest",
    "RequestPlan",
    "SqlOptions",
    "StructureOptions",
]
