"""
Tool registry: the single source of truth for both tool metadata (name,
description, JSON-Schema input) and implementation (request model + handler).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from randomuser_mcp.domain.models import (
    FIELD_NAMES,
    FORMAT_TYPES,
    GENDERS,
    MAX_PASSWORD_LENGTH,
    MAX_USERS,
    MIN_PASSWORD_LENGTH,
    NATIONALITIES,
    MultipleUsersRequest,
    RandomUserRequest,
)
from randomuser_mcp.errors import InvalidParamsError, ToolNotFoundError
from randomuser_mcp.infrastructure.client import UserSource
from randomuser_mcp.orchestrator import get_multiple_users, get_random_user
from randomuser_mcp.utils.logging import get_logger

log = get_logger(__name__)

ToolHandler = Callable[[Any, UserSource], str]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any]
    request_model: Type[BaseModel]
    handler: ToolHandler

    def to_spec(self) -> Dict[str, Any]:
        """Tool entry as advertised by `tools/list`."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


def _field_selector_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "description": "Specify which fields to include or exclude",
        "properties": {
            "mode": {"type": "string", "enum": ["include", "exclude"], "default": "include"},
            "values": {
                "type": "array",
                "items": {"type": "string", "enum": list(FIELD_NAMES)},
                "minItems": 1,
            },
        },
        "required": ["values"],
    }


def _format_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "type": {"type": "string", "enum": list(FORMAT_TYPES), "default": "json"},
            "sql": {
                "type": "object",
                "properties": {
                    "dialect": {"type": "string", "enum": ["mysql", "postgresql", "sqlite"]},
                    "tableName": {"type": "string", "pattern": "^[A-Za-z_][A-Za-z0-9_]*$"},
                    "includeCreate": {"type": "boolean"},
                },
            },
            "csv": {
                "type": "object",
                "properties": {
                    "delimiter": {"type": "string", "enum": [",", ";", "\t"]},
                    "includeHeader": {"type": "boolean"},
                },
            },
            "structure": {
                "type": "object",
                "properties": {
                    "flattenObjects": {"type": "boolean"},
                    "arrayFormat": {"type": "string", "enum": ["brackets", "comma", "numbered"]},
                    "dateFormat": {"type": "string", "enum": ["iso", "unix", "formatted"]},
                    "nameFormat": {"type": "string", "enum": ["full", "first_last", "separate"]},
                    "nullValues": {"type": "string", "enum": ["empty", "null", "omit"]},
                },
            },
        },
    }


def _password_schema() -> Dict[str, Any]:
    length = {"type": "integer", "minimum": MIN_PASSWORD_LENGTH, "maximum": MAX_PASSWORD_LENGTH}
    return {
        "type": "object",
        "properties": {
            "charsets": {
                "type": "array",
                "items": {"type": "string", "enum": ["special", "upper", "lower", "number"]},
                "description": "Character sets to include in password",
            },
            "minLength": {**length, "description": "Minimum password length (8-64)"},
            "maxLength": {**length, "description": "Maximum password length (8-64)"},
        },
    }


def _gender_schema() -> Dict[str, Any]:
    return {"type": "string", "enum": list(GENDERS), "description": "Filter results by gender"}


def _nationality_schema() -> Dict[str, Any]:
    return {"type": "string", "enum": list(NATIONALITIES), "description": "Specify nationality"}


def list_tool_definitions() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="get_random_user",
            description="Get a single random user",
            input_schema={
                "type": "object",
                "properties": {
                    "gender": _gender_schema(),
                    "nationality": _nationality_schema(),
                    "fields": _field_selector_schema(),
                    "format": _format_schema(),
                    "password": _password_schema(),
                },
            },
            request_model=RandomUserRequest,
            handler=get_random_user,
        ),
        ToolDefinition(
            name="get_multiple_users",
            description="Get multiple random users",
            input_schema={
                "type": "object",
                "properties": {
                    "count": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": MAX_USERS,
                        "description": "Number of users to generate",
                    },
                    "gender": _gender_schema(),
                    "nationality": {
                        "oneOf": [
                            _nationality_schema(),
                            {
                                "type": "array",
                                "items": {"type": "string", "enum": list(NATIONALITIES)},
                                "minItems": 1,
                                "uniqueItems": True,
                            },
                        ]
                    },
                    "nationalityWeights": {
                        "type": "object",
                        "patternProperties": {
                            "^[A-Z]{2}$": {"type": "number", "minimum": 0, "maximum": 1}
                        },
                    },
                    "fields": _field_selector_schema(),
                    "format": _format_schema(),
                    "password": _password_schema(),
                },
                "required": ["count"],
            },
            request_model=MultipleUsersRequest,
            handler=get_multiple_users,
        ),
    ]


def list_tool_specs() -> List[Dict[str, Any]]:
    return [definition.to_spec() for definition in list_tool_definitions()]


def get_tool_definition(name: str) -> ToolDefinition:
    for definition in list_tool_definitions():
        if definition.name == name:
            return definition
    raise ToolNotFoundError(name)


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
        problems.append(f"{location}: {error.get('msg')}")
    return "; ".join(problems)


def parse_arguments(definition: ToolDefinition, arguments: Optional[Mapping[str, Any]]) -> BaseModel:
    """Validate raw tool arguments into the tool's request model."""
    try:
        return definition.request_model.model_validate(dict(arguments or {}))
    except ValidationError as exc:
        raise InvalidParamsError(
            f"Invalid arguments for {definition.name}: {_describe_validation_error(exc)}"
        ) from exc


def call_tool(name: str, arguments: Optional[Mapping[str, Any]], source: UserSource) -> str:
    """
    Resolve, validate and run a tool, returning its text payload.

    Raises
    ------
    ToolNotFoundError
        `name` is not a registered tool.
    InvalidParamsError
        The arguments do not match the tool's schema.
    UpstreamTransportError, UpstreamDataShapeError
        The upstream API failed.
    """
    definition = get_tool_definition(name)
    request = parse_arguments(definition, arguments)
    log.info(f"[TOOL START] {name}", extra={"tool": name})
    text = definition.handler(request, source)
    log.info(f"[TOOL SUCCESS] {name}", extra={"tool": name, "chars": len(text)})
    return text


__all__ = [
    "ToolDefinition",
    "call_tool",
    "get_tool_definition",
    "list_tool_definitions",
    "list_tool_specs",
    "parse_arguments",
]
