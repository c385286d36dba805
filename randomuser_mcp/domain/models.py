"""
Domain models for the Random User MCP server.

Typed views over the tool arguments: field selection, password policy, output
format, and the two request shapes. The models enforce the schema-shape rules
advertised in the tool input schemas; anything further is upstream's concern.
"""
from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, NamedTuple, Optional, Tuple, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator, model_validator

Nationality = Literal[
    "AU", "BR", "CA", "CH", "DE", "DK", "ES", "FI", "FR", "GB", "IE",
    "IN", "IR", "MX", "NL", "NO", "NZ", "RS", "TR", "UA", "US",
]
FieldName = Literal[
    "name", "phone", "email", "location", "picture", "dob",
    "login", "registered", "id", "cell", "nat",
]
Gender = Literal["female", "male"]
Charset = Literal["special", "upper", "lower", "number"]
FormatType = Literal["json", "csv", "sql", "xml"]

NATIONALITIES: Tuple[str, ...] = get_args(Nationality)
FIELD_NAMES: Tuple[str, ...] = get_args(FieldName)
# Iteration order of the multi-user fan-out.
GENDERS: Tuple[str, ...] = ("female", "male")
FORMAT_TYPES: Tuple[str, ...] = get_args(FormatType)
MAX_USERS = 5000
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64
DEFAULT_CHARSETS: Tuple[str, ...] = ("upper", "lower", "number")

PasswordLength = Annotated[int, Field(ge=MIN_PASSWORD_LENGTH, le=MAX_PASSWORD_LENGTH)]
Weight = Annotated[float, Field(ge=0.0, le=1.0)]
# Any two-letter code; weights for codes outside the request are ignored.
WeightKey = Annotated[str, StringConstraints(pattern=r"^[A-Z]{2}$")]

_MODEL_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _upper(value: Any) -> Any:
    if isinstance(value, str):
        return value.upper()
    if isinstance(value, (list, tuple)):
        return [item.upper() if isinstance(item, str) else item for item in value]
    return value


class FieldSelector(BaseModel):
    """Which top-level record sections upstream should include or exclude."""

    mode: Literal["include", "exclude"] = "include"
    values: Tuple[FieldName, ...] = Field(..., min_length=1)

    model_config = _MODEL_CONFIG


class PasswordPolicy(BaseModel):
    """Character sets and length bounds for generated passwords."""

    charsets: Optional[Tuple[Charset, ...]] = None
    min_length: Optional[PasswordLength] = Field(None, alias="minLength")
    max_length: Optional[PasswordLength] = Field(None, alias="maxLength")

    model_config = _MODEL_CONFIG

    @model_validator(mode="after")
    def _check_bounds(self) -> "PasswordPolicy":
        lower = self.min_length or MIN_PASSWORD_LENGTH
        if self.max_length is not None and lower > self.max_length:
            raise ValueError(
                f"minLength ({lower}) must not exceed maxLength ({self.max_length})"
            )
        return self


class CsvOptions(BaseModel):
    delimiter: Literal[",", ";", "\t"] = ","
    include_header: bool = Field(True, alias="includeHeader")

    model_config = _MODEL_CONFIG


class SqlOptions(BaseModel):
    dialect: Literal["mysql", "postgresql", "sqlite"] = "postgresql"
    table_name: str = Field("users", alias="tableName", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    include_create: bool = Field(True, alias="includeCreate")

    model_config = _MODEL_CONFIG


class StructureOptions(BaseModel):
    """Shaping options shared by all renderers (see each renderer for exceptions)."""

    flatten_objects: bool = Field(False, alias="flattenObjects")
    array_format: Optional[Literal["brackets", "comma", "numbered"]] = Field(
        None, alias="arrayFormat"
    )
    date_format: Optional[Literal["iso", "unix", "formatted"]] = Field(None, alias="dateFormat")
    name_format: Optional[Literal["full", "first_last", "separate"]] = Field(
        None, alias="nameFormat"
    )
    null_values: Optional[Literal["empty", "null", "omit"]] = Field(None, alias="nullValues")

    model_config = _MODEL_CONFIG


class FormatSpec(BaseModel):
    """Output encoding plus its type-specific and shared sub-configs."""

    type: FormatType = "json"
    sql: Optional[SqlOptions] = None
    csv: Optional[CsvOptions] = None
    structure: Optional[StructureOptions] = None

    model_config = _MODEL_CONFIG


class RandomUserRequest(BaseModel):
    """Arguments of the `get_random_user` tool."""

    gender: Optional[Gender] = None
    nationality: Optional[Nationality] = None
    fields: Optional[FieldSelector] = None
    format_spec: Optional[FormatSpec] = Field(None, alias="format")
    password: Optional[PasswordPolicy] = None

    model_config = _MODEL_CONFIG

    @field_validator("nationality", mode="before")
    @classmethod
    def _normalize_nationality(cls, value: Any) -> Any:
        return _upper(value)


class MultipleUsersRequest(BaseModel):
    """Arguments of the `get_multiple_users` tool."""

    count: int = Field(..., ge=1, le=MAX_USERS)
    gender: Optional[Gender] = None
    nationality: Optional[Union[Nationality, Tuple[Nationality, ...]]] = None
    nationality_weights: Dict[WeightKey, Weight] = Field(
        default_factory=dict, alias="nationalityWeights"
    )
    fields: Optional[FieldSelector] = None
    format_spec: Optional[FormatSpec] = Field(None, alias="format")
    password: Optional[PasswordPolicy] = None

    model_config = _MODEL_CONFIG

    @field_validator("nationality", mode="before")
    @classmethod
    def _normalize_nationality(cls, value: Any) -> Any:
        return _upper(value)

    @field_validator("nationality")
    @classmethod
    def _check_nationality_list(cls, value: Any) -> Any:
        if isinstance(value, tuple):
            if not value:
                raise ValueError("nationality list must not be empty")
            if len(set(value)) != len(value):
                raise ValueError("nationality list must not contain duplicates")
        return value

    @field_validator("nationality_weights", mode="before")
    @classmethod
    def _normalize_weight_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {_upper(key): weight for key, weight in value.items()}
        return value


class PlannedRequest(NamedTuple):
    """One entry of a distribution plan."""

    nationality: str
    gender: str
    count: int


RequestPlan = Tuple[PlannedRequest, ...]


__all__ = [
    "Nationality",
    "FieldName",
    "Gender",
    "NATIONALITIES",
    "FIELD_NAMES",
    "GENDERS",
    "FORMAT_TYPES",
    "MAX_USERS",
    "MIN_PASSWORD_LENGTH",
    "MAX_PASSWORD_LENGTH",
    "DEFAULT_CHARSETS",
    "FieldSelector",
    "PasswordPolicy",
    "CsvOptions",
    "SqlOptions",
    "StructureOptions",
    "FormatSpec",
    "RandomUserRequest",
    "MultipleUsersRequest",
    "PlannedRequest",
    "RequestPlan",
]
