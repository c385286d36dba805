"""
Record shaping applied before rendering.

- Flattening: nested mappings collapse into one level with underscore-joined
  key paths (``location_street_name``). Arrays stay opaque unless an array
  format is requested.
- Name and date formatting: presentation policies for the `name`, `dob.date`
  and `registered.date` fields.
- Null policy: how `None` leaves are carried into the output.

None of the functions here mutate their input.
"""
from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from randomuser_mcp.domain.models import StructureOptions

Record = Dict[str, Any]

DATE_SECTIONS = ("dob", "registered")


def to_text(value: Any) -> str:
    """Default string conversion for scalar output cells."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return str(value)


def _flatten_array(items: List[Any], flat: Record, path: str, array_format: str) -> None:
    if array_format == "numbered":
        for index, item in enumerate(items):
            item_path = f"{path}_{index}"
            if isinstance(item, Mapping):
                _flatten_into(item, flat, item_path, array_format)
            elif isinstance(item, list):
                _flatten_array(item, flat, item_path, array_format)
            else:
                flat[item_path] = item
    elif array_format == "comma":
        flat[path] = ",".join(to_text(item) for item in items)
    else:  # brackets
        flat[path] = json.dumps(items, separators=(",", ":"), ensure_ascii=False, default=str)


def _flatten_into(
    value: Mapping[str, Any], flat: Record, prefix: str, array_format: Optional[str]
) -> None:
    for key, item in value.items():
        path = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(item, Mapping):
            _flatten_into(item, flat, path, array_format)
        elif isinstance(item, list) and array_format is not None:
            _flatten_array(item, flat, path, array_format)
        else:
            flat[path] = item


def flatten_record(record: Mapping[str, Any], array_format: Optional[str] = None) -> Record:
    """
    Collapse a nested record into a single-level mapping.

    Every leaf scalar appears under its underscore-joined key path. Already-flat
    records come back unchanged.

    Parameters
    ----------
    record : Mapping[str, Any]
        Upstream record (or any nested mapping).
    array_format : str | None
        None keeps arrays as raw values; "comma" joins scalar items with ",";
        "brackets" stores compact JSON text; "numbered" expands items into
        ``<key>_<index>`` entries.
    """
    flat: Record = {}
    _flatten_into(record, flat, "", array_format)
    return flat


def format_name(record: Mapping[str, Any], name_format: Optional[str]) -> Record:
    """Apply a name format; "separate" (the upstream shape) is a no-op."""
    shaped = dict(record)
    name = shaped.get("name")
    if not isinstance(name, Mapping) or name_format in (None, "separate"):
        return shaped

    first = name.get("first") or ""
    last = name.get("last") or ""
    if name_format == "full":
        shaped["name"] = f"{first} {last}".strip()
    elif name_format == "first_last":
        shaped["first_name"] = name.get("first")
        shaped["last_name"] = name.get("last")
        del shaped["name"]
    return shaped


def _parse_date(value: Any) -> Optional[datetime]:
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
    except (ValueError, OverflowError, OSError):
        return None
    return None


def convert_date(value: Any, date_format: Optional[str]) -> Any:
    """Convert one date value; unknown formats and unparseable values pass through."""
    if date_format not in ("unix", "iso", "formatted"):
        return value
    parsed = _parse_date(value)
    if parsed is None:
        return value
    if date_format == "unix":
        return math.floor(parsed.timestamp())
    utc = parsed.astimezone(timezone.utc)
    if date_format == "iso":
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"{utc.month}/{utc.day}/{utc.year}"


def format_dates(record: Mapping[str, Any], date_format: Optional[str]) -> Record:
    """Apply a date format to `dob.date` and `registered.date` where present."""
    shaped = dict(record)
    if date_format is None:
        return shaped
    for key in DATE_SECTIONS:
        section = shaped.get(key)
        if isinstance(section, Mapping) and section.get("date"):
            section = dict(section)
            section["date"] = convert_date(section["date"], date_format)
            shaped[key] = section
    return shaped


def apply_null_policy(value: Any, null_values: Optional[str]) -> Any:
    """
    Rewrite `None` leaves: "empty" -> "", "omit" -> dropped, otherwise kept.

    Recurses through mappings and lists.
    """
    if null_values not in ("empty", "omit"):
        return value
    if isinstance(value, Mapping):
        shaped: Record = {}
        for key, item in value.items():
            if item is None and null_values == "omit":
                continue
            shaped[key] = apply_null_policy(item, null_values)
        return shaped
    if isinstance(value, list):
        return [
            apply_null_policy(item, null_values)
            for item in value
            if not (item is None and null_values == "omit")
        ]
    if value is None:
        return ""
    return value


def apply_structure(record: Mapping[str, Any], structure: StructureOptions) -> Record:
    """
    Shape one record for the JSON and XML renderers.

    Order: flatten (when requested), then name format, then date format, then the
    null policy. Flattening first means name/date formats find nothing to rewrite
    on flattened output.
    """
    if structure.flatten_objects:
        shaped = flatten_record(record, structure.array_format)
    else:
        shaped = dict(record)
    shaped = format_name(shaped, structure.name_format)
    shaped = format_dates(shaped, structure.date_format)
    return apply_null_policy(shaped, structure.null_values)


def flatten_for_table(
    records: Iterable[Mapping[str, Any]], structure: Optional[StructureOptions] = None
) -> List[Record]:
    """Flatten every record for the tabular renderers (CSV, SQL)."""
    array_format = structure.array_format if structure else None
    return [flatten_record(record, array_format) for record in records]


def collect_columns(rows: Iterable[Mapping[str, Any]]) -> List[str]:
    """Union of keys across rows, in first-seen order."""
    columns: Dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)
    return list(columns)


__all__ = [
    "Record",
    "apply_null_policy",
    "apply_structure",
    "collect_columns",
    "convert_date",
    "flatten_for_table",
    "flatten_record",
    "format_dates",
    "format_name",
    "to_text",
]
