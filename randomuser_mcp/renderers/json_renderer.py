"""
JSON renderer: the default encoding.

Without structure options the upstream records are pretty-printed untouched;
with them each record is shaped (flatten, name, date, nulls) first.
"""

from __future__ import annotations

import json
from typing import Optional, Sequence

from randomuser_mcp.domain.models import FormatSpec
from randomuser_mcp.renderers.abstract import AbstractRenderer, UserRecord
from randomuser_mcp.transforms import apply_structure


class JsonRenderer(AbstractRenderer):
    name: str = "json"
    description: str = "Pretty-printed JSON array (2-space indent, key order preserved)."

    def render(self, records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None) -> str:
        structure = format_spec.structure if format_spec else None
        if structure is None:
            payload = list(records)
        else:
            payload = [apply_structure(record, structure) for record in records]
        return json.dumps(payload, indent=2, ensure_ascii=False)


__all__ = ["JsonRenderer"]
