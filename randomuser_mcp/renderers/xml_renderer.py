"""
XML renderer: a fixed <users><user>...</user></users> envelope.

Each top-level key of a record becomes an element; nested mappings become nested
elements; array items are joined with ",". Text content is escaped.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence
from xml.sax.saxutils import escape

from randomuser_mcp.domain.models import FormatSpec
from randomuser_mcp.renderers.abstract import AbstractRenderer, UserRecord
from randomuser_mcp.transforms import apply_structure, to_text

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'


def _content(value: Any, null_text: str) -> str:
    if isinstance(value, Mapping):
        return "".join(f"<{key}>{_content(item, null_text)}</{key}>" for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return ",".join(_content(item, null_text) for item in value)
    if value is None:
        return null_text
    return escape(to_text(value))


class XmlRenderer(AbstractRenderer):
    name: str = "xml"
    description: str = "XML document with one <user> element per record."

    def render(self, records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None) -> str:
        structure = format_spec.structure if format_spec else None
        null_text = "null" if structure and structure.null_values == "null" else ""

        lines = [XML_PROLOG, "<users>"]
        for record in records:
            shaped = apply_structure(record, structure) if structure else record
            lines.append("  <user>")
            for key, value in shaped.items():
                lines.append(f"    <{key}>{_content(value, null_text)}</{key}>")
            lines.append("  </user>")
        lines.append("</users>")
        return "\n".join(lines)


__all__ = ["XML_PROLOG", "XmlRenderer"]
