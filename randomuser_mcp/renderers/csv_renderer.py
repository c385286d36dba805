"""
CSV renderer.

Always flattens, whatever `structure.flattenObjects` says, and never applies the
name or date formats: columns are the raw flattened paths (`name_first`,
`dob_date`, ...). Columns are the union of keys across records in first-seen
order; a record missing a column gets an empty cell.
"""

from __future__ import annotations

import csv
import io
from typing import Any, Optional, Sequence

from randomuser_mcp.domain.models import CsvOptions, FormatSpec
from randomuser_mcp.renderers.abstract import AbstractRenderer, UserRecord
from randomuser_mcp.transforms import collect_columns, flatten_for_table, to_text


class CsvRenderer(AbstractRenderer):
    name: str = "csv"
    description: str = "Delimited text, one flattened record per line, optional header."

    def render(self, records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None) -> str:
        options = (format_spec.csv if format_spec else None) or CsvOptions()
        structure = format_spec.structure if format_spec else None
        rows = flatten_for_table(records, structure)
        if not rows:
            return ""

        null_text = "null" if structure and structure.null_values == "null" else ""
        columns = collect_columns(rows)

        buffer = io.StringIO()
        writer = csv.writer(buffer, delimiter=options.delimiter, lineterminator="\n")
        if options.include_header:
            writer.writerow(columns)
        for row in rows:
            writer.writerow([self._cell(row, column, null_text) for column in columns])

        text = buffer.getvalue()
        return text[:-1] if text.endswith("\n") else text

    @staticmethod
    def _cell(row: UserRecord, column: str, null_text: str) -> str:
        if column not in row:
            return ""
        value: Any = row[column]
        if value is None:
            return null_text
        return to_text(value)


__all__ = ["CsvRenderer"]
