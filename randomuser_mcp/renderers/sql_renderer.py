"""
SQL renderer: an optional CREATE TABLE followed by one multi-row INSERT.

Always flattens and never applies name/date formats, like the CSV renderer.
Every column is VARCHAR(255); every value is a single-quoted string literal with
embedded quotes doubled, and missing or null values become NULL.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from randomuser_mcp.domain.models import FormatSpec, SqlOptions
from randomuser_mcp.renderers.abstract import AbstractRenderer, UserRecord
from randomuser_mcp.transforms import collect_columns, flatten_for_table, to_text

# Surrogate key per dialect; the rest of the output is dialect-neutral.
PRIMARY_KEYS: Dict[str, str] = {
    "postgresql": "id SERIAL PRIMARY KEY",
    "mysql": "id INT AUTO_INCREMENT PRIMARY KEY",
    "sqlite": "id INTEGER PRIMARY KEY AUTOINCREMENT",
}


def quote_literal(value: Any) -> str:
    """Render a value as a SQL string literal, or NULL."""
    if value is None:
        return "NULL"
    return "'" + to_text(value).replace("'", "''") + "'"


class SqlRenderer(AbstractRenderer):
    name: str = "sql"
    description: str = "CREATE TABLE IF NOT EXISTS (optional) plus a multi-row INSERT INTO."

    def render(self, records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None) -> str:
        options = (format_spec.sql if format_spec else None) or SqlOptions()
        structure = format_spec.structure if format_spec else None
        rows = flatten_for_table(records, structure)
        if not rows:
            return ""

        empty_nulls = bool(structure and structure.null_values == "empty")
        columns = collect_columns(rows)
        table = options.table_name

        sql = ""
        if options.include_create:
            sql += self._create_table(table, columns, options.dialect)

        tuples: List[str] = []
        for row in rows:
            literals = []
            for column in columns:
                value = row.get(column)
                literals.append("''" if value is None and empty_nulls else quote_literal(value))
            tuples.append(f"({', '.join(literals)})")

        sql += f"INSERT INTO {table} ({', '.join(columns)}) VALUES\n"
        sql += ",\n".join(tuples)
        sql += ";"
        return sql

    @staticmethod
    def _create_table(table: str, columns: Sequence[str], dialect: str) -> str:
        definitions = []
        if "id" not in columns:
            definitions.append(f"  {PRIMARY_KEYS[dialect]}")
        definitions.extend(f"  {column} VARCHAR(255)" for column in columns)
        return f"CREATE TABLE IF NOT EXISTS {table} (\n" + ",\n".join(definitions) + "\n);\n\n"


__all__ = ["PRIMARY_KEYS", "SqlRenderer", "quote_literal"]
