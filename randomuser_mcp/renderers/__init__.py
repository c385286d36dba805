"""
Renderers package for the Random User MCP server.

Re-exports the renderer interfaces and concrete renderers, and resolves a
`format.type` to the renderer that produces it.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

from randomuser_mcp.domain.models import FormatSpec
from randomuser_mcp.renderers.abstract import AbstractRenderer, Renderer, UserRecord
from randomuser_mcp.renderers.csv_renderer import CsvRenderer
from randomuser_mcp.renderers.json_renderer import JsonRenderer
from randomuser_mcp.renderers.sql_renderer import SqlRenderer
from randomuser_mcp.renderers.xml_renderer import XmlRenderer


def _renderer_factories() -> Dict[str, Callable[[], Renderer]]:
    """Registry of available renderers."""
    return {
        "json": JsonRenderer,
        "csv": CsvRenderer,
        "sql": SqlRenderer,
        "xml": XmlRenderer,
    }


def available_formats() -> List[str]:
    """List available format names."""
    return sorted(_renderer_factories().keys())


def get_renderer(name: str) -> Renderer:
    factories = _renderer_factories()
    if name not in factories:
        raise ValueError(f"Unknown format '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def render(records: Sequence[UserRecord], format_spec: Optional[FormatSpec] = None) -> str:
    """Render records with the renderer named by `format_spec.type` (JSON when absent)."""
    renderer = get_renderer(format_spec.type if format_spec else "json")
    return renderer.render(records, format_spec)


__all__ = [
    # Abstracts
    "AbstractRenderer",
    "Renderer",
    "UserRecord",
    # Concrete renderers
    "CsvRenderer",
    "JsonRenderer",
    "SqlRenderer",
    "XmlRenderer",
    # Registry
    "available_formats",
    "get_renderer",
    "render",
]
