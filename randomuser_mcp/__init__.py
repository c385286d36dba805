"""
Random User MCP - tool server over the randomuser.me identity API.

Exposes two tools, `get_random_user` and `get_multiple_users`, as an MCP
server on stdio:

- Translates tool arguments into upstream query parameters
- Splits multi-user requests across weighted nationalities and genders
- Flattens and normalizes upstream records
- Renders the combined result as JSON, CSV, SQL INSERT statements or XML
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from randomuser_mcp.config import Settings, get_settings
from randomuser_mcp.errors import (
    InvalidParamsError,
    RandomUserError,
    ToolNotFoundError,
    UpstreamDataShapeError,
    UpstreamTransportError,
)
from randomuser_mcp.infrastructure.client import RandomUserClient, UserSource
from randomuser_mcp.orchestrator import build_request_plan, get_multiple_users, get_random_user
from randomuser_mcp.planner import plan_distribution
from randomuser_mcp.renderers import available_formats, render
from randomuser_mcp.server import build_server, serve_stdio
from randomuser_mcp.tools import call_tool, list_tool_specs
from randomuser_mcp.transforms import flatten_record
from randomuser_mcp.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "RandomUserError",
    "InvalidParamsError",
    "ToolNotFoundError",
    "UpstreamTransportError",
    "UpstreamDataShapeError",
    # Upstream
    "RandomUserClient",
    "UserSource",
    # Pipeline
    "build_request_plan",
    "get_multiple_users",
    "get_random_user",
    "plan_distribution",
    "flatten_record",
    "available_formats",
    "render",
    # Protocol surface
    "build_server",
    "serve_stdio",
    "call_tool",
    "list_tool_specs",
    # Logging
    "configure_logging",
    "get_logger",
]
