"""
Utilities package for the Random User MCP server.

Shared helpers for cross-cutting concerns. Keep this package lightweight and
free of domain-specific logic.
"""

from randomuser_mcp.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
