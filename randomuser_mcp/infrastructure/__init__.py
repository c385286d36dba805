"""
Infrastructure package for the Random User MCP server.

Centralizes upstream connectivity. Keep this layer focused on I/O, decoupled
from planning and rendering logic.
"""

from randomuser_mcp.infrastructure.client import RandomUserClient, UserSource

__all__ = [
    "RandomUserClient",
    "UserSource",
]
