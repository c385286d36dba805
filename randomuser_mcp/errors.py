"""
Error taxonomy for the Random User MCP server.

Every error raised on purpose by the pipeline derives from RandomUserError and
carries the JSON-RPC error code the server reports it under.
"""

from __future__ import annotations

from typing import Any, Dict

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class RandomUserError(Exception):
    """Base class for errors surfaced to the tool caller."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_error(self) -> Dict[str, Any]:
        """JSON-RPC error object for this exception."""
        return {"code": self.code, "message": self.message}


class InvalidParamsError(RandomUserError):
    """Tool arguments failed schema-shape validation."""

    code = INVALID_PARAMS


class ToolNotFoundError(RandomUserError):
    """The invocation named a tool this server does not provide."""

    code = METHOD_NOT_FOUND

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class UpstreamTransportError(RandomUserError):
    """Network or HTTP failure talking to the upstream API. Never retried."""

    code = INTERNAL_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(f"API Error: {detail}")
        self.detail = detail


class UpstreamDataShapeError(RandomUserError):
    """The upstream body did not carry a `results` list."""

    code = INTERNAL_ERROR


__all__ = [
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "RandomUserError",
    "InvalidParamsError",
    "ToolNotFoundError",
    "UpstreamTransportError",
    "UpstreamDataShapeError",
]
