"""
MCP server exposing the two Random User tools over stdio.

Built on the MCP SDK's low-level `Server`: the SDK owns the JSON-RPC framing,
the `initialize` handshake, notifications and `ping`. This module registers
`tools/list` and `tools/call`.

`tools/call` is registered directly in `request_handlers` rather than through
the `call_tool()` decorator: the decorator folds every exception into an
`isError` tool result, while tool failures here must reach the caller as
JSON-RPC errors carrying the RandomUserError code.

Usage:
    import anyio
    from randomuser_mcp.infrastructure.client import RandomUserClient
    from randomuser_mcp.server import serve_stdio

    with RandomUserClient() as client:
        anyio.run(serve_stdio, client)
"""

from __future__ import annotations

from typing import List, Optional

import mcp.types as types
from anyio import to_thread
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from randomuser_mcp.config import Settings, get_settings
from randomuser_mcp.errors import INTERNAL_ERROR, RandomUserError
from randomuser_mcp.infrastructure.client import UserSource
from randomuser_mcp.tools import call_tool, list_tool_definitions
from randomuser_mcp.utils.logging import get_logger

log = get_logger(__name__)


def to_mcp_error(exc: RandomUserError) -> McpError:
    return McpError(types.ErrorData(code=exc.code, message=exc.message))


def list_mcp_tools() -> List[types.Tool]:
    """Tool catalogue as MCP `Tool` objects."""
    return [
        types.Tool(
            name=definition.name,
            description=definition.description,
            inputSchema=definition.input_schema,
        )
        for definition in list_tool_definitions()
    ]


def build_server(source: UserSource, settings: Optional[Settings] = None) -> Server:
    """
    Create the MCP server bound to an upstream source.

    Parameters
    ----------
    source : UserSource
        Upstream collaborator handed to every tool call.
    settings : Settings | None
        Server identity; defaults to the cached settings.
    """
    settings = settings or get_settings()
    server: Server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return list_mcp_tools()

    async def _call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        try:
            # Tool handlers are synchronous and block on HTTP.
            text = await to_thread.run_sync(
                call_tool, name, request.params.arguments, source
            )
        except RandomUserError as exc:
            log.warning(
                f"[TOOL FAILED] {exc.message}",
                extra={"tool": name, "code": exc.code, "error_type": type(exc).__name__},
            )
            raise to_mcp_error(exc) from exc
        except Exception as exc:
            log.exception("[TOOL FAILED] unexpected error", extra={"tool": name})
            raise McpError(
                types.ErrorData(code=INTERNAL_ERROR, message=f"Internal error: {exc}")
            ) from exc

        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=text)],
                isError=False,
            )
        )

    server.request_handlers[types.CallToolRequest] = _call_tool
    return server


async def serve_stdio(source: UserSource, settings: Optional[Settings] = None) -> None:
    """Serve MCP on stdin/stdout until the client disconnects."""
    server = build_server(source, settings)
    log.info(
        "Random User MCP server running on stdio",
        extra={"server": server.name, "api_url": getattr(source, "base_url", None)},
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


__all__ = ["build_server", "list_mcp_tools", "serve_stdio", "to_mcp_error"]
