"""MCP interface — exposes the thinking tools to other agents.

Exposes up to 2 tools (each can be disabled in Settings):
  actor-critic-thinking  - Alternate actor and critic thoughts in rounds
  reflexion-thinking     - Actor -> evaluator -> self-reflection trials

Uses the mcp library's low-level Server. Two transports:
  stdio            - run_stdio()
  Streamable HTTP  - create_http_app(), mounted at /mcp on a Starlette app
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.routing import Mount

from dialectic.api.tools import ToolDispatcher
from dialectic.config import Settings

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised from call_tool so the SDK flags the response with isError."""


def create_mcp_server(dispatcher: ToolDispatcher, settings: Settings) -> Server:
    """Create the MCP server with the dispatcher's tools."""
    server = Server(settings.server_name, version=settings.server_version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["input_schema"],
            )
            for definition in dispatcher.tool_definitions()
        ]

    # The handlers own input validation; SDK-side schema checks would turn
    # business-level rejections into protocol errors.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Route tool calls through the dispatcher."""
        text, is_error = await dispatcher.dispatch(name, arguments or {})
        if is_error:
            logger.warning("MCP tool %s failed: %s", name, text)
            raise ToolCallError(text)
        return [TextContent(type="text", text=text)]

    return server


async def run_stdio(server: Server) -> None:
    """Serve on stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("%s MCP Server running on stdio", server.name)
        await server.run(read_stream, write_stream, server.create_initialization_options())


def create_http_app(server: Server) -> Starlette:
    """Build a Starlette app serving the MCP server at /mcp (Streamable HTTP).

    The session manager's task group lives for the app lifespan.
    """
    session_manager = StreamableHTTPSessionManager(server)

    async def mcp_asgi(scope, receive, send):
        await session_manager.handle_request(scope, receive, send)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("%s MCP Server mounted at /mcp", server.name)
            yield
        logger.info("MCP session manager stopped")

    app = Starlette(routes=[Mount("/mcp", app=mcp_asgi)], lifespan=lifespan)
    app.state.mcp_manager = session_manager
    return app
