"""MCP server wiring for the Storx tools.

The low-level ``mcp`` server owns the transport and session. This module only
registers two request handlers: tool discovery and tool calls. Tool calls run
the blocking boto3 work in a worker thread and raise ``McpError`` for failed
dispatches, so clients receive a JSON-RPC error rather than a tool result.
"""

from typing import List

import anyio
import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .core import get_logger
from .dispatcher import Dispatcher, ToolFailure
from .registry import ToolRegistry
from .schemas import ToolDefinition

logger = get_logger(__name__)

SERVER_NAME = "storx-mcp-server"


def to_mcp_tool(definition: ToolDefinition) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=dict(definition.input_schema),
    )


def create_server(dispatcher: Dispatcher) -> Server:
    """Build an MCP server that serves ``dispatcher``'s registry."""
    server: Server = Server(SERVER_NAME, version=__version__)
    registry: ToolRegistry = dispatcher.registry

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [to_mcp_tool(definition) for definition in registry.list()]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        arguments = request.params.arguments or {}

        outcome = await anyio.to_thread.run_sync(dispatcher.dispatch, name, arguments)
        if isinstance(outcome, ToolFailure):
            outcome.raise_for_protocol()

        return types.ServerResult(
            types.CallToolResult(
                content=[
                    types.TextContent(type="text", text=item.text)
                    for item in outcome.content
                ],
                isError=False,
            )
        )

    # Registered directly so McpError reaches the session as a protocol error
    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def run_stdio(server: Server) -> None:
    """Serve ``server`` over stdin/stdout until the client disconnects."""
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Storx MCP server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
