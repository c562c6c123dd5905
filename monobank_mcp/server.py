"""MCP stdio server exposing the Monobank tool catalog."""

from __future__ import annotations

import logging
from typing import Any

from anyio import to_thread
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from monobank_mcp.dispatcher import ToolDispatcher
from monobank_mcp.errors import MonobankToolError
from monobank_mcp.output import describe_failure, render_payload_text
from monobank_mcp.tools import list_tools

SERVER_NAME = "monobank"
SERVER_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


class ToolCallFailed(RuntimeError):
    """Raised to the MCP layer so the call is reported as an error result."""


def invoke_tool(
    dispatcher: ToolDispatcher,
    name: str,
    arguments: dict[str, Any] | None,
) -> list[types.TextContent]:
    """Run one tool call and wrap its payload in a single text content block."""
    payload = dispatcher.dispatch(name, arguments)
    return [types.TextContent(type="text", text=render_payload_text(payload))]


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Build the low-level MCP server with list/call handlers bound to a dispatcher."""
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return list_tools()

    # Arguments are validated by the dispatcher so failures carry field names.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        try:
            return await to_thread.run_sync(invoke_tool, dispatcher, name, arguments)
        except MonobankToolError as error:
            message = describe_failure(error)
            logger.warning("Tool '%s' failed: %s", name, message)
            raise ToolCallFailed(message) from error

    return server


async def run_stdio_server(dispatcher: ToolDispatcher) -> None:
    """Serve the tool catalog over stdin/stdout until the client disconnects."""
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Monobank MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
