"""
MCP Server - Serve the tool registry over the Model Context Protocol.

Each registered tool is advertised with its strict input schema and its
capability hints. Tool failures travel back as results flagged isError;
only a missing API token aborts the call.

Example:
    registry = create_registry(HetznerConnector(config))
    await serve_stdio(registry)
"""

from typing import Any

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .errors import UnknownToolError
from .tools import Tool, ToolRegistry

__all__ = ["SERVER_NAME", "build_server", "serve_stdio", "to_mcp_tool"]

logger = structlog.get_logger(__name__)

SERVER_NAME = "hetzner-mcp-server"


def to_mcp_tool(tool_cls: type[Tool]) -> types.Tool:
    """MCP definition of a tool class."""
    hints = tool_cls.get_annotations()
    return types.Tool(
        name=tool_cls.get_name(),
        title=tool_cls.get_title(),
        description=tool_cls.get_description(),
        inputSchema=tool_cls.input_schema(),
        annotations=types.ToolAnnotations(title=tool_cls.get_title(), **hints),
    )


def _text_result(text: str, is_error: bool) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


def build_server(registry: ToolRegistry) -> Server:
    """Create an MCP server bound to a registry."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(tool_cls) for tool_cls in registry.tools()]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        try:
            result = await registry.call(name, arguments)
        except UnknownToolError as e:
            return _text_result(f"Error: {e}", is_error=True)
        return _text_result(result.text, is_error=result.is_error)

    return server


async def serve_stdio(registry: ToolRegistry) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    server = build_server(registry)
    logger.info("mcp_server_starting", server=SERVER_NAME, tools=len(registry))

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await registry.client.close()
        logger.info("mcp_server_stopped")
