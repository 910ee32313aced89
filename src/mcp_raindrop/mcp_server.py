"""MCP server definition: binds the Raindrop facade to a low-level ``mcp`` Server."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from . import __version__
from .dispatcher import to_call_tool_result
from .service import SERVER_NAME, RaindropMcpService

INSTRUCTIONS = (
    "Access and manage Raindrop.io bookmarks, collections, tags and highlights. "
    "List and search tools return resource links; read mcp://collection/{id} or "
    "mcp://raindrop/{id} to load full details."
)


def create_mcp_server(service: RaindropMcpService) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__, instructions=INSTRUCTIONS)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        # outputSchema is left off the wire: results are content lists, not structured output.
        return [
            types.Tool(
                name=tool.name,
                title=tool.title,
                description=tool.description,
                inputSchema=tool.describe_input(),
            )
            for tool in service.tools
            if tool.description
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        result = await service.call_tool(name, arguments)
        return to_call_tool_result(result)

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=r.uri,
                name=r.title,
                title=r.title,
                description=r.description,
                mimeType=r.mime_type,
            )
            for r in service.resolver.static_resources
        ]

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=p.uri_template,
                name=p.title,
                title=p.title,
                description=p.description,
                mimeType="application/json",
            )
            for p in service.resolver.templates
        ]

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        result = await service.read_resource(str(uri))
        return [
            ReadResourceContents(content=item.text, mime_type=item.mimeType)
            for item in result.contents
            if isinstance(item, types.TextResourceContents)
        ]

    return server


async def run_stdio(service: RaindropMcpService) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    server = create_mcp_server(service)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await service.aclose()
