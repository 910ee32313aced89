"""Server facade: tool/resource catalogs, tool calls, resource reads, introspection."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from mcp import types

from . import __version__
from .dispatcher import Dispatcher
from .errors import NotFoundError, RaindropApiError
from .log import ContextLogger, get_logger
from .models import ResourceInfo, ServerInfo, ToolInfo
from .raindrop_client import RaindropClient
from .resources import DYNAMIC_PATTERNS, DynamicResourcePattern, ResourceResolver, StaticResource
from .tools import TOOLS, ToolDescriptor

SERVER_NAME = "raindrop-mcp"
SERVER_DESCRIPTION = "MCP Server for Raindrop.io with advanced interactive capabilities"

# Advertised only; enforcement belongs to the transport or the individual tools.
CAPABILITIES: dict[str, Any] = {
    "logging": False,
    "discovery": True,
    "errorStandardization": True,
    "sessionInfo": True,
    "toolChaining": True,
    "schemaExport": True,
    "promptManagement": True,
    "resources": True,
    "sampling": {
        "supported": True,
        "description": "All list/search tools support sampling and pagination.",
    },
    "elicitation": {
        "supported": True,
        "description": "Destructive and ambiguous actions require confirmation or clarification.",
    },
}


def build_static_resources() -> dict[str, StaticResource]:
    resources = [
        StaticResource.from_payload(
            "mcp://user/profile",
            {"profile": "User profile information from Raindrop.io"},
        ),
        StaticResource.from_payload(
            "diagnostics://server",
            {
                "diagnostics": "Server diagnostics and environment info",
                "version": __version__,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        ),
    ]
    return {r.uri: r for r in resources}


class RaindropMcpService:
    """Exposes the Raindrop tools and resources to whatever transport hosts MCP."""

    def __init__(
        self,
        raindrop: RaindropClient,
        *,
        tools: tuple[ToolDescriptor, ...] = TOOLS,
        patterns: tuple[DynamicResourcePattern, ...] = DYNAMIC_PATTERNS,
        logger: logging.Logger | ContextLogger | None = None,
    ) -> None:
        self.raindrop = raindrop
        self._logger = logger or get_logger("service")
        self._tools = {tool.name: tool for tool in tools}
        if len(self._tools) != len(tools):
            raise ValueError("Tool names must be unique")
        self._dispatcher = Dispatcher(raindrop)
        self._resolver = ResourceResolver(raindrop, build_static_resources(), patterns=patterns)

    @property
    def tools(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    @property
    def resolver(self) -> ResourceResolver:
        return self._resolver

    def list_tools(self) -> list[ToolInfo]:
        return [
            ToolInfo(
                id=tool.name,
                name=tool.title,
                description=tool.description,
                input_schema=tool.describe_input(),
                output_schema=tool.describe_output(),
            )
            for tool in self._tools.values()
            if tool.description
        ]

    async def call_tool(
        self,
        tool_id: str,
        arguments: dict[str, Any] | None = None,
        extra: dict[str, Any] | None = None,
    ) -> Any:
        tool = self._tools.get(tool_id)
        if tool is None:
            raise NotFoundError(f'Tool with id "{tool_id}" not found.')
        return await self._dispatcher.dispatch(tool, arguments or {}, extra)

    def list_resources(self) -> list[ResourceInfo]:
        return self._resolver.list_resources()

    async def read_resource(self, uri: str) -> types.ReadResourceResult:
        return await self._resolver.read(uri)

    async def health_check(self, *, probe: bool = False) -> bool:
        """Liveness by default; ``probe=True`` also checks Raindrop connectivity."""
        if not probe:
            return True
        try:
            await self.raindrop.get_user_info()
        except (RaindropApiError, httpx.HTTPError) as exc:
            self._logger.warning("Raindrop connectivity probe failed: %s", exc)
            return False
        return True

    def get_info(self) -> ServerInfo:
        return ServerInfo(name=SERVER_NAME, version=__version__, description=SERVER_DESCRIPTION)

    def get_manifest(self) -> dict[str, Any]:
        return {
            **self.get_info().model_dump(),
            "capabilities": CAPABILITIES,
            "tools": [tool.model_dump(by_alias=True) for tool in self.list_tools()],
        }

    async def aclose(self) -> None:
        await self.raindrop.aclose()
