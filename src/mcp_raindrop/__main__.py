"""CLI entrypoint."""

from __future__ import annotations

import asyncio

import uvicorn

from .asgi import create_app
from .log import configure_logging, get_logger
from .mcp_server import run_stdio
from .raindrop_client import RaindropClient
from .service import RaindropMcpService
from .settings import Settings


def main() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    logger = get_logger("main")

    if settings.mcp_transport == "stdio":
        logger.info("Starting Raindrop MCP server on stdio")
        service = RaindropMcpService(RaindropClient.from_settings(settings))
        asyncio.run(run_stdio(service))
        return

    logger.info("Starting Raindrop MCP server on http://%s:%s/mcp", settings.mcp_host, settings.mcp_port)
    uvicorn.run(
        create_app(settings),
        host=settings.mcp_host,
        port=settings.mcp_port,
        log_level="warning" if settings.log_level == "warn" else settings.log_level,
    )


if __name__ == "__main__":
    main()
