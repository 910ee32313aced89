"""ASGI app hosting the MCP Streamable HTTP endpoint."""

from __future__ import annotations

import contextlib
import secrets
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .log import get_logger
from .mcp_server import create_mcp_server
from .raindrop_client import RaindropClient
from .service import RaindropMcpService
from .settings import Settings

logger = get_logger("http")


class ApiKeyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: Starlette, *, api_key: str) -> None:
        super().__init__(app)
        self._api_key = api_key

    @staticmethod
    def _bypass_auth(path: str) -> bool:
        # Allow unauthenticated health checks and OAuth discovery probes.
        # Some MCP clients probe these endpoints before sending custom headers.
        if path == "/health":
            return True
        if path.startswith("/.well-known/"):
            return True
        return False

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if self._bypass_auth(request.url.path):
            return await call_next(request)
        presented = request.headers.get("x-api-key")
        if not presented or not secrets.compare_digest(presented, self._api_key):
            logger.warning("Rejected request to %s: missing or invalid API key", request.url.path)
            return JSONResponse({"error": "unauthorized"}, status_code=401)
        return await call_next(request)


class MCPRouteHandler:
    """Routes /mcp and /mcp/* to the session manager without a trailing-slash redirect."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        path = scope.get("path", "")
        if path == "/mcp":
            scope = {**scope, "path": "/"}
        elif path.startswith("/mcp/"):
            scope = {**scope, "path": path[4:]}
        await self.session_manager.handle_request(scope, receive, send)


def create_app(settings: Settings | None = None) -> Starlette:
    settings = settings or Settings()
    if not settings.mcp_api_key:
        raise ValueError("MCP_API_KEY must be set for the HTTP transport")

    service = RaindropMcpService(RaindropClient.from_settings(settings))
    session_manager = StreamableHTTPSessionManager(
        app=create_mcp_server(service),
        event_store=None,
        json_response=True,
        stateless=True,
    )

    async def health(_: Request) -> Response:
        return JSONResponse({"ok": await service.health_check()})

    @contextlib.asynccontextmanager
    async def lifespan(_: Starlette) -> AsyncIterator[None]:
        try:
            async with session_manager.run():
                yield
        finally:
            await service.aclose()

    mcp_handler = MCPRouteHandler(session_manager)
    app = Starlette(
        routes=[
            Route("/health", endpoint=health, methods=["GET"]),
            Route("/mcp", mcp_handler, methods=["GET", "POST", "DELETE"]),
            Route("/mcp/{path:path}", mcp_handler, methods=["GET", "POST", "DELETE"]),
        ],
        lifespan=lifespan,
    )
    app.add_middleware(ApiKeyMiddleware, api_key=settings.mcp_api_key)
    app.state.service = service
    return app
