"""
Streamable HTTP Transport
=========================

Streamable HTTP transport backed by the MCP SDK session manager, running in
stateless mode: every request is served independently.
"""

from typing import AsyncGenerator, TYPE_CHECKING
from contextlib import asynccontextmanager

from fastapi import FastAPI
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.types import Receive, Scope, Send

from mcp_mermaid.transports.base import HTTPTransport

if TYPE_CHECKING:
    from mcp_mermaid.mcp_server.server import MermaidMCPServer


class StreamableHTTPEndpoint:
    """Raw ASGI endpoint delegating to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


class StreamableHTTPTransport(HTTPTransport):
    """Serves MCP over a single streamable HTTP endpoint."""

    name = "streamable"

    def __init__(self, endpoint: str = "/mcp", host: str = "0.0.0.0", port: int = 3033) -> None:
        super().__init__(endpoint, host, port)

    def build_app(self, server: "MermaidMCPServer") -> FastAPI:
        session_manager = StreamableHTTPSessionManager(
            app=server.server,
            event_store=None,
            json_response=False,
            stateless=True,
        )

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
            async with session_manager.run():
                yield

        app = FastAPI(
            title=server.settings.app_name,
            lifespan=lifespan,
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )
        app.add_route(
            self.endpoint,
            StreamableHTTPEndpoint(session_manager),
            methods=["GET", "POST", "DELETE"],
            include_in_schema=False,
        )
        return app
