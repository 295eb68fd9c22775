"""
SSE Transport
=============

Server-Sent Events transport: clients open an event stream with GET on the
SSE endpoint and POST their messages to the message path announced on that
stream.
"""

from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.responses import Response
from mcp.server.sse import SseServerTransport

from mcp_mermaid.transports.base import HTTPTransport

if TYPE_CHECKING:
    from mcp_mermaid.mcp_server.server import MermaidMCPServer


class SSETransport(HTTPTransport):
    """Serves MCP sessions over Server-Sent Events."""

    name = "sse"

    def __init__(
        self,
        endpoint: str = "/sse",
        host: str = "0.0.0.0",
        port: int = 3033,
        message_path: str = "/messages/",
    ) -> None:
        super().__init__(endpoint, host, port)
        self.message_path = message_path

    def build_app(self, server: "MermaidMCPServer") -> FastAPI:
        sse = SseServerTransport(self.message_path)

        async def handle_sse(request: Request) -> Response:
            async with sse.connect_sse(request.scope, request.receive, request._send) as (
                read_stream,
                write_stream,
            ):
                await server.server.run(read_stream, write_stream, server.initialization_options())
            return Response()

        app = FastAPI(title=server.settings.app_name, docs_url=None, redoc_url=None, openapi_url=None)
        app.add_api_route(self.endpoint, handle_sse, methods=["GET"], include_in_schema=False)
        app.mount(self.message_path, app=sse.handle_post_message)
        return app
