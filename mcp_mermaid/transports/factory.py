"""
Transport Factory
=================

Selects a transport strategy by name and runs a freshly built server on it.
"""

from typing import Callable, Optional

from mcp_mermaid.config.logging import get_logger
from mcp_mermaid.config.settings import Settings, get_settings
from mcp_mermaid.mcp_server.server import MermaidMCPServer, create_server
from mcp_mermaid.transports.base import Transport
from mcp_mermaid.transports.sse import SSETransport
from mcp_mermaid.transports.stdio import StdioTransport
from mcp_mermaid.transports.streamable_http import StreamableHTTPTransport

logger = get_logger(__name__)

TRANSPORT_NAMES = ("stdio", "sse", "streamable")

ServerFactory = Callable[[Optional[Settings]], MermaidMCPServer]


def create_transport(
    name: str,
    settings: Optional[Settings] = None,
    endpoint: Optional[str] = None,
    port: Optional[int] = None,
    host: Optional[str] = None,
) -> Transport:
    """
    Create a transport strategy.

    Arguments left as None fall back to settings.

    Args:
        name: Transport name: stdio, sse or streamable
        settings: Settings providing defaults
        endpoint: URL path for HTTP transports
        port: Port for HTTP transports
        host: Bind address for HTTP transports

    Returns:
        Transport instance

    Raises:
        ValueError: If the transport name is unknown
    """
    settings = settings or get_settings()
    transport_type = name.lower()
    host = host if host is not None else settings.host
    port = port if port is not None else settings.port

    if transport_type == "stdio":
        return StdioTransport()
    elif transport_type == "sse":
        return SSETransport(
            endpoint or settings.sse_endpoint,
            host,
            port,
            message_path=settings.sse_message_path,
        )
    elif transport_type == "streamable":
        return StreamableHTTPTransport(endpoint or settings.http_endpoint, host, port)
    else:
        raise ValueError(f"Unsupported transport type: {name}")


async def run_server(
    transport: Transport,
    settings: Optional[Settings] = None,
    server_factory: ServerFactory = create_server,
) -> None:
    """Build a server, serve it on ``transport`` and close it afterwards."""
    server = server_factory(settings)
    try:
        await transport.serve(server)
    finally:
        await server.close()
        logger.info("Server shut down", transport=transport.name)
