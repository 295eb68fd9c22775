"""
Transport Base
==============

Common interface of all transports: attach a constructed server and serve it
until shutdown.
"""

from typing import Any, TYPE_CHECKING
from abc import ABC, abstractmethod

import uvicorn
from fastapi import FastAPI

from mcp_mermaid.config.logging import get_logger

if TYPE_CHECKING:
    from mcp_mermaid.mcp_server.server import MermaidMCPServer

logger = get_logger(__name__)


class Transport(ABC):
    """Strategy that serves a MermaidMCPServer over one wire protocol."""

    name: str = ""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(transport=self.name)

    @abstractmethod
    async def serve(self, server: "MermaidMCPServer") -> None:
        """Serve ``server`` until the transport shuts down."""
        pass


class HTTPTransport(Transport):
    """Transport served by uvicorn from a FastAPI application."""

    def __init__(self, endpoint: str, host: str = "0.0.0.0", port: int = 3033) -> None:
        super().__init__()
        if not endpoint.startswith("/"):
            raise ValueError(f"Endpoint must start with '/': {endpoint}")
        self.endpoint = endpoint
        self.host = host
        self.port = port

    @abstractmethod
    def build_app(self, server: "MermaidMCPServer") -> FastAPI:
        """Build the ASGI application serving ``server``."""
        pass

    async def serve(self, server: "MermaidMCPServer") -> None:
        app = self.build_app(server)
        config = uvicorn.Config(
            app,
            host=self.host,
            port=self.port,
            log_config=None,  # keep the application's logging configuration
        )
        self.logger.info(
            "MCP server starting",
            host=self.host,
            port=self.port,
            endpoint=self.endpoint,
        )
        await uvicorn.Server(config).serve()
        self.logger.info("MCP server stopped")
