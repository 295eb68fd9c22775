"""
MCP Server Implementation
========================

Model Context Protocol server exposing the ``generate_mermaid_diagram`` tool.
``create_server`` builds a fresh, fully wired server; it knows nothing about
transports.
"""

from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.types import CallToolResult, Tool

from mcp_mermaid.config.logging import get_logger
from mcp_mermaid.config.settings import Settings, get_settings
from mcp_mermaid.core.orchestrator import RenderOrchestrator
from mcp_mermaid.core.rendering.backend import RenderBackend
from mcp_mermaid.core.validation import RequestValidator
from mcp_mermaid.mcp_server.handlers import ToolDispatcher
from mcp_mermaid.mcp_server.tools import ToolRegistry, create_default_registry
from mcp_mermaid.models.schemas import InvocationRequest

logger = get_logger(__name__)

SERVER_NAME = "mcp-mermaid"


class MermaidMCPServer:
    """MCP Server for mermaid diagram rendering."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        registry: ToolRegistry,
        backend: RenderBackend,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.dispatcher = dispatcher
        self.registry = registry
        self.backend = backend
        self.logger: Any = logger.bind(component="mcp_server")
        self.server: Server = Server(SERVER_NAME, version=self.settings.app_version)
        self._setup_tools()

    def _setup_tools(self) -> None:
        """Setup MCP tools."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[Tool]:
            """List available MCP tools."""
            return await self.get_tools()

        async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
            """Handle tool execution.

            Registered as a raw request handler so that ProtocolError reaches
            the client as a JSON-RPC error instead of an ``isError`` result.
            """
            result = await self.call_tool(req.params.name, req.params.arguments)
            return types.ServerResult(result)

        self.server.request_handlers[types.CallToolRequest] = handle_call_tool

    # Public API methods, also used by tests
    async def get_tools(self) -> List[Tool]:
        """Get list of available MCP tools."""
        return [descriptor.to_mcp_tool() for descriptor in self.registry.list_tools()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Call a tool by name; raises ProtocolError on failure."""
        request = InvocationRequest(tool_name=name, arguments=arguments or {})
        return await self.dispatcher.dispatch(request)

    def initialization_options(self) -> InitializationOptions:
        """Initialization options announced to clients."""
        return self.server.create_initialization_options()

    async def close(self) -> None:
        """Release the render backend."""
        await self.backend.close()
        self.logger.info("MCP server closed")


def create_server(
    settings: Optional[Settings] = None, backend: Optional[RenderBackend] = None
) -> MermaidMCPServer:
    """
    Build a fresh MCP server with its own registry, pipeline and backend.

    Args:
        settings: Settings to use, the global settings when omitted
        backend: Render backend, a Playwright renderer when omitted

    Returns:
        A fully wired MermaidMCPServer
    """
    settings = settings or get_settings()

    if backend is None:
        from mcp_mermaid.core.rendering.mermaid_renderer import PlaywrightMermaidRenderer

        backend = PlaywrightMermaidRenderer(settings)

    registry = create_default_registry()
    orchestrator = RenderOrchestrator(
        backend,
        render_timeout=settings.render_timeout,
        strict_screenshot=settings.strict_screenshot,
    )
    dispatcher = ToolDispatcher(registry, orchestrator, validator=RequestValidator())

    return MermaidMCPServer(dispatcher, registry, backend, settings)
