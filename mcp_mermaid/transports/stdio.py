"""
Stdio Transport
===============

JSON-RPC over standard input/output.
"""

from typing import TYPE_CHECKING

from mcp.server.stdio import stdio_server

from mcp_mermaid.transports.base import Transport

if TYPE_CHECKING:
    from mcp_mermaid.mcp_server.server import MermaidMCPServer


class StdioTransport(Transport):
    """Serves one client over the process's stdin/stdout."""

    name = "stdio"

    async def serve(self, server: "MermaidMCPServer") -> None:
        async with stdio_server() as (read_stream, write_stream):
            self.logger.info("MCP server starting with stdio transport")
            await server.server.run(read_stream, write_stream, server.initialization_options())
        self.logger.info("MCP server stopped")
