"""
Transports
==========

Strategies that attach a constructed MCP server to a wire transport.

- stdio: Line-oriented JSON-RPC over standard input/output
- sse: Server-Sent Events stream with a POST message endpoint
- streamable: Streamable HTTP endpoint
"""

from mcp_mermaid.transports.base import HTTPTransport, Transport
from mcp_mermaid.transports.factory import create_transport, run_server
from mcp_mermaid.transports.sse import SSETransport
from mcp_mermaid.transports.stdio import StdioTransport
from mcp_mermaid.transports.streamable_http import StreamableHTTPTransport

__all__ = [
    "HTTPTransport",
    "Transport",
    "create_transport",
    "run_server",
    "SSETransport",
    "StdioTransport",
    "StreamableHTTPTransport",
]
