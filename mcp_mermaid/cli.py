"""
Command Line Interface
======================

Entry point of the ``mcp-mermaid`` console script.

Usage:
    mcp-mermaid [--transport stdio|sse|streamable] [--port PORT] [--endpoint PATH] [--host HOST]
"""

from typing import List, Optional
import argparse
import asyncio

from mcp_mermaid import __version__
from mcp_mermaid.config.logging import get_logger, setup_logging
from mcp_mermaid.config.settings import get_settings
from mcp_mermaid.transports.factory import TRANSPORT_NAMES, create_transport, run_server

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mcp-mermaid",
        description="MCP server generating mermaid diagrams and charts.",
    )
    parser.add_argument(
        "-t",
        "--transport",
        choices=TRANSPORT_NAMES,
        default=None,
        help="Transport protocol (default: settings, stdio)",
    )
    parser.add_argument(
        "-p", "--port", type=int, default=None, help="Port for SSE or streamable transport (default: 3033)"
    )
    parser.add_argument(
        "-e",
        "--endpoint",
        default=None,
        help="Endpoint path: /sse for SSE, /mcp for streamable (default)",
    )
    parser.add_argument("--host", default=None, help="Bind address for HTTP transports")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and serve until interrupted."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    transport = create_transport(
        args.transport or settings.transport,
        settings,
        endpoint=args.endpoint,
        port=args.port,
        host=args.host,
    )

    try:
        asyncio.run(run_server(transport, settings))
    except KeyboardInterrupt:
        # In-flight invocations are dropped on interrupt
        logger.info("Interrupted, shutting down")
    return 0
