"""
Mermaid MCP Server
==================

A Model Context Protocol (MCP) server that renders Mermaid diagram source into
PNG images or SVG markup using a headless Chromium browser.

This package provides:
- A single MCP tool, ``generate_mermaid_diagram``
- Request validation and protocol error mapping
- Playwright-based mermaid.js rendering
- stdio, SSE and streamable HTTP transports
"""

__version__ = "0.1.3"
__author__ = "mcp-mermaid contributors"
