"""
MCP Server Implementation
========================

Model Context Protocol server exposing a single tool:
- generate_mermaid_diagram: Render mermaid source to PNG, SVG, or echo it back
"""
