"""
Test Suite
==========

Test suite matching the mcp_mermaid/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: MCP protocol tests through an in-memory client session
"""
