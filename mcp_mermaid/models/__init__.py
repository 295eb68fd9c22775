"""
Data Models
===========

Pydantic models shared by the MCP server, the request pipeline and the renderer.
"""
