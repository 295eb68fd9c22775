"""
Rendering Engine
===============

mermaid.js rendering inside a headless Chromium browser.

Components:
- backend: Render backend protocol and rendering errors
- html_generator: HTML page shell hosting mermaid.js
- mermaid_renderer: Playwright browser pool and mermaid renderer
"""

from mcp_mermaid.core.rendering.backend import MermaidRenderError, RenderBackend, RenderTimeoutError

__all__ = ["MermaidRenderError", "RenderBackend", "RenderTimeoutError"]
