"""
Render Backend Interface
========================

Contract between the request pipeline and whatever turns mermaid source into
SVG markup and a PNG screenshot.
"""

from typing import Optional, Protocol, runtime_checkable

from mcp_mermaid.models.schemas import RenderResult


class MermaidRenderError(Exception):
    """Exception raised when a diagram cannot be rendered."""

    pass


class RenderTimeoutError(MermaidRenderError):
    """Exception raised when rendering exceeds the configured timeout."""

    pass


@runtime_checkable
class RenderBackend(Protocol):
    """Renders mermaid source.

    Implementations may be called concurrently by independent invocations and
    must either serialize internally or be safe for concurrent renders.
    """

    async def render(
        self,
        mermaid: str,
        theme: Optional[str] = None,
        background_color: Optional[str] = None,
    ) -> RenderResult:
        """Render diagram source, raising MermaidRenderError on failure."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...
