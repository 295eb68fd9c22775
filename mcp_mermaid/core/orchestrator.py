"""
Render Orchestrator
===================

Invokes the render backend with validated arguments and shapes the backend
result into one of three tool responses.
"""

from typing import Any, Optional, Union
import asyncio
import base64

from mcp.types import CallToolResult, ImageContent, TextContent

from mcp_mermaid.config.logging import get_logger
from mcp_mermaid.core.rendering.backend import MermaidRenderError, RenderBackend, RenderTimeoutError
from mcp_mermaid.models.schemas import OutputType, RenderResult, ValidatedArguments

logger = get_logger(__name__)

PNG_MIME_TYPE = "image/png"

ContentItem = Union[TextContent, ImageContent]


class RenderOrchestrator:
    """Runs one render and builds the tool response."""

    def __init__(
        self,
        backend: RenderBackend,
        render_timeout: Optional[float] = None,
        strict_screenshot: bool = False,
    ) -> None:
        self.backend = backend
        self.render_timeout = render_timeout or None
        self.strict_screenshot = strict_screenshot
        self.logger: Any = logger.bind(component="render_orchestrator")

    async def render(self, args: ValidatedArguments) -> CallToolResult:
        """
        Render the diagram and shape the response by output type.

        Args:
            args: Validated tool arguments

        Returns:
            CallToolResult with exactly one content item

        Raises:
            MermaidRenderError: If the backend fails or times out
        """
        output_type = args.resolved_output_type
        self.logger.info(
            "Tool call input",
            mermaid=args.mermaid_source,
            theme=args.theme,
            background_color=args.background_color,
            output_type=output_type.value,
        )

        result = await self._call_backend(args)

        if output_type is OutputType.MERMAID:
            item: ContentItem = TextContent(type="text", text=args.mermaid_source)
        elif output_type is OutputType.SVG:
            item = TextContent(type="text", text=result.svg)
        else:
            item = ImageContent(type="image", data=self._encode_screenshot(result), mimeType=PNG_MIME_TYPE)

        self.logger.info(
            "Tool call output",
            output_type=output_type.value,
            content_type=item.type,
            content_length=len(item.text) if isinstance(item, TextContent) else len(item.data),
        )

        return CallToolResult(content=[item])

    async def _call_backend(self, args: ValidatedArguments) -> RenderResult:
        call = self.backend.render(args.mermaid_source, args.theme, args.background_color)
        if self.render_timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.render_timeout)
        except asyncio.TimeoutError as e:
            raise RenderTimeoutError(f"Rendering timed out after {self.render_timeout:g}s") from e

    def _encode_screenshot(self, result: RenderResult) -> str:
        if result.screenshot:
            return base64.b64encode(result.screenshot).decode("utf-8")
        if self.strict_screenshot:
            raise MermaidRenderError("Renderer returned no screenshot")
        self.logger.warning("Renderer returned no screenshot, sending empty image", diagram_id=result.id)
        return ""
