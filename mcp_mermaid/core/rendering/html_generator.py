"""
HTML Generator
==============

Builds the HTML page that hosts mermaid.js while a diagram is rendered.
"""

from typing import Any

import jinja2

from mcp_mermaid.config.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BACKGROUND_COLOR = "white"
CONTAINER_ID = "container"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    html, body { margin: 0; padding: 0; background: transparent; }
    #{{ container_id }} { display: inline-block; }
    svg { background: {{ background_color }}; }
  </style>
</head>
<body>
  <div id="{{ container_id }}"></div>
</body>
</html>
"""


class HTMLGenerationError(Exception):
    """Exception raised when HTML generation fails."""

    pass


class MermaidPageGenerator:
    """Jinja2-based generator for the mermaid host page."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(generator="jinja2")
        self.env = jinja2.Environment(
            loader=jinja2.DictLoader({"mermaid.html": PAGE_TEMPLATE}),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
        )

    def generate(self, background_color: str = DEFAULT_BACKGROUND_COLOR) -> str:
        """
        Render the host page.

        Args:
            background_color: CSS color applied behind the diagram

        Returns:
            HTML document as a string
        """
        try:
            template = self.env.get_template("mermaid.html")
            return template.render(container_id=CONTAINER_ID, background_color=background_color)
        except jinja2.TemplateError as e:
            self.logger.error("Page generation failed", error=str(e))
            raise HTMLGenerationError(f"Page generation failed: {e}") from e
