"""
MCP Server Tools
================

Declaration of the mermaid tool and the registry the server lists it from.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from mcp_mermaid.models.schemas import OutputType, ToolDescriptor

MERMAID_TOOL_NAME = "generate_mermaid_diagram"

MERMAID_TOOL_DESCRIPTION = (
    "Generate mermaid diagram and chart with MERMAID syntax dynamically. Mermaid is a "
    "JavaScript based diagramming and charting tool that uses Markdown-inspired text "
    "definitions and a renderer to create and modify complex diagrams."
)

MERMAID_THEMES = ("default", "base", "forest", "dark", "neutral")

MERMAID_INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "mermaid": {
            "type": "string",
            "description": (
                "The mermaid diagram syntax used to be generated, such as: graph TD;\n"
                "A-->B;\nA-->C;\nB-->D;\nC-->D;."
            ),
            "minLength": 1,
        },
        "theme": {
            "type": "string",
            "description": f"Theme for the diagram (optional). One of: {', '.join(MERMAID_THEMES)}.",
            "default": "default",
        },
        "backgroundColor": {
            "type": "string",
            "description": (
                "Background color for the diagram (optional). A CSS color such as "
                "'white', '#F0F0F0' or 'transparent'."
            ),
            "default": "white",
        },
        "outputType": {
            "type": "string",
            "enum": [t.value for t in OutputType],
            "description": (
                "The output type of the diagram. Can be 'png', 'svg' or 'mermaid'. "
                "Default is 'png'."
            ),
            "default": OutputType.PNG.value,
        },
    },
    "required": ["mermaid"],
}


def build_mermaid_tool_descriptor() -> ToolDescriptor:
    """Descriptor of the single mermaid rendering tool."""
    return ToolDescriptor(
        name=MERMAID_TOOL_NAME,
        description=MERMAID_TOOL_DESCRIPTION,
        input_schema=MERMAID_INPUT_SCHEMA,
    )


class ToolRegistry:
    """Read-only set of tool descriptors, populated once at startup."""

    def __init__(self, descriptors: Iterable[ToolDescriptor]) -> None:
        self._descriptors: Tuple[ToolDescriptor, ...] = tuple(descriptors)

    def list_tools(self) -> List[ToolDescriptor]:
        """Return the declared descriptors in declaration order."""
        return list(self._descriptors)

    def get(self, name: str) -> Optional[ToolDescriptor]:
        """Return the descriptor with the given name, if any."""
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None


def create_default_registry() -> ToolRegistry:
    """Registry holding only the mermaid tool."""
    return ToolRegistry([build_mermaid_tool_descriptor()])
