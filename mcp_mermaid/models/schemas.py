"""
Pydantic Models and Schemas
===========================

Core data models for tool declarations, invocation requests, validated tool
arguments and render results.
"""

from typing import Optional, List, Dict, Any
from enum import Enum

from mcp.types import Tool
from pydantic import BaseModel, ConfigDict, Field, StrictStr


# Enums
class OutputType(str, Enum):
    """Response representation requested by the caller."""
    PNG = "png"
    SVG = "svg"
    MERMAID = "mermaid"


# Tool Models
class ToolDescriptor(BaseModel):
    """Static declaration of a callable tool."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Tool name")
    description: str = Field(..., description="Human readable description")
    input_schema: Dict[str, Any] = Field(..., description="JSON schema of the tool arguments")

    def to_mcp_tool(self) -> Tool:
        """Convert to the MCP wire representation."""
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


class InvocationRequest(BaseModel):
    """A single tool invocation as received from a transport."""
    tool_name: str = Field(..., description="Requested tool name")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Raw tool arguments")


class ValidatedArguments(BaseModel):
    """Strongly typed arguments of the mermaid tool.

    Field aliases are the wire names. Instances only come out of a successful
    validation; ``output_type`` stays ``None`` when the caller omitted it.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    mermaid_source: StrictStr = Field(..., alias="mermaid", min_length=1)
    theme: Optional[StrictStr] = Field(None, alias="theme")
    background_color: Optional[StrictStr] = Field(None, alias="backgroundColor")
    output_type: Optional[OutputType] = Field(None, alias="outputType")

    @property
    def resolved_output_type(self) -> OutputType:
        """Requested output type, defaulting to PNG."""
        return self.output_type or OutputType.PNG


class Violation(BaseModel):
    """A single schema violation."""
    field: str = Field(..., description="Offending argument name")
    reason: str = Field(..., description="Why the value was rejected")


class ValidationResult(BaseModel):
    """Result of validating a raw argument bag."""
    success: bool = Field(..., description="Whether validation succeeded")
    arguments: Optional[ValidatedArguments] = Field(None, description="Validated arguments")
    violations: List[Violation] = Field(default_factory=list, description="Schema violations")


# Rendering Models
class RenderResult(BaseModel):
    """Output of the render backend."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Diagram element id")
    svg: str = Field(..., description="Rendered SVG markup")
    screenshot: Optional[bytes] = Field(None, description="PNG screenshot of the diagram", repr=False)
