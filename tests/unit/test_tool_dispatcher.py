"""
Unit Tests for Tool Dispatcher
==============================

Tests for routing invocations through name check, validation and rendering.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_mermaid.core.errors import ErrorCode, ProtocolError
from mcp_mermaid.core.orchestrator import RenderOrchestrator
from mcp_mermaid.core.rendering.backend import MermaidRenderError
from mcp_mermaid.mcp_server.handlers import ToolDispatcher
from mcp_mermaid.mcp_server.tools import MERMAID_TOOL_NAME
from mcp_mermaid.models.schemas import InvocationRequest

from tests.utils import (
    FailingRenderBackend,
    MOCK_PNG_BYTES,
    assert_png_response,
    assert_protocol_error,
    assert_text_response,
)


def make_request(arguments, tool_name: str = MERMAID_TOOL_NAME) -> InvocationRequest:
    return InvocationRequest(tool_name=tool_name, arguments=arguments)


class TestToolDispatcher:
    """Test end-to-end dispatch against the mock backend."""

    @pytest.mark.asyncio
    async def test_svg_flowchart(self, dispatcher):
        """Test svg output for a simple flowchart."""
        result = await dispatcher.dispatch(
            make_request({"mermaid": "graph TD; A-->B", "outputType": "svg"})
        )

        assert assert_text_response(result).startswith("<svg")

    @pytest.mark.asyncio
    async def test_mermaid_echo_sequence(self, dispatcher):
        """Test mermaid output echoes a sequence diagram unchanged."""
        source = "sequenceDiagram\nAlice->>Bob: Hello"

        result = await dispatcher.dispatch(make_request({"mermaid": source, "outputType": "mermaid"}))

        assert_text_response(result, source)

    @pytest.mark.asyncio
    async def test_png_default(self, dispatcher):
        """Test png is the default output type."""
        result = await dispatcher.dispatch(make_request({"mermaid": "graph TD; A-->B"}))

        assert_png_response(result, MOCK_PNG_BYTES)

    @pytest.mark.asyncio
    async def test_png_with_theme_and_transparent_background(self, dispatcher, mock_backend):
        """Test theme and background color reach the backend."""
        result = await dispatcher.dispatch(
            make_request(
                {
                    "mermaid": "graph LR; X-->Y",
                    "theme": "dark",
                    "backgroundColor": "transparent",
                    "outputType": "png",
                }
            )
        )

        assert_png_response(result)
        assert mock_backend.calls == [("graph LR; X-->Y", "dark", "transparent")]

    @pytest.mark.asyncio
    async def test_missing_mermaid(self, dispatcher, mock_backend):
        """Test missing source is InvalidParams and never renders."""
        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({}))

        assert_protocol_error(exc_info.value, ErrorCode.INVALID_PARAMS, "Invalid parameters")
        assert "mermaid" in exc_info.value.message
        assert mock_backend.calls == []

    @pytest.mark.asyncio
    async def test_invalid_output_type(self, dispatcher, mock_backend):
        """Test unsupported output types are InvalidParams."""
        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({"mermaid": "graph TD; A-->B", "outputType": "jpeg"}))

        assert_protocol_error(exc_info.value, ErrorCode.INVALID_PARAMS, "outputType")
        assert mock_backend.calls == []

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher, mock_backend):
        """Test unknown tool names are MethodNotFound and never validate or render."""
        validator = MagicMock()
        dispatcher.validator = validator

        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({"mermaid": "graph TD; A-->B"}, "not_a_real_tool"))

        assert_protocol_error(exc_info.value, ErrorCode.METHOD_NOT_FOUND)
        assert exc_info.value.message == "Unknown tool: not_a_real_tool."
        validator.validate.assert_not_called()
        assert mock_backend.calls == []

    @pytest.mark.asyncio
    async def test_unknown_tool_with_bad_arguments(self, dispatcher):
        """Test the name check runs before validation."""
        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({"outputType": "gif"}, "not_a_real_tool"))

        assert exc_info.value.code is ErrorCode.METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_backend_failure(self, registry):
        """Test backend errors become InternalError with their message."""
        backend = FailingRenderBackend(MermaidRenderError("Parse error on line 1"))
        dispatcher = ToolDispatcher(registry, RenderOrchestrator(backend))

        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({"mermaid": "graph TD; A-->"}))

        assert_protocol_error(exc_info.value, ErrorCode.INTERNAL_ERROR)
        assert exc_info.value.message == "Failed to generate mermaid: Parse error on line 1"
        assert isinstance(exc_info.value.__cause__, MermaidRenderError)
        assert backend.calls == 1

    @pytest.mark.asyncio
    async def test_backend_failure_without_message(self, registry):
        """Test message-less backend errors use the fallback text."""
        dispatcher = ToolDispatcher(registry, RenderOrchestrator(FailingRenderBackend(RuntimeError())))

        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({"mermaid": "graph TD; A-->B"}))

        assert exc_info.value.message == "Failed to generate mermaid: Unknown error."

    @pytest.mark.asyncio
    async def test_classified_error_passthrough(self, registry):
        """Test an already classified error keeps its code."""
        original = ProtocolError(ErrorCode.INVALID_PARAMS, "Invalid parameters: theme: unsupported")
        orchestrator = MagicMock()
        orchestrator.render = AsyncMock(side_effect=original)
        dispatcher = ToolDispatcher(registry, orchestrator)

        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.dispatch(make_request({"mermaid": "graph TD; A-->B"}))

        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_resubmission_after_error(self, dispatcher):
        """Test a failed invocation leaves no state behind."""
        with pytest.raises(ProtocolError):
            await dispatcher.dispatch(make_request({"mermaid": "", "outputType": "svg"}))

        result = await dispatcher.dispatch(
            make_request({"mermaid": "graph TD; A-->B", "outputType": "svg"})
        )

        assert_text_response(result)

    @pytest.mark.asyncio
    async def test_svg_is_idempotent(self, dispatcher):
        """Test identical svg requests return identical markup."""
        request = make_request({"mermaid": "graph TD; A-->B", "outputType": "svg"})

        first = await dispatcher.dispatch(request)
        second = await dispatcher.dispatch(request)

        assert assert_text_response(first) == assert_text_response(second)
