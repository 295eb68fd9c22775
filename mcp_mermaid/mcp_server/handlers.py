"""
MCP Server Message Handlers
===========================

Tool dispatcher: routes one invocation through name check, validation and
rendering, and funnels every failure through the error mapper.
"""

from typing import Any, Optional
from enum import Enum

from mcp.types import CallToolResult

from mcp_mermaid.config.logging import get_logger
from mcp_mermaid.core.errors import ErrorMapper, Failure, ProtocolError
from mcp_mermaid.core.orchestrator import RenderOrchestrator
from mcp_mermaid.core.validation import RequestValidator
from mcp_mermaid.mcp_server.tools import ToolRegistry
from mcp_mermaid.models.schemas import InvocationRequest

logger = get_logger(__name__)


class DispatchState(str, Enum):
    """Per-invocation dispatch states."""
    IDLE = "idle"
    NAME_CHECKED = "name_checked"
    VALIDATED = "validated"
    RENDERED = "rendered"
    RESPONDED = "responded"
    ERRORED = "errored"


class ToolDispatcher:
    """Top-level entry point for tool invocations.

    Holds no per-invocation state: every call to ``dispatch`` runs its own
    state machine, and an errored invocation leaves nothing behind for the
    next one.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        orchestrator: RenderOrchestrator,
        validator: Optional[RequestValidator] = None,
        error_mapper: Optional[ErrorMapper] = None,
    ) -> None:
        self.registry = registry
        self.orchestrator = orchestrator
        self.validator = validator or RequestValidator()
        self.error_mapper = error_mapper or ErrorMapper()
        self.logger: Any = logger.bind(component="tool_dispatcher")

    async def dispatch(self, request: InvocationRequest) -> CallToolResult:
        """
        Run one tool invocation.

        Args:
            request: Tool name and raw arguments

        Returns:
            CallToolResult with a single content item

        Raises:
            ProtocolError: InvalidParams, MethodNotFound or InternalError
        """
        log = self.logger.bind(tool=request.tool_name)
        self._transition(log, DispatchState.IDLE)

        if request.tool_name not in self.registry:
            raise self._fail(log, Failure.unknown_capability(request.tool_name))
        self._transition(log, DispatchState.NAME_CHECKED)

        validation = self.validator.validate(request.arguments)
        if not validation.success or validation.arguments is None:
            raise self._fail(log, Failure.schema_violation(validation.violations))
        self._transition(log, DispatchState.VALIDATED)

        try:
            response = await self.orchestrator.render(validation.arguments)
        except ProtocolError as e:
            raise self._fail(log, Failure.classified(e))
        except Exception as e:
            raise self._fail(log, Failure.raw(e)) from e
        self._transition(log, DispatchState.RENDERED)

        self._transition(log, DispatchState.RESPONDED)
        return response

    def _fail(self, log: Any, failure: Failure) -> ProtocolError:
        error = self.error_mapper.to_protocol_error(failure)
        self._transition(log, DispatchState.ERRORED)
        log.error(
            "Tool call failed",
            failure=failure.kind.value,
            code=error.code.value,
            error=error.message,
        )
        return error

    @staticmethod
    def _transition(log: Any, state: DispatchState) -> None:
        log.debug("Dispatch state", state=state.value)
