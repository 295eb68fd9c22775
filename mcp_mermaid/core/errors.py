"""
Protocol Errors
===============

Protocol error codes, the tagged ``Failure`` variant and the mapper that turns
any failure of a tool invocation into exactly one ``ProtocolError``.
"""

from typing import Any, Dict, Optional, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND

from mcp_mermaid.models.schemas import Violation


class ErrorCode(str, Enum):
    """Protocol error codes exposed to callers."""
    INVALID_PARAMS = "InvalidParams"
    METHOD_NOT_FOUND = "MethodNotFound"
    INTERNAL_ERROR = "InternalError"


JSONRPC_ERROR_CODES: Dict[ErrorCode, int] = {
    ErrorCode.INVALID_PARAMS: INVALID_PARAMS,
    ErrorCode.METHOD_NOT_FOUND: METHOD_NOT_FOUND,
    ErrorCode.INTERNAL_ERROR: INTERNAL_ERROR,
}

UNKNOWN_ERROR_MESSAGE = "Unknown error."


class ProtocolError(McpError):
    """Classified error returned to the caller.

    Subclasses ``McpError`` so the MCP server sends it as a JSON-RPC error
    with the matching numeric code.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(ErrorData(code=JSONRPC_ERROR_CODES[code], message=message))
        self.code = code
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Transport-neutral representation: ``{code, message}``."""
        return {"code": self.code.value, "message": self.message}


class FailureKind(str, Enum):
    """Origin of a failed invocation."""
    CLASSIFIED = "classified"
    SCHEMA_VIOLATION = "schema_violation"
    UNKNOWN_CAPABILITY = "unknown_capability"
    RAW = "raw"


@dataclass(frozen=True)
class Failure:
    """Tagged failure of a single invocation.

    Only the payload field matching ``kind`` is set.
    """

    kind: FailureKind
    error: Optional[ProtocolError] = None
    violations: Tuple[Violation, ...] = ()
    tool_name: Optional[str] = None
    exception: Optional[BaseException] = None

    @classmethod
    def classified(cls, error: ProtocolError) -> "Failure":
        return cls(kind=FailureKind.CLASSIFIED, error=error)

    @classmethod
    def schema_violation(cls, violations: Sequence[Violation]) -> "Failure":
        return cls(kind=FailureKind.SCHEMA_VIOLATION, violations=tuple(violations))

    @classmethod
    def unknown_capability(cls, tool_name: str) -> "Failure":
        return cls(kind=FailureKind.UNKNOWN_CAPABILITY, tool_name=tool_name)

    @classmethod
    def raw(cls, exception: BaseException) -> "Failure":
        return cls(kind=FailureKind.RAW, exception=exception)


def summarize_violations(violations: Sequence[Violation]) -> str:
    """Join violations into ``field: reason; field: reason``."""
    return "; ".join(f"{v.field}: {v.reason}" for v in violations)


class ErrorMapper:
    """Maps tagged failures onto protocol errors."""

    def to_protocol_error(self, failure: Failure) -> ProtocolError:
        """
        Convert a failure into a protocol error.

        Already classified errors are returned unchanged, so a specific code is
        never replaced by a generic one.

        Args:
            failure: Tagged failure of one invocation

        Returns:
            The protocol error to report
        """
        if failure.kind is FailureKind.CLASSIFIED and failure.error is not None:
            return failure.error
        elif failure.kind is FailureKind.SCHEMA_VIOLATION:
            return ProtocolError(
                ErrorCode.INVALID_PARAMS,
                f"Invalid parameters: {summarize_violations(failure.violations)}",
            )
        elif failure.kind is FailureKind.UNKNOWN_CAPABILITY:
            return ProtocolError(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {failure.tool_name}.")
        else:
            message = str(failure.exception) if failure.exception is not None else ""
            return ProtocolError(
                ErrorCode.INTERNAL_ERROR,
                f"Failed to generate mermaid: {message or UNKNOWN_ERROR_MESSAGE}",
            )
